"""
Topic and pattern value objects.

Topics and patterns are dot-separated segment strings:
  <segment>.<segment>.<segment>

Patterns may additionally use whole-segment wildcards:
  *  - matches exactly one segment
  ** - matches one or more consecutive segments

Instances are produced by the validator and are immutable.
"""

import re
from dataclasses import dataclass, field
from typing import ClassVar

SEGMENT_SEPARATOR = "."
SINGLE_WILDCARD = "*"
MULTI_WILDCARD = "**"

DEFAULT_MAX_TOPIC_LENGTH = 255
DEFAULT_MAX_SEGMENTS = 10

SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class Topic:
    """
    A validated, wildcard-free topic a message is published to.

    Attributes:
        value: The raw topic string, e.g. "signal.email.received".
        segments: The topic split on '.'.
    """

    value: str
    segments: tuple[str, ...] = field(compare=False, repr=False)

    @property
    def depth(self) -> int:
        """Number of segments in the topic."""
        return len(self.segments)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Pattern:
    """
    A validated subscription pattern, possibly containing wildcard segments.

    Attributes:
        value: The raw pattern string, e.g. "signal.*.received".
        segments: The pattern split on '.'.
    """

    value: str
    segments: tuple[str, ...] = field(compare=False, repr=False)

    WILDCARD_SINGLE: ClassVar[str] = SINGLE_WILDCARD
    WILDCARD_MULTI: ClassVar[str] = MULTI_WILDCARD

    @property
    def depth(self) -> int:
        """Number of segments in the pattern."""
        return len(self.segments)

    @property
    def is_literal(self) -> bool:
        """True if the pattern has no wildcard segments."""
        return not any(
            segment in (SINGLE_WILDCARD, MULTI_WILDCARD) for segment in self.segments
        )

    @property
    def multi_wildcard_count(self) -> int:
        """Number of '**' segments in the pattern."""
        return self.segments.count(MULTI_WILDCARD)

    def __str__(self) -> str:
        return self.value
