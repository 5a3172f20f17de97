"""
Topic and pattern validator.
Enforces the wire syntax shared by published topics and subscription patterns.
"""

from topic_router.domain.errors import (
    PatternError,
    RoutingValidationError,
    TopicError,
    ValidationErrorKind,
)
from topic_router.domain.routing_config import RoutingConfig
from topic_router.domain.topic import (
    MULTI_WILDCARD,
    SEGMENT_RE,
    SEGMENT_SEPARATOR,
    SINGLE_WILDCARD,
    Pattern,
    Topic,
)

_DEFAULT_CONFIG = RoutingConfig()


class TopicValidator:
    """
    Validator for topics and patterns.

    Checks, in order:
    - Empty string
    - Length in UTF-8 bytes
    - Each segment, left to right (empty, wildcard placement, characters)
    - Segment count
    """

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self.config = config or _DEFAULT_CONFIG

    def validate_topic(self, raw: str) -> Topic:
        """
        Validate a concrete topic used for publishing.

        Args:
            raw: Topic string, e.g. "signal.email.received".

        Returns:
            The validated Topic.

        Raises:
            TopicError: If the topic is malformed. Wildcards are not allowed.
        """
        segments = self._check(raw, TopicError, allow_wildcards=False)
        return Topic(value=raw, segments=segments)

    def validate_pattern(self, raw: str) -> Pattern:
        """
        Validate a subscription pattern.

        A segment equal to exactly '*' or '**' is a wildcard; any other
        segment containing '*' is rejected.

        Args:
            raw: Pattern string, e.g. "signal.*.received" or "**".

        Returns:
            The validated Pattern.

        Raises:
            PatternError: If the pattern is malformed.
        """
        segments = self._check(raw, PatternError, allow_wildcards=True)
        return Pattern(value=raw, segments=segments)

    def _check(
        self,
        raw: str,
        error: type[RoutingValidationError],
        allow_wildcards: bool,
    ) -> tuple[str, ...]:
        if not raw:
            raise error(ValidationErrorKind.EMPTY, "", "cannot be empty")

        length = len(raw.encode("utf-8"))
        if length > self.config.max_topic_length:
            raise error(
                ValidationErrorKind.TOO_LONG,
                raw,
                f"length {length} exceeds maximum {self.config.max_topic_length}",
            )

        segments = tuple(raw.split(SEGMENT_SEPARATOR))
        for position, segment in enumerate(segments):
            if not segment:
                raise error(
                    ValidationErrorKind.INVALID_SEGMENT,
                    raw,
                    f"empty segment at position {position}",
                    segment=segment,
                    position=position,
                )
            if allow_wildcards and segment in (SINGLE_WILDCARD, MULTI_WILDCARD):
                continue
            if allow_wildcards and SINGLE_WILDCARD in segment:
                raise error(
                    ValidationErrorKind.WILDCARD_NOT_WHOLE_SEGMENT,
                    raw,
                    f"wildcard must be the whole segment, got '{segment}' at position {position}",
                    segment=segment,
                    position=position,
                )
            if SEGMENT_RE.fullmatch(segment) is None:
                raise error(
                    ValidationErrorKind.INVALID_SEGMENT,
                    raw,
                    f"segment '{segment}' at position {position} must match [A-Za-z0-9_-]+",
                    segment=segment,
                    position=position,
                )

        if len(segments) > self.config.max_segments:
            raise error(
                ValidationErrorKind.TOO_MANY_SEGMENTS,
                raw,
                f"{len(segments)} segments exceeds maximum {self.config.max_segments}",
            )

        return segments


def validate_topic(raw: str, config: RoutingConfig | None = None) -> Topic:
    """
    Validate a topic string.

    Args:
        raw: Topic string.
        config: Limits to apply. Defaults to RoutingConfig().

    Returns:
        The validated Topic.

    Raises:
        TopicError: If the topic is malformed.
    """
    return TopicValidator(config).validate_topic(raw)


def validate_pattern(raw: str, config: RoutingConfig | None = None) -> Pattern:
    """
    Validate a pattern string.

    Args:
        raw: Pattern string.
        config: Limits to apply. Defaults to RoutingConfig().

    Returns:
        The validated Pattern.

    Raises:
        PatternError: If the pattern is malformed.
    """
    return TopicValidator(config).validate_pattern(raw)
