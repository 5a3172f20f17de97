"""
Validation error taxonomy for topics and patterns.
Malformed input is always reported as a typed exception, never a crash.
"""

from enum import StrEnum, auto


class ValidationErrorKind(StrEnum):
    """Reason a topic or pattern string was rejected.

    Attributes:
        EMPTY: The string is empty
        TOO_LONG: The UTF-8 encoded string exceeds the length limit
        INVALID_SEGMENT: A segment is empty or has characters outside [A-Za-z0-9_-]
        TOO_MANY_SEGMENTS: The segment count exceeds the configured maximum
        WILDCARD_NOT_WHOLE_SEGMENT: A '*' shares its segment with other characters
    """

    EMPTY = auto()
    TOO_LONG = auto()
    INVALID_SEGMENT = auto()
    TOO_MANY_SEGMENTS = auto()
    WILDCARD_NOT_WHOLE_SEGMENT = auto()


class RoutingValidationError(ValueError):
    """
    Base class for topic and pattern validation failures.

    Attributes:
        kind: Why the value was rejected.
        value: The raw string that was rejected.
        segment: The offending segment, if the failure is segment specific.
        position: Zero-based index of the offending segment, if any.
    """

    subject = "value"

    def __init__(
        self,
        kind: ValidationErrorKind,
        value: str,
        message: str,
        segment: str | None = None,
        position: int | None = None,
    ) -> None:
        super().__init__(f"Invalid {self.subject} '{value}': {message}")
        self.kind = kind
        self.value = value
        self.segment = segment
        self.position = position
        self.reason = message

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert to dictionary for serialization."""
        return {
            "kind": str(self.kind),
            "message": str(self),
            "segment": self.segment,
            "position": self.position,
        }


class TopicError(RoutingValidationError):
    """A concrete (publish) topic failed validation."""

    subject = "topic"


class PatternError(RoutingValidationError):
    """A subscription pattern failed validation."""

    subject = "pattern"


class TrieInvariantError(AssertionError):
    """The topic index reached a state insert/remove can never produce."""
