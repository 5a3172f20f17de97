"""Domain layer exports."""

from .errors import (
    PatternError,
    RoutingValidationError,
    TopicError,
    TrieInvariantError,
    ValidationErrorKind,
)
from .index_port import TopicIndexPort
from .routing_config import RoutingConfig
from .topic import (
    DEFAULT_MAX_SEGMENTS,
    DEFAULT_MAX_TOPIC_LENGTH,
    MULTI_WILDCARD,
    SEGMENT_SEPARATOR,
    SINGLE_WILDCARD,
    Pattern,
    Topic,
)
from .validator import TopicValidator, validate_pattern, validate_topic

__all__ = [
    "DEFAULT_MAX_SEGMENTS",
    "DEFAULT_MAX_TOPIC_LENGTH",
    "MULTI_WILDCARD",
    "SEGMENT_SEPARATOR",
    "SINGLE_WILDCARD",
    "Pattern",
    "PatternError",
    "RoutingConfig",
    "RoutingValidationError",
    "Topic",
    "TopicError",
    "TopicIndexPort",
    "TopicValidator",
    "TrieInvariantError",
    "ValidationErrorKind",
    "validate_pattern",
    "validate_topic",
]
