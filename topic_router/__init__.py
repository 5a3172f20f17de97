"""Topic-based subscription routing for a publish/subscribe message bus."""

from topic_router.domain import (
    Pattern,
    PatternError,
    RoutingConfig,
    RoutingValidationError,
    Topic,
    TopicError,
    TopicIndexPort,
    TopicValidator,
    TrieInvariantError,
    ValidationErrorKind,
    validate_pattern,
    validate_topic,
)
from topic_router.infrastructure import ReadWriteLock, TopicRouter, TopicTrie
from topic_router.utils import get_matching_topics, matches, matches_any, new_subscription_id

__all__ = [
    # Domain
    "Pattern",
    "Topic",
    "RoutingConfig",
    "TopicIndexPort",
    "TopicValidator",
    "validate_pattern",
    "validate_topic",
    # Errors
    "PatternError",
    "RoutingValidationError",
    "TopicError",
    "TrieInvariantError",
    "ValidationErrorKind",
    # Infrastructure
    "ReadWriteLock",
    "TopicRouter",
    "TopicTrie",
    # Utilities
    "get_matching_topics",
    "matches",
    "matches_any",
    "new_subscription_id",
]
