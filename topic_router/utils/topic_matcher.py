"""Pairwise topic pattern matching for one-off checks and as a reference for the trie."""

from collections.abc import Iterable

from topic_router.domain.routing_config import RoutingConfig
from topic_router.domain.topic import MULTI_WILDCARD, SINGLE_WILDCARD, Pattern, Topic
from topic_router.domain.validator import TopicValidator


def matches(
    topic: Topic | str,
    pattern: Pattern | str,
    config: RoutingConfig | None = None,
) -> bool:
    """
    Check if a topic matches a pattern.

    Supports wildcards:
    - * matches exactly one segment
    - ** matches one or more consecutive segments

    Raw strings are validated first. The recursion is exponential in the
    number of '**' segments; use TopicTrie for routing against many patterns.

    Args:
        topic: Concrete topic, validated or raw.
        pattern: Subscription pattern, validated or raw.
        config: Limits used to validate raw strings.

    Returns:
        True if the topic matches the pattern, False otherwise.

    Raises:
        TopicError: If a raw topic is malformed.
        PatternError: If a raw pattern is malformed.

    Examples:
        >>> matches("signal.email", "signal.*")
        True
        >>> matches("signal.email.received", "signal.*")
        False
        >>> matches("signal.email.inbox.unread", "signal.**")
        True
        >>> matches("signal", "signal.**")
        False
    """
    validator = TopicValidator(config)
    if isinstance(topic, str):
        topic = validator.validate_topic(topic)
    if isinstance(pattern, str):
        pattern = validator.validate_pattern(pattern)
    return _match_segments(topic.segments, pattern.segments, 0, 0, False)


def _match_segments(
    topic: tuple[str, ...],
    pattern: tuple[str, ...],
    ti: int,
    pi: int,
    multi_consumed: bool,
) -> bool:
    """
    Recursive segment matching.

    multi_consumed is True while the '**' at pattern[pi] has already
    swallowed at least one topic segment.
    """
    if pi == len(pattern):
        return ti == len(topic)

    head = pattern[pi]
    if head == MULTI_WILDCARD:
        if ti < len(topic) and _match_segments(topic, pattern, ti + 1, pi, True):
            return True
        # '**' may only end once it has swallowed a segment
        return multi_consumed and _match_segments(topic, pattern, ti, pi + 1, False)

    if ti == len(topic):
        return False

    if head == SINGLE_WILDCARD or head == topic[ti]:
        return _match_segments(topic, pattern, ti + 1, pi + 1, False)

    return False


def matches_any(
    topic: Topic | str,
    patterns: Iterable[Pattern | str],
    config: RoutingConfig | None = None,
) -> bool:
    """
    Check if a topic matches at least one of the patterns.

    Args:
        topic: Concrete topic, validated or raw.
        patterns: Patterns to try, validated or raw.
        config: Limits used to validate raw strings.

    Returns:
        True if any pattern matches. False for an empty pattern list.

    Examples:
        >>> matches_any("action.send", ["signal.*", "action.*"])
        True
        >>> matches_any("other.topic", [])
        False
    """
    if isinstance(topic, str):
        topic = TopicValidator(config).validate_topic(topic)
    return any(matches(topic, pattern, config) for pattern in patterns)


def get_matching_topics(
    pattern: Pattern | str,
    available_topics: set[str],
    config: RoutingConfig | None = None,
) -> set[str]:
    """
    Get all topics that match the given pattern.

    Args:
        pattern: Topic pattern with wildcards.
        available_topics: Set of concrete topic names.
        config: Limits used to validate raw strings.

    Returns:
        Set of topic names that match the pattern.

    Examples:
        >>> topics = {"data.pipeline", "data.warehouse", "data.pipeline.ingestion"}
        >>> sorted(get_matching_topics("data.*", topics))
        ['data.pipeline', 'data.warehouse']
        >>> sorted(get_matching_topics("data.**", topics))
        ['data.pipeline', 'data.pipeline.ingestion', 'data.warehouse']
    """
    if isinstance(pattern, str):
        pattern = TopicValidator(config).validate_pattern(pattern)
    return {topic for topic in available_topics if matches(topic, pattern, config)}
