"""Tests for pairwise topic pattern matching."""

import pytest

from topic_router.domain.errors import PatternError, TopicError
from topic_router.domain.routing_config import RoutingConfig
from topic_router.domain.validator import validate_pattern, validate_topic
from topic_router.utils.subscription_id import new_subscription_id
from topic_router.utils.topic_matcher import get_matching_topics, matches, matches_any


class TestTopicMatcher:
    """Test topic pattern matching utilities."""

    def test_exact_match(self) -> None:
        """Test literal patterns match only the identical topic."""
        assert matches("signal.email", "signal.email")
        assert matches("signal", "signal")
        assert matches("signal.email.inbox.unread", "signal.email.inbox.unread")
        assert not matches("signal.email", "signal.slack")
        assert not matches("signal.email", "signal.email.received")
        assert not matches("signal.email.received", "signal.email")

    def test_match_single_level_wildcard(self) -> None:
        """Test * wildcard matches exactly one level."""
        assert matches("signal.email", "signal.*")
        assert not matches("signal.email.received", "signal.*")
        assert not matches("signal", "signal.*")
        assert matches("signal.email.received", "signal.*.received")
        assert matches("email.received", "*.received")

    def test_multiple_single_wildcards(self) -> None:
        """Test several * wildcards each consume one segment."""
        assert matches("signal.email.received", "*.*.*")
        assert not matches("signal.email", "*.*.*")

    def test_match_multi_level_wildcard(self) -> None:
        """Test ** wildcard matches one or more levels."""
        assert matches("signal.email", "signal.**")
        assert matches("signal.email.received", "signal.**")
        assert matches("signal.email.inbox.unread", "signal.**")
        assert not matches("other.topic", "signal.**")

    def test_multi_level_wildcard_requires_one_segment(self) -> None:
        """Test ** never matches zero segments."""
        assert not matches("signal", "signal.**")
        assert not matches("received", "**.received")
        assert not matches("signal.received", "signal.**.received")

    def test_multi_level_wildcard_leading_and_middle(self) -> None:
        """Test ** at the start or middle of a pattern."""
        assert matches("signal.email.received", "**.received")
        assert matches("signal.email.inbox.received", "signal.**.received")
        assert not matches("signal.email.inbox.sent", "signal.**.received")

    def test_multi_level_wildcard_alone(self) -> None:
        """Test a lone ** matches any topic."""
        assert matches("signal", "**")
        assert matches("signal.email", "**")
        assert matches("signal.email.received", "**")

    def test_multiple_multi_level_wildcards(self) -> None:
        """Test patterns with several ** segments."""
        assert matches("a.b", "**.**")
        assert not matches("a", "**.**")
        assert matches("a.inbox.b", "**.inbox.**")
        assert matches("a.b.inbox.c.d", "**.inbox.**")
        assert not matches("inbox.b", "**.inbox.**")
        assert not matches("a.inbox", "**.inbox.**")
        assert matches("a.x.b.y.c", "a.**.b.**.c")
        assert matches("a.x.b.b.y.c", "a.**.b.**.c")
        assert not matches("a.b.c", "a.**.b.**.c")

    def test_mixed_wildcards(self) -> None:
        """Test patterns mixing * and **."""
        assert matches("signal.slack.channel.message", "*.slack.**")
        assert not matches("signal.slack", "*.slack.**")
        assert matches("a.b.c", "*.**")
        assert not matches("a", "*.**")

    def test_accepts_validated_values(self) -> None:
        """Test that validated Topic and Pattern objects are accepted."""
        topic = validate_topic("signal.email")
        pattern = validate_pattern("signal.*")

        assert matches(topic, pattern)

    def test_invalid_input_raises(self) -> None:
        """Test that malformed raw strings raise typed errors."""
        with pytest.raises(TopicError):
            matches("signal..email", "signal.*")

        with pytest.raises(PatternError):
            matches("signal.email", "signal.*foo")

    def test_respects_config_limits(self) -> None:
        """Test that raw strings are validated with the given config."""
        with pytest.raises(TopicError):
            matches("a.b.c", "**", RoutingConfig(max_segments=2))

    def test_matches_any(self) -> None:
        """Test matching a topic against a list of patterns."""
        patterns = ["signal.*", "action.*"]

        assert matches_any("signal.email", patterns)
        assert matches_any("action.send", patterns)
        assert not matches_any("other.topic", patterns)
        assert not matches_any("signal.email", [])

    def test_get_matching_topics(self) -> None:
        """Test getting all matching topics from a set."""
        topics = {
            "data.pipeline",
            "data.warehouse",
            "data.pipeline.ingestion",
            "analytics.report",
        }

        assert get_matching_topics("data.*", topics) == {
            "data.pipeline",
            "data.warehouse",
        }

        assert get_matching_topics("data.**", topics) == {
            "data.pipeline",
            "data.warehouse",
            "data.pipeline.ingestion",
        }

        assert get_matching_topics("*.pipeline", topics) == {"data.pipeline"}

        assert get_matching_topics("**", topics) == topics


class TestSubscriptionId:
    """Test subscription id generation."""

    def test_prefix_and_uniqueness(self) -> None:
        """Test that ids are prefixed and unique."""
        ids = {new_subscription_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(i.startswith("sub_") for i in ids)

    def test_ids_are_time_ordered(self) -> None:
        """Test that uuid7-based ids sort in creation order."""
        first = new_subscription_id()
        second = new_subscription_id()

        assert first < second
