"""Pytest configuration and shared fixtures."""

import pytest

from topic_router.domain.routing_config import RoutingConfig
from topic_router.infrastructure.topic_router import TopicRouter
from topic_router.infrastructure.topic_trie import TopicTrie

# Topics and patterns used across the matcher, trie and router tests
SAMPLE_TOPICS = [
    "signal",
    "signal.email",
    "signal.slack",
    "signal.email.received",
    "signal.email.sent",
    "signal.slack.received",
    "signal.email.inbox.unread",
    "signal.email.inbox.received",
    "action.slack.send",
    "system.health",
]

SAMPLE_PATTERNS = [
    "signal",
    "signal.email",
    "signal.*",
    "signal.**",
    "signal.email.*",
    "signal.*.received",
    "signal.**.received",
    "**.received",
    "**",
    "*.*.*",
    "*.slack.**",
    "**.inbox.**",
    "signal.**.**",
    "action.slack.send",
]


@pytest.fixture
def config() -> RoutingConfig:
    """Return the default routing configuration."""
    return RoutingConfig()


@pytest.fixture
def trie() -> TopicTrie:
    """Create an empty topic trie."""
    return TopicTrie()


@pytest.fixture
def lazy_trie() -> TopicTrie:
    """Create an empty topic trie that only prunes on compact()."""
    return TopicTrie(eager_pruning=False)


@pytest.fixture
def router(config: RoutingConfig) -> TopicRouter:
    """Create a topic router with the default configuration."""
    return TopicRouter(config)
