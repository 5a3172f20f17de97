"""
Topic router.
Public entry point combining validation, the topic trie and the pairwise matcher.
"""

import logging
import threading
from collections.abc import Iterable

from topic_router.domain.errors import PatternError, TopicError
from topic_router.domain.index_port import TopicIndexPort
from topic_router.domain.routing_config import RoutingConfig
from topic_router.domain.topic import Pattern, Topic
from topic_router.domain.validator import TopicValidator
from topic_router.utils.topic_matcher import matches as pairwise_matches

from .topic_trie import TopicTrie

logger = logging.getLogger(__name__)


class TopicRouter:
    """
    Routing facade for one message bus deployment.

    Owns the topic index and the limits used to validate input. Construct one
    instance per deployment and share it by reference with every caller.

    Example:
        router = TopicRouter()

        router.subscribe("sub_1", "signal.email.*")
        router.subscribe("sub_2", "signal.slack.**")

        router.route("signal.email.sent")  # ['sub_1']

        router.unsubscribe("sub_1", "signal.email.*")
    """

    def __init__(
        self,
        config: RoutingConfig | None = None,
        index: TopicIndexPort | None = None,
    ) -> None:
        """
        Initialize the router.

        Args:
            config: Validation limits and pruning policy. Defaults to RoutingConfig().
            index: Index to route through. Defaults to a TopicTrie built from config.
        """
        self.config = config or RoutingConfig()
        self.validator = TopicValidator(self.config)
        self.index = index if index is not None else TopicTrie(self.config.eager_pruning)
        self._patterns: dict[str, set[Pattern]] = {}
        # Taken before the index's own lock, never the other way around
        self._registry_lock = threading.Lock()

    def validate_topic(self, raw: str) -> Topic:
        """Validate a topic with this router's limits. Raises TopicError."""
        return self.validator.validate_topic(raw)

    def validate_pattern(self, raw: str) -> Pattern:
        """Validate a pattern with this router's limits. Raises PatternError."""
        return self.validator.validate_pattern(raw)

    def subscribe(self, subscription_id: str, pattern: str) -> None:
        """
        Validate a pattern and register it for a subscription.

        Registering the same (subscription_id, pattern) twice is a no-op.

        Args:
            subscription_id: Identifier owned by the subscription manager.
            pattern: Pattern string, e.g. "signal.*.received".

        Raises:
            PatternError: If the pattern is malformed.
        """
        self.subscribe_many(subscription_id, [pattern])

    def subscribe_many(self, subscription_id: str, patterns: Iterable[str]) -> None:
        """
        Validate every pattern, then register them all for a subscription.

        Nothing is registered if any pattern is malformed.

        Args:
            subscription_id: Identifier owned by the subscription manager.
            patterns: Pattern strings.

        Raises:
            ValueError: If subscription_id is empty.
            PatternError: If any pattern is malformed.
        """
        if not subscription_id:
            raise ValueError("Subscription id cannot be empty")

        try:
            validated = [self.validator.validate_pattern(raw) for raw in patterns]
        except PatternError as e:
            logger.warning(f"Rejected subscription '{subscription_id}': {e}")
            raise

        with self._registry_lock:
            added = 0
            for pattern in validated:
                if self.index.insert(subscription_id, pattern):
                    added += 1
                self._patterns.setdefault(subscription_id, set()).add(pattern)

        if added:
            logger.info(
                f"Subscribed '{subscription_id}' to {added} pattern(s): "
                f"{[p.value for p in validated]}"
            )
        else:
            logger.debug(f"Subscription '{subscription_id}' already registered for {validated}")

    def unsubscribe(self, subscription_id: str, pattern: str) -> bool:
        """
        Validate a pattern and unregister it for a subscription.

        Unregistering a pattern that was never registered is a no-op.

        Args:
            subscription_id: Identifier owned by the subscription manager.
            pattern: Pattern string.

        Returns:
            True if the pattern was registered for the subscription.

        Raises:
            PatternError: If the pattern is malformed.
        """
        validated = self.validator.validate_pattern(pattern)

        with self._registry_lock:
            removed = self.index.remove(subscription_id, validated)
            registered = self._patterns.get(subscription_id)
            if registered is not None:
                registered.discard(validated)
                if not registered:
                    del self._patterns[subscription_id]

        if removed:
            logger.info(f"Unsubscribed '{subscription_id}' from '{validated.value}'")
        else:
            logger.debug(f"Subscription '{subscription_id}' was not registered for '{pattern}'")
        return removed

    def unsubscribe_all(self, subscription_id: str) -> int:
        """
        Unregister every pattern of a subscription.

        Args:
            subscription_id: Identifier owned by the subscription manager.

        Returns:
            Number of patterns removed.
        """
        with self._registry_lock:
            patterns = self._patterns.pop(subscription_id, set())
            removed = sum(1 for pattern in patterns if self.index.remove(subscription_id, pattern))

        if removed:
            logger.info(f"Unsubscribed '{subscription_id}' from all {removed} pattern(s)")
        return removed

    def route(self, topic: str) -> list[str]:
        """
        Validate a topic and return the subscriptions it should be delivered to.

        Args:
            topic: Published topic string, e.g. "signal.email.sent".

        Returns:
            Sorted list of matching subscription ids.

        Raises:
            TopicError: If the topic is malformed.
        """
        return sorted(self.route_set(topic))

    def route_set(self, topic: str) -> frozenset[str]:
        """Like route(), but returns the unordered set of subscription ids."""
        try:
            validated = self.validator.validate_topic(topic)
        except TopicError as e:
            logger.warning(f"Rejected publish: {e}")
            raise

        subscription_ids = self.index.lookup(validated)
        logger.debug(f"Routed '{topic}' to {len(subscription_ids)} subscription(s)")
        return subscription_ids

    def matches(self, topic: str, pattern: str) -> bool:
        """
        Check one topic against one pattern without registering anything.

        Raises:
            TopicError: If the topic is malformed.
            PatternError: If the pattern is malformed.
        """
        return pairwise_matches(topic, pattern, self.config)

    def patterns_for(self, subscription_id: str) -> frozenset[Pattern]:
        """Return the patterns registered for a subscription."""
        with self._registry_lock:
            return frozenset(self._patterns.get(subscription_id, ()))

    def compact(self) -> int:
        """
        Remove empty index nodes left by removals when eager pruning is off.

        Returns:
            Number of nodes removed.
        """
        return self.index.compact()

    @property
    def subscription_count(self) -> int:
        """Number of distinct subscription ids with at least one pattern."""
        with self._registry_lock:
            return len(self._patterns)

    def __len__(self) -> int:
        return self.subscription_count

    def __contains__(self, subscription_id: object) -> bool:
        with self._registry_lock:
            return subscription_id in self._patterns
