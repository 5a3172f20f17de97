from abc import ABC, abstractmethod

from .topic import Pattern, Topic


class TopicIndexPort(ABC):
    """
    An abstract port for a subscription index.
    It defines the interface for registering patterns and routing topics.
    """

    @abstractmethod
    def insert(self, subscription_id: str, pattern: Pattern) -> bool:
        """
        Registers a pattern for a subscription.

        This operation is idempotent - registering the same
        (subscription_id, pattern) pair twice has no further effect.

        Args:
            subscription_id: Identifier of the subscription.
            pattern: Validated pattern to register.

        Returns:
            True if the entry was added, False if it was already present.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, subscription_id: str, pattern: Pattern) -> bool:
        """
        Unregisters a pattern for a subscription.

        Removing an entry that was never registered is a no-op.

        Args:
            subscription_id: Identifier of the subscription.
            pattern: Validated pattern to unregister.

        Returns:
            True if the entry existed and was removed, False otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def lookup(self, topic: Topic) -> frozenset[str]:
        """
        Returns the ids of all subscriptions whose pattern matches the topic.

        Args:
            topic: Validated concrete topic.

        Returns:
            Set of matching subscription ids.
        """
        raise NotImplementedError

    def compact(self) -> int:
        """
        Removes empty internal structure left behind by removals.

        Returns:
            Number of internal nodes removed. Indexes without such structure return 0.
        """
        return 0

    @abstractmethod
    def clear(self) -> None:
        """Removes every entry from the index."""
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        """Returns the number of (subscription_id, pattern) entries."""
        raise NotImplementedError
