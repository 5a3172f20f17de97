"""Infrastructure layer exports."""

from .rw_lock import ReadWriteLock
from .topic_router import TopicRouter
from .topic_trie import TopicTrie, TrieNode

__all__ = [
    "ReadWriteLock",
    "TopicRouter",
    "TopicTrie",
    "TrieNode",
]
