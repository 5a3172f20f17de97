"""
Topic trie.

Indexes many subscription patterns at once so that routing a topic costs
time proportional to the topic's depth, not to the number of subscriptions.

Each node stands for one pattern segment position and owns:
- an exact-match child per literal segment
- at most one '*' child (matches exactly one segment)
- at most one '**' child (matches one or more segments)
- the ids of subscriptions whose pattern ends at this node

Lookup explores the exact child, the "*" child and the "**" child at each
position. A "**" edge is followed in two explicit branches: stop after the
segments consumed so far, or swallow one more segment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from topic_router.domain.errors import TrieInvariantError
from topic_router.domain.index_port import TopicIndexPort
from topic_router.domain.topic import MULTI_WILDCARD, SINGLE_WILDCARD, Pattern, Topic

from .rw_lock import ReadWriteLock

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class TrieNode:
    """A node in the topic trie."""

    children: dict[str, TrieNode] = field(default_factory=dict)
    single_wildcard: TrieNode | None = None
    multi_wildcard: TrieNode | None = None
    subscriptions: set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        """True if the node has no children and no terminal subscriptions."""
        return (
            not self.children
            and self.single_wildcard is None
            and self.multi_wildcard is None
            and not self.subscriptions
        )

    def child(self, segment: str) -> TrieNode | None:
        """Return the child reached by a pattern segment, if any."""
        if segment == SINGLE_WILDCARD:
            return self.single_wildcard
        if segment == MULTI_WILDCARD:
            return self.multi_wildcard
        return self.children.get(segment)

    def child_or_create(self, segment: str) -> TrieNode:
        """Return the child reached by a pattern segment, creating it if needed."""
        if segment == SINGLE_WILDCARD:
            if self.single_wildcard is None:
                self.single_wildcard = TrieNode()
            return self.single_wildcard
        if segment == MULTI_WILDCARD:
            if self.multi_wildcard is None:
                self.multi_wildcard = TrieNode()
            return self.multi_wildcard
        node = self.children.get(segment)
        if node is None:
            node = self.children[segment] = TrieNode()
        return node

    def detach(self, segment: str, node: TrieNode) -> None:
        """Unlink an empty child."""
        if self.child(segment) is not node:
            raise TrieInvariantError(f"Node for segment '{segment}' is not linked to its parent")
        if segment == SINGLE_WILDCARD:
            self.single_wildcard = None
        elif segment == MULTI_WILDCARD:
            self.multi_wildcard = None
        else:
            del self.children[segment]


@dataclass(slots=True)
class _LookupState:
    """Accumulator for one lookup walk."""

    segments: tuple[str, ...]
    matches: set[str] = field(default_factory=set)
    seen: set[tuple[int, int, bool]] = field(default_factory=set)


class TopicTrie(TopicIndexPort):
    """
    Thread-safe segment trie of subscription patterns.

    Lookups run concurrently under a shared lock; insert, remove, compact
    and clear take the lock exclusively, so a lookup never observes a
    partially inserted pattern.

    Example:
        trie = TopicTrie()
        trie.insert("sub_1", validate_pattern("signal.*"))
        trie.lookup(validate_topic("signal.email"))  # frozenset({'sub_1'})
        trie.remove("sub_1", validate_pattern("signal.*"))
    """

    def __init__(self, eager_pruning: bool = True) -> None:
        """
        Initialize the trie.

        Args:
            eager_pruning: Remove nodes left empty by every removal. When False,
                empty nodes stay until compact() is called.
        """
        self.eager_pruning = eager_pruning
        self._root = TrieNode()
        self._size = 0
        self._lock = ReadWriteLock()

    def insert(self, subscription_id: str, pattern: Pattern) -> bool:
        """
        Register a pattern for a subscription.

        Literal segments index into the exact-match map; '*' and '**' index
        into their dedicated child slots. The '**' skip logic lives in lookup.

        Args:
            subscription_id: Identifier of the subscription.
            pattern: Validated pattern.

        Returns:
            True if the entry was added, False if it was already present.
        """
        with self._lock.write_locked():
            node = self._root
            for segment in pattern.segments:
                node = node.child_or_create(segment)
            if subscription_id in node.subscriptions:
                return False
            node.subscriptions.add(subscription_id)
            self._size += 1
            return True

    def remove(self, subscription_id: str, pattern: Pattern) -> bool:
        """
        Unregister a pattern for a subscription and prune emptied nodes.

        Args:
            subscription_id: Identifier of the subscription.
            pattern: Validated pattern.

        Returns:
            True if the entry existed, False if it was never registered.
        """
        with self._lock.write_locked():
            path: list[tuple[TrieNode, str, TrieNode]] = []
            node = self._root
            for segment in pattern.segments:
                child = node.child(segment)
                if child is None:
                    return False
                path.append((node, segment, child))
                node = child

            if subscription_id not in node.subscriptions:
                return False
            node.subscriptions.discard(subscription_id)
            self._size -= 1

            if self.eager_pruning:
                for parent, segment, child in reversed(path):
                    if not child.is_empty():
                        break
                    parent.detach(segment, child)
            return True

    def lookup(self, topic: Topic) -> frozenset[str]:
        """
        Find every subscription whose pattern matches the topic.

        Args:
            topic: Validated concrete topic.

        Returns:
            Set of matching subscription ids.
        """
        with self._lock.read_locked():
            state = _LookupState(segments=topic.segments)
            self._collect(self._root, 0, state)
            return frozenset(state.matches)

    def lookup_cost(self, topic: Topic) -> int:
        """
        Count the (node, position) states a lookup of the topic explores.

        The count is bounded by the topic depth times the number of '**'
        edges on matching paths, independent of the total entry count.
        """
        with self._lock.read_locked():
            state = _LookupState(segments=topic.segments)
            self._collect(self._root, 0, state)
            return len(state.seen)

    def _collect(self, node: TrieNode, index: int, state: _LookupState) -> None:
        key = (id(node), index, False)
        if key in state.seen:
            return
        state.seen.add(key)

        segments = state.segments
        if index == len(segments):
            state.matches.update(node.subscriptions)
            return

        child = node.children.get(segments[index])
        if child is not None:
            self._collect(child, index + 1, state)

        if node.single_wildcard is not None:
            self._collect(node.single_wildcard, index + 1, state)

        if node.multi_wildcard is not None:
            # '**' must swallow at least the current segment
            self._collect_multi(node.multi_wildcard, index + 1, state)

    def _collect_multi(self, node: TrieNode, index: int, state: _LookupState) -> None:
        """Walk a node reached through '**' after it consumed segments up to index."""
        key = (id(node), index, True)
        if key in state.seen:
            return
        state.seen.add(key)

        # '**' stops here and the rest of the pattern continues from this node
        self._collect(node, index, state)

        # '**' also swallows the next segment
        if index < len(state.segments):
            self._collect_multi(node, index + 1, state)

    def __contains__(self, entry: object) -> bool:
        if not isinstance(entry, tuple) or len(entry) != 2:
            return False
        subscription_id, pattern = entry
        if not isinstance(pattern, Pattern):
            return False
        with self._lock.read_locked():
            node: TrieNode | None = self._root
            for segment in pattern.segments:
                node = node.child(segment) if node is not None else None
            return node is not None and subscription_id in node.subscriptions

    def __len__(self) -> int:
        with self._lock.read_locked():
            return self._size

    def node_count(self) -> int:
        """Number of nodes in the trie, including the root."""
        with self._lock.read_locked():
            count = 0
            stack = [self._root]
            while stack:
                node = stack.pop()
                count += 1
                stack.extend(_children_of(node))
            return count

    def compact(self) -> int:
        """
        Remove every empty node left behind by removals.

        Returns:
            Number of nodes removed.
        """
        with self._lock.write_locked():
            removed = self._sweep(self._root)
        if removed:
            logger.debug(f"Compacted topic trie, removed {removed} empty nodes")
        return removed

    def _sweep(self, node: TrieNode) -> int:
        removed = 0
        for segment, child in list(_edges_of(node)):
            removed += self._sweep(child)
            if child.is_empty():
                node.detach(segment, child)
                removed += 1
        return removed

    def clear(self) -> None:
        """Remove every entry and node."""
        with self._lock.write_locked():
            self._root = TrieNode()
            self._size = 0

    def check_invariants(self) -> None:
        """
        Verify the structural invariants of the trie.

        Raises:
            TrieInvariantError: If the entry count disagrees with the terminal
                sets, or eager pruning left an empty node behind.
        """
        with self._lock.read_locked():
            total = 0
            stack: list[tuple[TrieNode, bool]] = [(self._root, True)]
            while stack:
                node, is_root = stack.pop()
                total += len(node.subscriptions)
                if self.eager_pruning and not is_root and node.is_empty():
                    raise TrieInvariantError("Empty node survived eager pruning")
                stack.extend((child, False) for child in _children_of(node))
            if total != self._size:
                raise TrieInvariantError(
                    f"Entry count {self._size} does not match {total} terminal entries"
                )


def _edges_of(node: TrieNode) -> list[tuple[str, TrieNode]]:
    edges = list(node.children.items())
    if node.single_wildcard is not None:
        edges.append((SINGLE_WILDCARD, node.single_wildcard))
    if node.multi_wildcard is not None:
        edges.append((MULTI_WILDCARD, node.multi_wildcard))
    return edges


def _children_of(node: TrieNode) -> list[TrieNode]:
    return [child for _, child in _edges_of(node)]
