"""
Property-based tests for the trie index.

The trie must agree with the pairwise matcher for every topic and pattern,
after any sequence of inserts and removes.
"""

from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.stateful import Bundle, RuleBasedStateMachine, invariant, rule

from topic_router.domain.topic import Pattern, Topic
from topic_router.domain.validator import validate_pattern, validate_topic
from topic_router.infrastructure.topic_trie import TopicTrie
from topic_router.utils.topic_matcher import matches

# A small alphabet keeps collisions between topics and patterns likely
LITERALS = ["a", "b", "c", "signal", "email"]


@st.composite
def topics(draw: st.DrawFn, max_segments: int = 6) -> Topic:
    """Generate a valid concrete topic."""
    segments = draw(st.lists(st.sampled_from(LITERALS), min_size=1, max_size=max_segments))
    return validate_topic(".".join(segments))


@st.composite
def patterns(draw: st.DrawFn, max_segments: int = 5) -> Pattern:
    """Generate a valid pattern, possibly with several wildcards."""
    segments = draw(
        st.lists(
            st.sampled_from([*LITERALS, "*", "**"]),
            min_size=1,
            max_size=max_segments,
        )
    )
    return validate_pattern(".".join(segments))


subscription_ids = st.sampled_from([f"sub_{i}" for i in range(6)])


def _snapshot(trie: TopicTrie, probe: list[Topic]) -> list[frozenset[str]]:
    return [trie.lookup(topic) for topic in probe]


class TestTrieProperties:
    """Property tests for equivalence, idempotence and round-trip."""

    @given(st.lists(st.tuples(subscription_ids, patterns()), max_size=20), topics())
    @settings(max_examples=300, deadline=None)
    def test_lookup_equivalent_to_pairwise(
        self, entries: list[tuple[str, Pattern]], topic: Topic
    ) -> None:
        """Property: lookup(T) contains id iff some pattern of id matches T."""
        trie = TopicTrie()
        for subscription_id, pattern in entries:
            trie.insert(subscription_id, pattern)

        expected = {
            subscription_id for subscription_id, pattern in entries if matches(topic, pattern)
        }
        assert trie.lookup(topic) == expected

    @given(
        st.lists(st.tuples(subscription_ids, patterns()), max_size=10),
        subscription_ids,
        patterns(),
        st.lists(topics(), min_size=1, max_size=10),
    )
    @settings(deadline=None)
    def test_insert_idempotent(
        self,
        entries: list[tuple[str, Pattern]],
        subscription_id: str,
        pattern: Pattern,
        probe: list[Topic],
    ) -> None:
        """Property: inserting twice is observably the same as inserting once."""
        once = TopicTrie()
        twice = TopicTrie()
        for trie in (once, twice):
            for entry_id, entry_pattern in entries:
                trie.insert(entry_id, entry_pattern)

        once.insert(subscription_id, pattern)
        twice.insert(subscription_id, pattern)
        twice.insert(subscription_id, pattern)

        assert _snapshot(once, probe) == _snapshot(twice, probe)
        assert len(once) == len(twice)
        assert once.node_count() == twice.node_count()

    @given(
        st.lists(st.tuples(subscription_ids, patterns()), max_size=10),
        patterns(),
        st.lists(topics(), min_size=1, max_size=10),
    )
    @settings(deadline=None)
    def test_insert_remove_round_trip(
        self,
        entries: list[tuple[str, Pattern]],
        pattern: Pattern,
        probe: list[Topic],
    ) -> None:
        """Property: remove(id, p) after insert(id, p) restores prior lookups."""
        trie = TopicTrie()
        for entry_id, entry_pattern in entries:
            trie.insert(entry_id, entry_pattern)
        before = _snapshot(trie, probe)
        nodes_before = trie.node_count()

        trie.insert("fresh", pattern)
        trie.remove("fresh", pattern)

        assert _snapshot(trie, probe) == before
        assert trie.node_count() == nodes_before
        trie.check_invariants()

    @given(topics(), patterns())
    @settings(max_examples=500, deadline=None)
    def test_single_pattern_agreement(self, topic: Topic, pattern: Pattern) -> None:
        """Property: a one-entry trie routes exactly like matches()."""
        trie = TopicTrie()
        trie.insert("only", pattern)

        assert ("only" in trie.lookup(topic)) == matches(topic, pattern)


class TrieStateMachine(RuleBasedStateMachine):
    """Interleaved inserts and removes checked against a plain model."""

    entries = Bundle("entries")

    def __init__(self) -> None:
        super().__init__()
        self.trie = TopicTrie()
        self.model: set[tuple[str, Pattern]] = set()

    @rule(target=entries, subscription_id=subscription_ids, pattern=patterns())
    def insert(self, subscription_id: str, pattern: Pattern) -> tuple[str, Pattern]:
        added = self.trie.insert(subscription_id, pattern)
        assert added == ((subscription_id, pattern) not in self.model)
        self.model.add((subscription_id, pattern))
        return subscription_id, pattern

    @rule(entry=entries)
    def remove(self, entry: tuple[str, Pattern]) -> None:
        removed = self.trie.remove(*entry)
        assert removed == (entry in self.model)
        self.model.discard(entry)

    @rule(subscription_id=subscription_ids, pattern=patterns())
    def remove_unregistered(self, subscription_id: str, pattern: Pattern) -> None:
        if (subscription_id, pattern) not in self.model:
            assert self.trie.remove(subscription_id, pattern) is False

    @rule(topic=topics())
    def lookup_matches_model(self, topic: Topic) -> None:
        expected = {sub_id for sub_id, pattern in self.model if matches(topic, pattern)}
        assert self.trie.lookup(topic) == expected

    @invariant()
    def size_matches_model(self) -> None:
        assert len(self.trie) == len(self.model)

    @invariant()
    def structure_is_pruned(self) -> None:
        self.trie.check_invariants()
        if not self.model:
            assert self.trie.node_count() == 1


TestTrieStateMachine = TrieStateMachine.TestCase
TestTrieStateMachine.settings = settings(max_examples=100, stateful_step_count=40, deadline=None)
