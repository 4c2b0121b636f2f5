"""Tests for dynamic_ati.index.ValueInteractionIndex."""

import random
import threading

import pytest

from dynamic_ati.exceptions import UnknownTagError
from dynamic_ati.index import ValueInteractionIndex
from dynamic_ati.tags import Tag


class TestIntroduction:
    """Registering tags."""

    def test_introduce_returns_same_tag(self, index, tags):
        tag = tags.mint(1)
        assert index.introduce(tag) is tag

    def test_idempotent(self, index, introduced):
        """Introducing twice leaves class count and membership unchanged."""
        a, b, c = introduced(3)
        index.union(a, b)
        count = index.class_count()
        size = len(index)

        index.introduce(a)
        index.introduce(c)

        assert index.class_count() == count
        assert len(index) == size
        assert index.same_class(a, b)
        assert not index.same_class(a, c)


class TestMonotonicity:
    """Once merged, always merged."""

    def test_union_persists_through_unrelated_unions(self, index, introduced):
        a, b, c, d, e, f = introduced(6)
        index.union(a, b)
        index.union(c, d)
        index.union(e, f)
        index.union(d, f)
        assert index.find(a) == index.find(b)
        assert not index.same_class(a, c)

    def test_random_unions_never_split(self, index, introduced):
        tags = introduced(50)
        rng = random.Random(1234)
        merged = []
        for _ in range(100):
            x, y = rng.sample(tags, 2)
            index.union(x, y)
            merged.append((x, y))
            for p, q in merged:
                assert index.find(p) == index.find(q)


class TestUnionChain:
    """Recording an interaction among several values."""

    def test_chain_merges_all(self, index, introduced):
        a, b, c, d = introduced(4)
        index.union_chain([a, b, c])
        assert index.same_class(a, c)
        assert not index.same_class(a, d)

    def test_chain_equivalent_to_all_pairs(self, introduced, tags):
        chained = ValueInteractionIndex()
        pairwise = ValueInteractionIndex()
        group = [tags.mint(i) for i in range(5)]
        for tag in group:
            chained.introduce(tag)
            pairwise.introduce(tag)

        chained.union_chain(group)
        for i, x in enumerate(group):
            for y in group[i + 1:]:
                pairwise.union(x, y)

        for x in group:
            for y in group:
                assert chained.same_class(x, y) == pairwise.same_class(x, y)

    def test_short_chains_are_noops(self, index, introduced):
        (a,) = introduced(1)
        index.union_chain([])
        index.union_chain([a])
        assert index.class_count() == 1

    def test_unknown_tag_leaves_index_unchanged(self, index, introduced):
        """A chain containing an unknown tag fails before merging anything."""
        a, b = introduced(2)
        with pytest.raises(UnknownTagError):
            index.union_chain([a, b, Tag(10_000)])
        assert not index.same_class(a, b)
        assert index.class_count() == 2


class TestLookups:
    """find / resolve / union failures."""

    def test_find_unknown_raises(self, index):
        with pytest.raises(UnknownTagError):
            index.find(Tag(1))

    def test_union_unknown_raises(self, index, introduced):
        (a,) = introduced(1)
        with pytest.raises(UnknownTagError):
            index.union(Tag(999), a)

    def test_resolve_preserves_order(self, index, introduced):
        a, b, c = introduced(3)
        leader = index.union(a, b)
        assert index.resolve([c, a, b]) == [c, leader, leader]

    def test_contains(self, index, introduced):
        (a,) = introduced(1)
        assert a in index
        assert Tag(12345) not in index


class TestConcurrency:
    """Concurrent unions from several threads."""

    def test_parallel_chains_converge(self, index, tags):
        group = [index.introduce(tags.mint(i)) for i in range(400)]
        errors = []

        def worker(offset):
            try:
                for i in range(offset, len(group) - 1, 4):
                    index.union_chain([group[i], group[i + 1]])
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert index.class_count() == 1


@pytest.mark.slow
class TestLargePartitions:
    """Agreement with a naive partition over many tags."""

    def test_matches_naive_partition(self, index, tags):
        group = [index.introduce(tags.mint(i)) for i in range(2_000)]
        label = {tag: n for n, tag in enumerate(group)}
        rng = random.Random(99)

        for _ in range(3_000):
            x, y = rng.sample(group, 2)
            index.union(x, y)
            old, new = label[y], label[x]
            if old != new:
                for tag, lbl in label.items():
                    if lbl == old:
                        label[tag] = new

        assert index.class_count() == len(set(label.values()))
        for _ in range(20_000):
            x, y = rng.sample(group, 2)
            assert index.same_class(x, y) == (label[x] == label[y])
