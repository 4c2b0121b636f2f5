"""Tests for dynamic_ati.site.AnalysisSite."""

import itertools

import pytest

from dynamic_ati.exceptions import UnknownTagError
from dynamic_ati.index import ValueInteractionIndex
from dynamic_ati.site import AnalysisSite
from dynamic_ati.tags import Tag, TagFactory


class TestObserve:
    """Recording observations."""

    def test_observe_only_appends(self):
        """Observing an unknown tag does nothing until commit."""
        site = AnalysisSite("f")
        site.observe("x", Tag(1))
        assert site.pending == (("x", Tag(1)),)
        assert site.classes() == {}

    def test_commit_clears_pending(self, index, introduced):
        (a,) = introduced(1)
        site = AnalysisSite("f")
        site.observe("x", a)
        assert site.commit(index) == 1
        assert site.pending == ()
        assert site.commit_count == 1

    def test_discard_pending(self, introduced):
        a, b = introduced(2)
        site = AnalysisSite("f")
        site.observe("x", a)
        site.observe("y", b)
        assert site.discard_pending() == 2
        assert site.pending == ()


class TestCommit:
    """Folding observations into type classes."""

    def test_interacting_values_share_class(self, index, introduced):
        a, b, c = introduced(3)
        index.union(a, b)
        site = AnalysisSite("f")
        site.observe("x", a)
        site.observe("y", b)
        site.observe("z", c)
        site.commit(index)

        classes = site.classes()
        assert classes["x"] == classes["y"]
        assert classes["x"] != classes["z"]
        assert site.groups() == [["x", "y"], ["z"]]

    def test_class_is_global_leader(self, index, introduced):
        a, b = introduced(2)
        leader = index.union(a, b)
        site = AnalysisSite("f")
        site.observe("x", b)
        site.commit(index)
        assert site.classes()["x"] == leader

    def test_rebinding_in_one_commit_merges(self, index, introduced):
        """A variable bound twice joins both classes, even without interaction."""
        a, b, c = introduced(3)
        site = AnalysisSite("f")
        site.observe("x", a)
        site.observe("y", b)
        site.observe("x", b)
        site.observe("z", c)
        site.commit(index)
        assert site.groups() == [["x", "y"], ["z"]]

    def test_unknown_tag_leaves_site_untouched(self, index, introduced):
        (a,) = introduced(1)
        site = AnalysisSite("f")
        site.observe("x", a)
        site.commit(index)
        before = site.classes()

        site.observe("y", a)
        site.observe("z", Tag(10_000))
        with pytest.raises(UnknownTagError):
            site.commit(index)

        assert site.classes() == before
        assert len(site.pending) == 2

    def test_order_independent_within_commit(self, introduced, index):
        """Permuting observations inside one commit gives the same partition."""
        a, b, c, d = introduced(4)
        index.union(a, c)
        observations = [("x", a), ("y", b), ("x", d), ("w", c), ("y", d)]

        results = set()
        for perm in itertools.permutations(observations):
            site = AnalysisSite("f")
            for name, tag in perm:
                site.observe(name, tag)
            site.commit(index)
            results.add(tuple(tuple(g) for g in site.groups()))

        assert results == {(("w", "x", "y"),)}


class TestAcrossCommits:
    """Classes over successive invocations."""

    def test_classes_only_coarsen(self):
        tags = TagFactory()
        index = ValueInteractionIndex()
        site = AnalysisSite("f")
        t1, t2, t3, t4 = (index.introduce(tags.mint(i)) for i in range(4))

        site.observe("x", t1)
        site.observe("y", t2)
        site.commit(index)
        assert site.groups() == [["x"], ["y"]]

        index.union(t3, t4)
        site.observe("x", t3)
        site.observe("y", t4)
        site.commit(index)
        assert site.groups() == [["x", "y"]]

        site.observe("x", index.introduce(tags.mint(5)))
        site.commit(index)
        assert site.groups() == [["x", "y"]]

    def test_retroactive_coarsening(self, index, introduced):
        """A global merge between commits folds the old and new class together."""
        t1, t2, other = introduced(3)
        site = AnalysisSite("f")
        site.observe("v", t1)
        site.observe("u", t1)
        site.observe("w", other)
        site.commit(index)
        class_a = site.classes()["v"]

        index.union(t2, t1)
        site.observe("v", t2)
        site.commit(index)

        classes = site.classes()
        assert classes["v"] == classes["u"]
        assert index.find(classes["v"]) == index.find(class_a)
        assert classes["w"] != classes["v"]

    def test_later_merge_updates_every_variable(self, index, introduced):
        """Variables already pointing at a merged class report its new leader."""
        a, b = introduced(2)
        site = AnalysisSite("f")
        site.observe("x", a)
        site.observe("y", b)
        site.commit(index)

        index.union(b, a)
        site.observe("x", a)
        site.commit(index)

        classes = site.classes()
        assert classes["x"] == classes["y"]
