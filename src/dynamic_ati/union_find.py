"""Union-find over tags.

Elements are addressed by :class:`~dynamic_ati.tags.Tag`. Each introduced
tag gets a slot index; ``_parent[i]`` is the parent slot of slot ``i`` and a
slot is a leader when it is its own parent. ``_rank`` bounds the height of
each leader's tree and decides the direction of a union.

This class does no locking. :class:`~dynamic_ati.index.ValueInteractionIndex`
wraps it for the shared global partition; each
:class:`~dynamic_ati.site.AnalysisSite` owns a private one.
"""

from __future__ import annotations

from typing import Dict, List

from .exceptions import UnknownTagError
from .tags import Tag


class UnionFind:
    """Union by rank with path compression."""

    def __init__(self) -> None:
        self._slots: Dict[Tag, int] = {}
        self._tags: List[Tag] = []
        self._parent: List[int] = []
        self._rank: List[int] = []

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._slots

    def introduce(self, tag: Tag) -> Tag:
        """Add ``tag`` as a singleton class. Re-introducing is a no-op."""
        if tag in self._slots:
            return tag
        slot = len(self._parent)
        self._slots[tag] = slot
        self._tags.append(tag)
        self._parent.append(slot)
        self._rank.append(0)
        return tag

    def find(self, tag: Tag) -> Tag:
        """Return the leader of the class containing ``tag``."""
        return self._tags[self._find_slot(self._slot(tag))]

    def union(self, a: Tag, b: Tag) -> Tag:
        """Merge the classes of ``a`` and ``b`` and return the new leader."""
        slot_a = self._slot(a)
        slot_b = self._slot(b)
        return self._tags[self._union_slots(slot_a, slot_b)]

    def class_count(self) -> int:
        """Number of distinct classes."""
        return sum(1 for slot, parent in enumerate(self._parent) if slot == parent)

    def _slot(self, tag: Tag) -> int:
        try:
            return self._slots[tag]
        except KeyError:
            raise UnknownTagError(tag) from None

    def _find_slot(self, slot: int) -> int:
        root = slot
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[slot] != root:
            next_slot = self._parent[slot]
            self._parent[slot] = root
            slot = next_slot
        return root

    def _union_slots(self, x: int, y: int) -> int:
        x_root = self._find_slot(x)
        y_root = self._find_slot(y)
        if x_root == y_root:
            return x_root

        if self._rank[x_root] < self._rank[y_root]:
            self._parent[x_root] = y_root
            return y_root
        if self._rank[x_root] > self._rank[y_root]:
            self._parent[y_root] = x_root
            return x_root

        # Equal rank: the first argument's root leads
        self._parent[y_root] = x_root
        self._rank[x_root] += 1
        return x_root
