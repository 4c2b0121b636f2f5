"""Global value interaction index.

Process-wide partition over value tags: two tags share a class once the
values they name have interacted, directly or transitively. The partition
only ever coarsens.

Thread-safe: every operation holds one whole-structure lock for its own
duration and never calls out while holding it.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Sequence

from .tags import Tag
from .union_find import UnionFind

logger = logging.getLogger(__name__)


class ValueInteractionIndex:
    """Monotonic union-find over every tag minted during a run."""

    def __init__(self) -> None:
        self._uf = UnionFind()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._uf)

    def __contains__(self, tag: object) -> bool:
        with self._lock:
            return tag in self._uf

    def introduce(self, tag: Tag) -> Tag:
        """Register ``tag`` as its own class; idempotent."""
        with self._lock:
            return self._uf.introduce(tag)

    def find(self, tag: Tag) -> Tag:
        """Leader of ``tag``'s class. Raises UnknownTagError if never introduced."""
        with self._lock:
            return self._uf.find(tag)

    def resolve(self, tags: Sequence[Tag]) -> List[Tag]:
        """Leaders of ``tags``, in order, under a single lock acquisition."""
        with self._lock:
            return [self._uf.find(tag) for tag in tags]

    def union(self, a: Tag, b: Tag) -> Tag:
        """Merge the classes of ``a`` and ``b``; returns the new leader."""
        with self._lock:
            leader = self._uf.union(a, b)
        logger.debug("Merged %r and %r under %r", a, b, leader)
        return leader

    def union_chain(self, tags: Sequence[Tag]) -> None:
        """Union each adjacent pair of ``tags``.

        Equivalent to unioning every pair, since union is transitive. Every
        tag is checked before the first merge, so an unknown tag leaves the
        index untouched.
        """
        tags = list(tags)
        with self._lock:
            for tag in tags:
                self._uf.find(tag)
            for left, right in zip(tags, tags[1:]):
                self._uf.union(left, right)
        if len(tags) > 1:
            logger.debug("Recorded interaction between %d values", len(tags))

    def same_class(self, a: Tag, b: Tag) -> bool:
        """Whether ``a`` and ``b`` have interacted, directly or transitively."""
        with self._lock:
            return self._uf.find(a) == self._uf.find(b)

    def class_count(self) -> int:
        with self._lock:
            return self._uf.class_count()
