"""Analysis sites.

A site is one program location (usually one function body) whose variable
bindings are tracked across invocations. While checked out, the caller
records ``(variable, tag)`` observations with :meth:`AnalysisSite.observe`.
:meth:`AnalysisSite.commit` then folds them into the site's committed
variable -> type-class map, using the global index to learn which raw values
belong to the same interaction class at commit time.

The site keeps its own union-find over global leader tags rather than storing
leaders inline. When two leaders that were disjoint at one commit later share
a global class, the next commit that observes either variable folds them
together in the local partition, coarsening the site's history.

Algorithm from "Dynamic Inference of Abstract Types" (Guo et al., ISSTA 2006).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .index import ValueInteractionIndex
from .tags import Tag
from .union_find import UnionFind

logger = logging.getLogger(__name__)

Observation = Tuple[str, Tag]


class AnalysisSite:
    """Per-location accumulator of variable observations."""

    def __init__(self, site_id: str) -> None:
        self.site_id = site_id
        self.commit_count = 0
        self._pending: List[Observation] = []
        self._types = UnionFind()
        self._classes: Dict[str, Tag] = {}

    def __repr__(self) -> str:
        return (
            f"AnalysisSite({self.site_id!r}, variables={len(self._classes)}, "
            f"pending={len(self._pending)})"
        )

    @property
    def pending(self) -> Tuple[Observation, ...]:
        """Observations recorded since the last commit, in order."""
        return tuple(self._pending)

    def observe(self, var_name: str, tag: Tag) -> None:
        """Record that ``var_name`` was bound to the value named by ``tag``."""
        self._pending.append((var_name, tag))

    def commit(self, index: ValueInteractionIndex) -> int:
        """Fold pending observations into the committed map.

        Every pending tag is resolved against ``index`` before the site is
        touched, so an UnknownTagError leaves the site (pending log included)
        exactly as it was.

        Returns:
            Number of observations committed.
        """
        leaders = index.resolve([tag for _, tag in self._pending])

        for (var_name, _), leader in zip(self._pending, leaders):
            self._types.introduce(leader)
            previous = self._classes.get(var_name)
            if previous is None:
                self._classes[var_name] = leader
            else:
                self._classes[var_name] = self._types.union(previous, leader)

        committed = len(self._pending)
        self._pending.clear()
        self.commit_count += 1
        logger.debug("Committed %d observations at site %s", committed, self.site_id)
        return committed

    def discard_pending(self) -> int:
        """Drop uncommitted observations; returns how many were dropped."""
        dropped = len(self._pending)
        self._pending.clear()
        if dropped:
            logger.debug("Discarded %d pending observations at site %s", dropped, self.site_id)
        return dropped

    def classes(self) -> Dict[str, Tag]:
        """Snapshot of variable -> type-class identity.

        Classes are resolved through the local partition, so two variables
        merged by a later commit report the same identity.
        """
        return {var: self._types.find(cls) for var, cls in self._classes.items()}

    def groups(self) -> List[List[str]]:
        """Variables partitioned by type class, each group and the list sorted."""
        by_class: Dict[Tag, List[str]] = {}
        for var, cls in self.classes().items():
            by_class.setdefault(cls, []).append(var)
        return sorted(sorted(group) for group in by_class.values())
