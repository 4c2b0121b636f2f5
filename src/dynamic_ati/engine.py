"""Inference engine facade.

The calls an instrumentation layer makes while the analysed program runs:

    engine = InferenceEngine()
    site = engine.checkout_site("main")
    a = engine.mint_tracked("a", 10, site)
    two = engine.mint_untracked(2)
    total = engine.mint_tracked("total", 12, site)
    engine.record_interaction([a, two, total])
    engine.commit_site(site)

    for entry in engine.report():
        print(entry.site_id, entry.var_name, entry.type_class)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, NamedTuple, Optional, Sequence

from .config import EngineConfig
from .directory import SiteDirectory
from .index import ValueInteractionIndex
from .site import AnalysisSite
from .tags import Tag, TagFactory

logger = logging.getLogger(__name__)


class ReportEntry(NamedTuple):
    """One variable's inferred type class at one site.

    ``type_class`` only means something by equality: two entries of the same
    site with equal classes have the same abstract type.
    """

    site_id: str
    var_name: str
    type_class: Tag


class InferenceEngine:
    """One complete analysis run.

    The index and directory are injectable so tests and embedders can share
    or inspect them; by default both are created from ``config``.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        index: Optional[ValueInteractionIndex] = None,
        directory: Optional[SiteDirectory] = None,
        tags: Optional[TagFactory] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.index = index if index is not None else ValueInteractionIndex()
        self.directory = (
            directory
            if directory is not None
            else SiteDirectory(strict=self.config.strict_checkout)
        )
        self.tags = tags if tags is not None else TagFactory()

    # -- value production --------------------------------------------------

    def mint_untracked(self, value: Any) -> Tag:
        """Tag a value that is not bound to a variable at any observed site."""
        return self.index.introduce(self.tags.mint(value))

    def mint_tracked(self, var_name: str, value: Any, site: AnalysisSite) -> Tag:
        """Tag a freshly produced value and bind it to ``var_name`` at ``site``."""
        tag = self.index.introduce(self.tags.mint(value, var_name))
        site.observe(var_name, tag)
        return tag

    def observe(self, site: AnalysisSite, var_name: str, tag: Tag) -> Tag:
        """Bind an existing tag, e.g. one returned by another tracked location."""
        site.observe(var_name, tag)
        return tag

    # -- interactions ------------------------------------------------------

    def record_interaction(self, tags: Sequence[Tag]) -> None:
        """Record that the values named by ``tags`` were combined."""
        self.index.union_chain(tags)

    # -- site lifecycle ----------------------------------------------------

    def checkout_site(self, site_id: str) -> AnalysisSite:
        """Take exclusive ownership of the site for ``site_id``."""
        site = self.directory.checkout(site_id)
        logger.debug("Checked out site %s", site_id)
        return site

    def commit_site(self, site: AnalysisSite) -> None:
        """Commit ``site`` against the global index and hand it back.

        If the commit fails, the invocation's pending observations are dropped
        and the site is checked in with its committed classes unchanged, so
        the next invocation starts clean. The error still propagates.
        """
        try:
            site.commit(self.index)
        except BaseException:
            site.discard_pending()
            raise
        finally:
            self.directory.checkin(site)

    @contextmanager
    def site(self, site_id: str) -> Iterator[AnalysisSite]:
        """Bracket one invocation of a tracked location.

        If the body raises, its pending observations are discarded and the
        site is checked back in before the exception propagates.
        """
        site = self.checkout_site(site_id)
        try:
            yield site
        except BaseException:
            site.discard_pending()
            self.directory.checkin(site)
            raise
        self.commit_site(site)

    # -- reporting ---------------------------------------------------------

    def report(self) -> List[ReportEntry]:
        """Committed classes of every idle site, sorted by site then variable."""
        snapshot = self.directory.snapshot_classes()
        return [
            ReportEntry(site_id, var_name, snapshot[site_id][var_name])
            for site_id in sorted(snapshot)
            for var_name in sorted(snapshot[site_id])
        ]

    def same_type(self, site_id: str, a: str, b: str) -> bool:
        """Whether variables ``a`` and ``b`` share a type class at ``site_id``."""
        classes = self.directory.snapshot_classes().get(site_id, {})
        return a in classes and b in classes and classes[a] == classes[b]
