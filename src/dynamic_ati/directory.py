"""Checkout/checkin registry of analysis sites."""

from __future__ import annotations

import logging
import threading
from typing import Dict, FrozenSet, List, Set

from .exceptions import AlreadyCheckedOutError
from .site import AnalysisSite
from .tags import Tag

logger = logging.getLogger(__name__)


class SiteDirectory:
    """Holds idle sites keyed by site id.

    Checking a site out moves it to the caller; the directory no longer
    references it until it is checked back in. The lock is held only for the
    instant of each call, never across the analysed code between checkout and
    checkin, so nested and recursive tracked locations cannot deadlock.

    With ``strict=True`` a second checkout of an id that is still in flight
    raises :class:`AlreadyCheckedOutError`. With ``strict=False`` it returns a
    fresh empty site; whichever of the two is checked in last wins and the
    other's observations are lost.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict
        self._lock = threading.Lock()
        self._sites: Dict[str, AnalysisSite] = {}
        self._checked_out: Set[str] = set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sites)

    def __contains__(self, site_id: object) -> bool:
        with self._lock:
            return site_id in self._sites

    @property
    def checked_out(self) -> FrozenSet[str]:
        """Ids currently in flight."""
        with self._lock:
            return frozenset(self._checked_out)

    def checkout(self, site_id: str) -> AnalysisSite:
        """Remove and return the site for ``site_id``, creating it if absent."""
        with self._lock:
            if site_id in self._checked_out:
                if self.strict:
                    raise AlreadyCheckedOutError(site_id)
                logger.warning(
                    "Site %s checked out twice; in-flight observations will be lost", site_id
                )
                return AnalysisSite(site_id)
            self._checked_out.add(site_id)
            site = self._sites.pop(site_id, None)
        if site is None:
            logger.debug("Created site %s", site_id)
            return AnalysisSite(site_id)
        return site

    def checkin(self, site: AnalysisSite) -> None:
        """Store ``site`` under its own id, replacing whatever is there."""
        with self._lock:
            self._sites[site.site_id] = site
            self._checked_out.discard(site.site_id)

    def site_ids(self) -> List[str]:
        """Sorted ids of the sites currently held."""
        with self._lock:
            return sorted(self._sites)

    def snapshot_classes(self) -> Dict[str, Dict[str, Tag]]:
        """Committed classes of every held site, taken under the lock."""
        with self._lock:
            return {site_id: site.classes() for site_id, site in self._sites.items()}
