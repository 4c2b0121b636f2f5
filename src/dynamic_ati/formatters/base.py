"""Base formatter interface for dynamic-ati report rendering."""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from ..engine import ReportEntry
from ..tags import Tag


def group_by_class(entries: Sequence[ReportEntry]) -> Dict[str, List[List[str]]]:
    """Group report entries into abstract types per site.

    Returns:
        site id -> list of variable groups; each group shares one type class.
        Groups and the variables inside them are sorted.
    """
    by_site: Dict[str, Dict[Tag, List[str]]] = {}
    for entry in entries:
        by_site.setdefault(entry.site_id, {}).setdefault(entry.type_class, []).append(
            entry.var_name
        )
    return {
        site_id: sorted(sorted(group) for group in classes.values())
        for site_id, classes in sorted(by_site.items())
    }


class BaseFormatter(ABC):
    """Abstract base class for report formatters."""

    @abstractmethod
    def render(self, entries: Sequence[ReportEntry]) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, entries: Sequence[ReportEntry]) -> str:
        """Return formatted string representation of the report."""
