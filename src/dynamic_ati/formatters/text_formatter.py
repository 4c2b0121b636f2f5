"""Plain text formatter: one block per site, one line per variable."""

from typing import List, Sequence

from ..engine import ReportEntry
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Render ``=== site ===`` headers followed by ``var -> class`` lines."""

    def render(self, entries: Sequence[ReportEntry]) -> None:
        print(self.format(entries))

    def format(self, entries: Sequence[ReportEntry]) -> str:
        lines: List[str] = []
        current = None
        for entry in entries:
            if entry.site_id != current:
                if current is not None:
                    lines.append("")
                lines.append(f"=== {entry.site_id} ===")
                current = entry.site_id
            lines.append(f"{entry.var_name} -> {entry.type_class.serial}")
        return "\n".join(lines)
