"""Rich terminal formatter for dynamic-ati."""

import io
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..engine import ReportEntry
from .base import BaseFormatter, group_by_class


class RichFormatter(BaseFormatter):
    """One table per site listing its abstract types."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def render(self, entries: Sequence[ReportEntry]) -> None:
        self._print(entries, self.console)

    def format(self, entries: Sequence[ReportEntry]) -> str:
        buffer = io.StringIO()
        self._print(entries, Console(file=buffer, width=100, color_system=None))
        return buffer.getvalue()

    def _print(self, entries: Sequence[ReportEntry], console: Console) -> None:
        groups = group_by_class(entries)
        if not groups:
            console.print("[yellow]No committed sites.[/yellow]")
            return

        for site_id, types in groups.items():
            table = Table(title=f"[bold cyan]{site_id}[/bold cyan]", title_justify="left")
            table.add_column("Type", justify="right", style="dim")
            table.add_column("Variables")
            for i, group in enumerate(types, start=1):
                table.add_row(str(i), ", ".join(group))
            console.print(table)
