"""JSON formatter for dynamic-ati."""

import json
from typing import Sequence

from ..engine import ReportEntry
from .base import BaseFormatter, group_by_class


class JsonFormatter(BaseFormatter):
    """Render the report as JSON: raw entries plus per-site type groups."""

    def render(self, entries: Sequence[ReportEntry]) -> None:
        print(self.format(entries))

    def format(self, entries: Sequence[ReportEntry]) -> str:
        data = {
            "entries": [
                {
                    "site": e.site_id,
                    "variable": e.var_name,
                    "type_class": e.type_class.serial,
                }
                for e in entries
            ],
            "types": group_by_class(entries),
        }
        return json.dumps(data, indent=2)
