"""Value identities.

A :class:`Tag` names one value-production event. Tags are minted from a
monotonically increasing counter, so two tags are equal only if they came
from the same ``mint`` call. The ``label`` is debug information and takes no
part in equality or hashing.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True, order=True)
class Tag:
    """Opaque identity for one produced value instance."""

    serial: int
    label: str = field(default="", compare=False)

    def __repr__(self) -> str:
        if self.label:
            return f"Tag({self.serial}:{self.label})"
        return f"Tag({self.serial})"


class TagFactory:
    """Mints fresh tags. Safe to share between threads."""

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def mint(self, value: Any = None, name: Optional[str] = None) -> Tag:
        """Return a new tag for ``value``; ``name`` is the bound variable, if any."""
        label = type(value).__name__
        if name:
            label = f"{name}:{label}"
        with self._lock:
            serial = next(self._counter)
        return Tag(serial, label)
