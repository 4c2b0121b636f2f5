"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import EngineConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    report_format: Optional[str] = None,
    iterations: Optional[int] = None,
    lenient: bool = False,
    verbose: bool = False,
) -> EngineConfig:
    """Build the engine config from CLI options."""
    overrides = {
        "report_format": report_format,
        "demo_iterations": iterations,
        "verbose": verbose,
    }
    if lenient:
        overrides["strict_checkout"] = False
    return load_config(config_file=config, **overrides)
