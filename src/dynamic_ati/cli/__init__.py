"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="dynamic-ati",
    help="dynamic-ati - Dynamic Abstract Type Inference",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .demo import demo as _demo  # noqa: F401, E402
from .version import version as _version  # noqa: F401, E402
