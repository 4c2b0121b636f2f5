"""Demo CLI command -- run the worked examples and report inferred types."""

from pathlib import Path
from typing import Optional

import typer

from ..demo import run_demo
from ..engine import InferenceEngine
from ..exceptions import DynamicATIError
from ..formatters import RichFormatter, get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config


@app.command()
def demo(
    iterations: Optional[int] = typer.Option(
        None,
        "--iterations",
        "-n",
        help="Loop length of the fibonacci example",
        min=0,
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich, json, text",
    ),
    lenient: bool = typer.Option(
        False,
        "--lenient",
        help="Allow double checkout of a site (in-flight observations are lost)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Run the bundled worked examples through the engine and print the
    abstract types inferred at every site.

    [bold cyan]Examples:[/bold cyan]

      dynamic-ati demo

      dynamic-ati demo --format json --iterations 0
    """
    logger = setup_logging("verbose" if verbose else "normal")

    try:
        settings = resolve_config(
            config=config,
            report_format=output_format,
            iterations=iterations,
            lenient=lenient,
            verbose=verbose,
        )
        logger = setup_logging(settings.verbosity)
        formatter = get_formatter(settings.report_format)
        if isinstance(formatter, RichFormatter):
            formatter.console = console

        engine = run_demo(InferenceEngine(settings), iterations=settings.demo_iterations)
        formatter.render(engine.report())

    except (DynamicATIError, ValueError) as e:
        logger.debug("Demo failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
