"""
Logging configuration for dynamic-ati.

The engine runs inside the program under analysis, so output is attached to
the ``dynamic_ati`` package logger only; the host program's root logger and
its handlers are left alone. Modules log through
``logging.getLogger(__name__)``, which places them under that logger.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity
from .exceptions import InvalidConfigError

PACKAGE_LOGGER = "dynamic_ati"

_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: Verbosity = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route engine logs to a rich stderr handler and, optionally, a file.

    Calling again replaces the handlers installed by the previous call.

    Args:
        verbosity: quiet (errors only), normal (warnings, e.g. a lenient
            double checkout) or verbose (per-site commits and merges)
        log_file: Optional file path to append logs to

    Returns:
        The configured ``dynamic_ati`` logger
    """
    try:
        level = _LEVELS[verbosity]
    except KeyError:
        raise InvalidConfigError(
            "verbosity", verbosity, f"expected one of {', '.join(_LEVELS)}"
        ) from None

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=level == logging.DEBUG,
        markup=False,
        show_time=True,
        show_path=level == logging.DEBUG,
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)

    logger.setLevel(level)
    return logger
