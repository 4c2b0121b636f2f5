"""Version CLI command."""

from .. import __version__
from . import app
from ._common import console


@app.command()
def version():
    """Print the installed dynamic-ati version."""
    console.print(f"dynamic-ati {__version__}")
