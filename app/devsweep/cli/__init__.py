"""CLI package for devsweep.

This package contains the Typer application and all subcommands.
"""

from devsweep.cli.main import app

__all__ = ["app"]
