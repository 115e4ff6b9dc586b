"""CLI commands for devsweep.

This package contains all subcommand implementations.
"""

from devsweep.cli.commands import categories, config, run

__all__ = ["categories", "config", "run"]
