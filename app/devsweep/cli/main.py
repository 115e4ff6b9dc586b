"""Main CLI application entry point.

Defines the Typer application and global options. Invoked without a
subcommand, devsweep opens the interactive menu.
"""

from typing import Annotated

import typer

from devsweep import __version__
from devsweep.cli.commands import categories, config, run
from devsweep.cli.menu import run_menu
from devsweep.cli.runtime import (
    build_orchestrator,
    configure_logging,
    confirm_on_console,
    load_runtime,
)
from devsweep.utils.formatting import print_info, print_warning

INTERRUPTED_EXIT_CODE = 130

# Create main Typer app
app = typer.Typer(
    name="devsweep",
    help="Reclaim disk space from developer tool caches.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"devsweep version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be deleted without deleting anything.",
        ),
    ] = False,
) -> None:
    """devsweep - Reclaim disk space from developer tool caches.

    Run without a command to pick categories from a numbered menu.
    """
    configure_logging(verbose=verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["dry_run"] = dry_run

    if ctx.invoked_subcommand is not None:
        return

    settings, catalog = load_runtime()
    if dry_run:
        print_info("Dry-run: nothing will be deleted and no commands will run.")
    orchestrator = build_orchestrator(settings, dry_run=dry_run, confirm=confirm_on_console)

    try:
        run_menu(catalog, orchestrator)
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        raise typer.Exit(code=INTERRUPTED_EXIT_CODE) from None


# Register commands
app.add_typer(run.app, name="run")
app.add_typer(categories.app, name="list")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
