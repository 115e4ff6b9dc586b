"""Runtime wiring shared by CLI commands.

Loads settings, builds the catalog and assembles an orchestrator with the
requested dry-run mode and confirmation behavior. Both the interactive
menu and the ``run`` command go through here.
"""

import logging

import typer
from rich.logging import RichHandler
from rich.markup import escape

from devsweep.cleanup.catalog import Catalog, CatalogError, load_catalog
from devsweep.cleanup.invoker import ExternalToolInvoker
from devsweep.cleanup.orchestrator import CleanupOrchestrator, ConfirmFn
from devsweep.cleanup.remover import SafeRemover
from devsweep.cleanup.resolver import PathPatternResolver
from devsweep.core.settings import Settings, SettingsError, load_settings
from devsweep.utils.formatting import console, err_console, print_error

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Show debug records instead of warnings and above.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def load_runtime() -> tuple[Settings, Catalog]:
    """Load settings and the catalog, exiting with code 1 if either is invalid.

    Returns:
        Tuple of (settings, catalog).

    Raises:
        typer.Exit: If the settings file or a user-defined category is invalid.
    """
    try:
        settings = load_settings()
        catalog = load_catalog(settings)
    except (SettingsError, CatalogError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return settings, catalog


def build_orchestrator(
    settings: Settings,
    *,
    dry_run: bool = False,
    confirm: ConfirmFn,
) -> CleanupOrchestrator:
    """Assemble an orchestrator for one CLI session.

    Args:
        settings: Loaded settings (timeout for external commands).
        dry_run: Report what would happen without deleting or running anything.
        confirm: Called before each destructive step.

    Returns:
        Ready-to-use CleanupOrchestrator.
    """
    return CleanupOrchestrator(
        resolver=PathPatternResolver(),
        remover=SafeRemover(dry_run=dry_run),
        invoker=ExternalToolInvoker(dry_run=dry_run, timeout=settings.tool_timeout_seconds),
        confirm=confirm,
    )


def confirm_on_console(prompt: str) -> bool:
    """Ask a yes/no question, defaulting to no.

    Only ``y`` or ``yes`` (any case) count as approval. Empty input, any
    other answer, or end of input is treated as a refusal.

    Args:
        prompt: Question to show.

    Returns:
        True if the user approved.
    """
    try:
        answer = console.input(f"[warning]{escape(prompt)}[/] \\[y/N]: ")
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS
