"""Run command implementation.

Cleans selected categories non-interactively.
"""

from typing import Annotated

import typer

from devsweep.cleanup.catalog import CatalogError
from devsweep.cleanup.models import Category
from devsweep.cleanup.orchestrator import approve, decline
from devsweep.cli.display import print_category_report, print_run_summary
from devsweep.cli.runtime import build_orchestrator, load_runtime
from devsweep.utils.formatting import print_error, print_info, print_warning

app = typer.Typer(
    help="Clean cache categories without the interactive menu.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run_categories(
    ctx: typer.Context,
    category_ids: Annotated[
        list[str] | None,
        typer.Option(
            "--category",
            "-c",
            help="Category id to clean (repeatable). See 'devsweep list'.",
        ),
    ] = None,
    run_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Clean every category in catalog order.",
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
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Approve destructive steps (e.g. docker system prune).",
        ),
    ] = False,
) -> None:
    """Clean the given categories.

    Destructive steps are declined unless --yes is given. Contained
    failures are reported but do not change the exit code.
    """
    if ctx.obj and ctx.obj.get("dry_run"):
        dry_run = True

    settings, catalog = load_runtime()

    if run_all:
        categories: list[Category] = list(catalog)
    elif category_ids:
        try:
            categories = [catalog.get(category_id) for category_id in category_ids]
        except CatalogError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
    else:
        print_error("Name at least one --category, or pass --all.")
        raise typer.Exit(code=1)

    if dry_run:
        print_info("Dry-run: nothing will be deleted and no commands will run.")

    orchestrator = build_orchestrator(
        settings,
        dry_run=dry_run,
        confirm=approve if yes else decline,
    )
    try:
        report = orchestrator.run_all(categories)
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        raise typer.Exit(code=130) from None

    for category_report in report.categories:
        print_category_report(category_report)
    print_run_summary(report)
