"""List command implementation.

Shows the cache categories with their menu numbers.
"""

from typing import Annotated

import typer

from devsweep.cli.display import create_catalog_table
from devsweep.cli.runtime import load_runtime
from devsweep.utils.formatting import console

app = typer.Typer(
    help="List cache categories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_categories(
    show_paths: Annotated[
        bool,
        typer.Option(
            "--paths",
            "-p",
            help="Show every path pattern and command.",
        ),
    ] = False,
) -> None:
    """List cache categories in catalog order."""
    _, catalog = load_runtime()
    console.print(create_catalog_table(catalog, show_paths=show_paths))
    console.print(
        f"\n[dim]{len(catalog)} categories. "
        "Menu entry 1 runs all of them; [destructive]![/] marks steps that ask first.[/dim]"
    )
