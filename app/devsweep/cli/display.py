"""Shared Rich display functions for the catalog and run reports.

Provides reusable table builders and summary printers for the menu,
the ``list`` command and the end-of-run summary.
"""

from rich.markup import escape
from rich.table import Table

from devsweep.cleanup.catalog import Catalog
from devsweep.cleanup.models import (
    CategoryReport,
    RemovalOutcome,
    RemovalStatus,
    RunReport,
    ToolOutcome,
    ToolStatus,
)
from devsweep.utils.formatting import console, print_success, print_warning


def create_menu_table(catalog: Catalog) -> Table:
    """Create the numbered menu table.

    Args:
        catalog: Catalog whose entries are listed.

    Returns:
        Rich Table with one row per menu choice, starting with 0 = exit.
    """
    table = Table(
        title="devsweep",
        show_header=False,
        border_style="border",
    )
    table.add_column("#", justify="right", style="bold_header")
    table.add_column("Action")

    for entry in catalog.menu_entries():
        label = escape(entry.label)
        if entry.destructive:
            label += " [destructive](asks before destructive steps)[/]"
        table.add_row(str(entry.number), label)
    table.add_row("0", "[muted]Exit[/]")

    return table


def create_catalog_table(catalog: Catalog, show_paths: bool = False) -> Table:
    """Create a table describing every category.

    Args:
        catalog: Catalog to describe.
        show_paths: List every path pattern and command line instead of counts.

    Returns:
        Rich Table with one row per category.
    """
    table = Table(
        title="Cache Categories",
        show_header=True,
        header_style="bold_header",
        border_style="border",
        show_lines=show_paths,
    )
    table.add_column("#", justify="right", width=3)

    if show_paths:
        table.add_column("Category")
        table.add_column("Paths and commands", style="muted", overflow="fold")
        for number, category in enumerate(catalog, start=2):
            lines = [escape(p.template) for p in category.paths]
            lines.extend(
                f"[destructive]![/] {escape(t.command_line)}"
                if t.destructive
                else f"$ {escape(t.command_line)}"
                for t in category.tools
            )
            table.add_row(
                str(number),
                f"[category.id]{category.id}[/]\n{escape(category.label)}",
                "\n".join(lines) or "-",
            )
        return table

    table.add_column("Id", style="category.id", no_wrap=True)
    table.add_column("Label")
    table.add_column("Paths", justify="right")
    table.add_column("Tools", justify="right")
    for number, category in enumerate(catalog, start=2):
        tools = str(len(category.tools))
        if category.destructive:
            tools += " [destructive]![/]"
        table.add_row(
            str(number),
            category.id,
            escape(category.label),
            str(len(category.paths)),
            tools,
        )

    return table


def _removal_cells(outcome: RemovalOutcome) -> tuple[str, str]:
    if outcome.dry_run:
        return "[info]dry-run[/]", "Would delete"
    if outcome.status == RemovalStatus.REMOVED:
        return "[removed]deleted[/]", ""
    if outcome.status == RemovalStatus.SKIPPED_NOT_FOUND:
        return "[skipped]gone[/]", "Already removed"
    return "[error]failed[/]", escape(outcome.reason or "Unknown error")


def _tool_cells(outcome: ToolOutcome) -> tuple[str, str]:
    if outcome.dry_run:
        return "[info]dry-run[/]", f"Would run {outcome.step.command_line}"
    if outcome.status == ToolStatus.SUCCEEDED:
        return "[success]ok[/]", outcome.step.command_line
    if outcome.status == ToolStatus.SKIPPED_NOT_INSTALLED:
        return "[skipped]absent[/]", f"{outcome.step.command} not installed"
    if outcome.status == ToolStatus.DECLINED:
        return "[declined]declined[/]", "Skipped at confirmation"
    return "[error]failed[/]", outcome.reason or "Unknown error"


def create_report_table(report: CategoryReport) -> Table:
    """Create a table with every outcome of one category.

    Args:
        report: Category report to display.

    Returns:
        Rich Table with one row per removed path and tool step.
    """
    table = Table(
        title=escape(report.label),
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=9)
    table.add_column("Target", overflow="fold")
    table.add_column("Details", style="muted")

    for removal in report.removals:
        status, detail = _removal_cells(removal)
        table.add_row(status, escape(removal.target.path), detail)
    for tool in report.tools:
        status, detail = _tool_cells(tool)
        table.add_row(status, escape(tool.step.display_name), escape(detail))
    if report.error:
        table.add_row("[error]error[/]", escape(report.label), escape(report.error))

    return table


def print_category_report(report: CategoryReport) -> None:
    """Print one category's outcomes, or a one-liner if nothing was found."""
    if not report.removals and not report.tools and not report.error:
        console.print(f"[muted]{escape(report.label)}: nothing to clean[/]")
        return
    console.print(create_report_table(report))


def print_run_summary(report: RunReport) -> None:
    """Print totals and every contained failure of a run.

    Args:
        report: The finished run.
    """
    removed = report.count(RemovalStatus.REMOVED)
    missing = report.count(RemovalStatus.SKIPPED_NOT_FOUND)
    tools_ok = report.count(ToolStatus.SUCCEEDED)
    absent = report.count(ToolStatus.SKIPPED_NOT_INSTALLED)
    declined = report.count(ToolStatus.DECLINED)
    failures = report.failures

    console.print(
        f"\nSummary: [removed]{removed} removed[/], [skipped]{missing} already gone[/], "
        f"[success]{tools_ok} tool(s) run[/], [skipped]{absent} not installed[/], "
        f"[declined]{declined} declined[/]"
    )

    if not failures:
        print_success(f"All {len(report.categories)} category(ies) completed without errors.")
        return

    print_warning(f"{len(failures)} item(s) could not be cleaned:")
    for label, reason in failures:
        console.print(f"  [error]x[/] {escape(label)}: [muted]{escape(reason)}[/]")
