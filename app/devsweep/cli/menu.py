"""Interactive numbered menu.

0 exits, 1 runs every category, 2..N run one category each. Invalid
input re-prompts; the loop ends on 0 or end of input.
"""

import logging
from collections.abc import Callable

from devsweep.cleanup.catalog import Catalog, CatalogError
from devsweep.cleanup.models import RunReport
from devsweep.cleanup.orchestrator import CleanupOrchestrator
from devsweep.cli.display import create_menu_table, print_category_report, print_run_summary
from devsweep.utils.formatting import console, print_info, print_warning

logger = logging.getLogger(__name__)

EXIT_CHOICE = 0


def _read_choice() -> str:
    return console.input("\nSelect an option: ")


def execute_selection(
    catalog: Catalog,
    orchestrator: CleanupOrchestrator,
    choice: int,
) -> RunReport:
    """Run the categories behind one menu number and print the results.

    Args:
        catalog: Catalog the number refers to.
        orchestrator: Orchestrator that runs the categories.
        choice: Menu number (1 = all, 2..N = one category).

    Returns:
        The finished RunReport.

    Raises:
        CatalogError: If the number is out of range.
    """
    categories = catalog.select(choice)
    report = orchestrator.run_all(categories)
    for category_report in report.categories:
        print_category_report(category_report)
    print_run_summary(report)
    return report


def run_menu(
    catalog: Catalog,
    orchestrator: CleanupOrchestrator,
    read: Callable[[], str] = _read_choice,
) -> None:
    """Show the menu and run selections until the user exits.

    Args:
        catalog: Catalog to offer.
        orchestrator: Orchestrator that runs the selected categories.
        read: Returns the next line of user input.
    """
    while True:
        console.print(create_menu_table(catalog))
        try:
            raw = read()
        except EOFError:
            break

        try:
            choice = int(raw.strip())
        except ValueError:
            print_warning(f"Not a number: {raw.strip()!r}")
            continue

        logger.debug("Menu selection: %d", choice)
        if choice == EXIT_CHOICE:
            break

        try:
            execute_selection(catalog, orchestrator, choice)
        except CatalogError as e:
            print_warning(str(e))

    print_info("Bye.")
