"""Cleanup orchestration.

Runs categories end to end: resolve every path pattern, remove every
resolved target, then invoke the category's external tool steps, gating
destructive ones behind an injected confirmation callable. Every unit of
work reports an outcome; nothing stops the run early.
"""

import logging
from collections.abc import Callable, Iterable

from devsweep.cleanup.invoker import ExternalToolInvoker
from devsweep.cleanup.models import (
    Category,
    CategoryReport,
    ExternalToolStep,
    RemovalOutcome,
    RunReport,
    ToolOutcome,
    ToolStatus,
)
from devsweep.cleanup.remover import SafeRemover
from devsweep.cleanup.resolver import PathPatternResolver

logger = logging.getLogger(__name__)

# Receives the prompt text and returns True to proceed.
ConfirmFn = Callable[[str], bool]


def decline(prompt: str) -> bool:
    """Confirmation callable that refuses every destructive step."""
    logger.debug("Auto-declining: %s", prompt)
    return False


def approve(prompt: str) -> bool:
    """Confirmation callable that approves every destructive step."""
    logger.debug("Auto-approving: %s", prompt)
    return True


class CleanupOrchestrator:
    """Executes cache categories and assembles their reports.

    Args:
        resolver: Expands path patterns to existing targets.
        remover: Deletes resolved targets.
        invoker: Runs external tool steps.
        confirm: Asked before each destructive step; defaults to declining.
    """

    def __init__(
        self,
        resolver: PathPatternResolver | None = None,
        remover: SafeRemover | None = None,
        invoker: ExternalToolInvoker | None = None,
        confirm: ConfirmFn = decline,
    ) -> None:
        self._resolver = resolver or PathPatternResolver()
        self._remover = remover or SafeRemover()
        self._invoker = invoker or ExternalToolInvoker()
        self._confirm = confirm

    def run_category(self, category: Category) -> CategoryReport:
        """Run one category to completion.

        Args:
            category: The category to execute.

        Returns:
            CategoryReport with one outcome per resolved target and tool step.
        """
        logger.info("Cleaning %s", category.label)
        removals = self._remove_paths(category)
        tools = [self._run_step(step) for step in category.tools]
        return CategoryReport(
            category_id=category.id,
            label=category.label,
            removals=tuple(removals),
            tools=tuple(tools),
        )

    def run_all(self, categories: Iterable[Category]) -> RunReport:
        """Run several categories in order, each independently.

        An unexpected exception in one category is logged and recorded on
        that category's report; the remaining categories still run.

        Args:
            categories: Categories in execution order.

        Returns:
            RunReport with one CategoryReport per category.
        """
        reports: list[CategoryReport] = []
        for category in categories:
            try:
                reports.append(self.run_category(category))
            except Exception as e:
                logger.exception("Unexpected error while cleaning %s", category.label)
                reports.append(
                    CategoryReport(
                        category_id=category.id,
                        label=category.label,
                        error=f"{type(e).__name__}: {e}",
                    )
                )
        return RunReport(categories=tuple(reports))

    def _remove_paths(self, category: Category) -> list[RemovalOutcome]:
        """Resolve and remove every pattern of a category."""
        outcomes: list[RemovalOutcome] = []
        # TEMP and TMP usually point at the same directory
        seen: set[str] = set()
        for pattern in category.paths:
            for target in self._resolver.resolve(pattern):
                if target.path in seen:
                    continue
                seen.add(target.path)
                outcomes.append(self._remover.remove(target))
        return outcomes

    def _run_step(self, step: ExternalToolStep) -> ToolOutcome:
        """Invoke one tool step, asking first if it is destructive.

        No question is asked in dry-run mode or when the tool is not
        installed, since nothing would run either way.
        """
        if step.destructive and not self._invoker.dry_run and self._invoker.is_installed(step):
            if not self._confirm(step.prompt):
                logger.info("Declined: %s", step.command_line)
                return ToolOutcome(step=step, status=ToolStatus.DECLINED)
        return self._invoker.invoke(step)
