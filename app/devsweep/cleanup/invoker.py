"""External tool invocation.

Runs tool-native cache-clear commands (``npm cache clean``, ``docker system
prune``, ...) after checking that the tool is installed.
"""

import logging
import subprocess

from devsweep.cleanup.models import ExternalToolStep, ToolOutcome, ToolStatus
from devsweep.utils.shell import CommandResult, find_command, run_command

logger = logging.getLogger(__name__)


class ExternalToolInvoker:
    """Invokes external cache-clear commands with failure containment.

    A missing command is expected and reported as SKIPPED_NOT_INSTALLED.
    Launch failures, timeouts and non-zero exits become FAILED outcomes.

    Attributes:
        _dry_run: If True, report what would run without running it.
        _timeout: Seconds to wait for a command, or None to wait indefinitely.
    """

    def __init__(self, dry_run: bool = False, timeout: float | None = None) -> None:
        """Initialize the invoker.

        Args:
            dry_run: If True, report what would run without running it.
            timeout: Seconds to wait for each command. None blocks until exit.
        """
        self._dry_run = dry_run
        self._timeout = timeout

    @property
    def dry_run(self) -> bool:
        """Check if invoker is in dry-run mode."""
        return self._dry_run

    def is_installed(self, step: ExternalToolStep) -> bool:
        """Check if the step's command is on the search path."""
        return find_command(step.command) is not None

    def invoke(self, step: ExternalToolStep) -> ToolOutcome:
        """Run one tool step.

        Args:
            step: The step to run.

        Returns:
            ToolOutcome describing what happened. Never raises OSError.
        """
        executable = find_command(step.command)
        if executable is None:
            logger.debug("Command not installed, skipping: %s", step.command)
            return ToolOutcome(step=step, status=ToolStatus.SKIPPED_NOT_INSTALLED)

        if self._dry_run:
            logger.info("Dry-run: would run %s", step.command_line)
            return ToolOutcome(step=step, status=ToolStatus.SUCCEEDED, dry_run=True)

        logger.info("Running %s", step.command_line)
        try:
            result = run_command([executable, *step.args], timeout=self._timeout)
        except subprocess.TimeoutExpired:
            reason = f"Timed out after {self._timeout:g}s"
            logger.warning("%s: %s", step.command_line, reason)
            return ToolOutcome(step=step, status=ToolStatus.FAILED, reason=reason)
        except OSError as e:
            logger.warning("Could not launch %s: %s", step.command_line, e)
            return ToolOutcome(step=step, status=ToolStatus.FAILED, reason=str(e))

        if result.success:
            return ToolOutcome(step=step, status=ToolStatus.SUCCEEDED)

        reason = _failure_reason(result)
        logger.warning("%s failed: %s", step.command_line, reason)
        return ToolOutcome(step=step, status=ToolStatus.FAILED, reason=reason)


def _failure_reason(result: CommandResult) -> str:
    """Summarize a failed command as its last stderr line or exit code."""
    lines = [line.strip() for line in result.stderr.splitlines() if line.strip()]
    if lines:
        return lines[-1]
    return f"Exited with code {result.returncode}"
