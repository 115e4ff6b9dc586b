"""Safe removal of resolved cache targets.

Deletes one resolved path at a time, turning every failure into an
outcome value so that the rest of the batch always runs.
"""

import logging
import shutil
from collections.abc import Iterable, Mapping
from pathlib import Path

from devsweep.cleanup.models import RemovalOutcome, RemovalStatus, ResolvedTarget
from devsweep.cleanup.protected import is_protected_path

logger = logging.getLogger(__name__)


class SafeRemover:
    """Deletes resolved cache targets with per-path failure isolation.

    Supports dry-run mode and refuses protected paths.

    Attributes:
        _dry_run: If True, report what would be deleted without deleting.
        _environ: Environment mapping used to locate protected roots.
    """

    def __init__(
        self,
        dry_run: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the SafeRemover.

        Args:
            dry_run: If True, report what would be deleted without deleting.
            environ: Environment mapping for protected-root lookup.
                Defaults to os.environ.
        """
        self._dry_run = dry_run
        self._environ = environ

    @property
    def dry_run(self) -> bool:
        """Check if remover is in dry-run mode."""
        return self._dry_run

    def remove_all(self, targets: Iterable[ResolvedTarget]) -> list[RemovalOutcome]:
        """Remove multiple targets and return one outcome per target.

        Args:
            targets: Resolved targets to delete.

        Returns:
            List of RemovalOutcome in input order.
        """
        return [self.remove(target) for target in targets]

    def remove(self, target: ResolvedTarget) -> RemovalOutcome:
        """Delete a single resolved target.

        Dispatches on the live state of the path rather than the type
        recorded at resolution time:
        - Directories: shutil.rmtree when recursive, Path.rmdir otherwise
        - Files and symlinks: Path.unlink

        Args:
            target: The target to delete.

        Returns:
            RemovalOutcome describing what happened. Never raises OSError.
        """
        path = Path(target.path)

        try:
            present = path.exists() or path.is_symlink()
        except OSError as e:
            logger.warning("Cannot access %s: %s", target.path, e)
            return RemovalOutcome(
                target=target,
                status=RemovalStatus.SKIPPED_ERROR,
                reason=str(e),
            )

        if not present:
            logger.debug("Already gone: %s", target.path)
            return RemovalOutcome(target=target, status=RemovalStatus.SKIPPED_NOT_FOUND)

        if is_protected_path(target.path, self._environ):
            logger.warning("Refusing to delete protected path: %s", target.path)
            return RemovalOutcome(
                target=target,
                status=RemovalStatus.SKIPPED_ERROR,
                reason=f"Protected path cannot be deleted: {target.path}",
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", target.path)
            return RemovalOutcome(target=target, status=RemovalStatus.REMOVED, dry_run=True)

        try:
            if path.is_dir() and not path.is_symlink():
                if target.recursive:
                    shutil.rmtree(path)
                else:
                    path.rmdir()
            else:
                path.unlink()
        except FileNotFoundError:
            logger.debug("Disappeared during deletion: %s", target.path)
            return RemovalOutcome(target=target, status=RemovalStatus.SKIPPED_NOT_FOUND)
        except OSError as e:
            logger.warning("Could not delete %s: %s", target.path, e)
            return RemovalOutcome(
                target=target,
                status=RemovalStatus.SKIPPED_ERROR,
                reason=str(e),
            )

        logger.info("Deleted %s", target.path)
        return RemovalOutcome(target=target, status=RemovalStatus.REMOVED)
