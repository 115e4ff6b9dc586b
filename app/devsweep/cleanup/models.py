"""Cache cleanup domain models.

This module defines the immutable data structures shared by the resolver,
remover, invoker and orchestrator: where caches live (path patterns and
categories), which external tools clear them, and what happened to each
unit of work during a run.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

# %NAME% references; parentheses allow names like ProgramFiles(x86)
ENV_REF_PATTERN = re.compile(r"%([A-Za-z_][A-Za-z0-9_()]*)%")

# Category ids are lowercase kebab-case
_CATEGORY_ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

RUN_ALL_ID = "all"

SEGMENT_SEPARATORS = re.compile(r"[\\/]+")


def validate_template(template: str) -> str:
    """Validate a path pattern template.

    A template must be anchored to an environment variable so that it can
    never resolve relative to the working directory, and it must not climb
    out of that anchor with ``..``.

    Args:
        template: Pattern string such as ``%LOCALAPPDATA%/npm-cache``.

    Returns:
        The template with surrounding whitespace stripped.

    Raises:
        ValueError: If the template is empty, relative, or contains ``..``.
    """
    template = template.strip()
    if not template:
        msg = "Path pattern cannot be empty"
        raise ValueError(msg)
    if not ENV_REF_PATTERN.match(template):
        msg = f"Path pattern must start with an environment variable reference: {template}"
        raise ValueError(msg)
    if ".." in SEGMENT_SEPARATORS.split(template):
        msg = f"Path pattern must not contain '..' segments: {template}"
        raise ValueError(msg)
    return template


class PathType(str, Enum):
    """Type of a resolved filesystem entry.

    Attributes:
        DIRECTORY: Real directory (not a symlink to one).
        FILE: Regular file, or a symlink of any kind.
    """

    DIRECTORY = "directory"
    FILE = "file"


class RemovalStatus(str, Enum):
    """Outcome of removing a single resolved target.

    Attributes:
        REMOVED: The target was deleted (or would be, in dry-run).
        SKIPPED_NOT_FOUND: The target no longer existed at deletion time.
        SKIPPED_ERROR: Deletion failed; the reason is recorded.
    """

    REMOVED = "removed"
    SKIPPED_NOT_FOUND = "not_found"
    SKIPPED_ERROR = "error"


class ToolStatus(str, Enum):
    """Outcome of a single external tool step.

    Attributes:
        SUCCEEDED: The command ran and exited with status 0.
        FAILED: The command could not be launched or exited non-zero.
        SKIPPED_NOT_INSTALLED: The command is not on the search path.
        DECLINED: A destructive step was refused at the confirmation prompt.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED_NOT_INSTALLED = "not_installed"
    DECLINED = "declined"


@dataclass(frozen=True, slots=True)
class PathPattern:
    """Environment-anchored, possibly wildcarded cache location.

    Attributes:
        template: Path template, e.g. ``%LOCALAPPDATA%/JetBrains/*/caches``.
        recursive: Whether matched directories are removed with their contents.
    """

    template: str
    recursive: bool = True

    def __post_init__(self) -> None:
        """Validate the template after initialization."""
        object.__setattr__(self, "template", validate_template(self.template))

    @property
    def variables(self) -> list[str]:
        """Names of the environment variables referenced by the template."""
        return ENV_REF_PATTERN.findall(self.template)


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    """A concrete, currently existing path produced from a PathPattern.

    Attributes:
        path: Absolute filesystem path.
        path_type: Whether the entry is a directory or a file.
        recursive: Recursion flag inherited from the pattern.
        pattern: Template the path was resolved from.
    """

    path: str
    path_type: PathType
    recursive: bool = True
    pattern: str | None = None

    @property
    def is_directory(self) -> bool:
        """Check if the target was a directory at resolution time."""
        return self.path_type == PathType.DIRECTORY


@dataclass(frozen=True, slots=True)
class RemovalOutcome:
    """Result of removing a single resolved target.

    Attributes:
        target: The target that was operated on.
        status: What happened.
        reason: Error text for SKIPPED_ERROR, None otherwise.
        dry_run: Whether the removal was only simulated.
    """

    target: ResolvedTarget
    status: RemovalStatus
    reason: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the removal failed."""
        return self.status == RemovalStatus.SKIPPED_ERROR


@dataclass(frozen=True, slots=True)
class ExternalToolStep:
    """A tool-native cache-clear command.

    Attributes:
        command: Executable name looked up on the search path.
        args: Arguments that make the tool clear its cache.
        label: Human-readable description; defaults to the command line.
        destructive: If True, the step needs explicit confirmation.
        confirm_prompt: Question shown before a destructive step.
    """

    command: str
    args: tuple[str, ...] = ()
    label: str | None = None
    destructive: bool = False
    confirm_prompt: str | None = None

    def __post_init__(self) -> None:
        """Validate step data after initialization."""
        if not self.command or not self.command.strip():
            msg = "Tool command cannot be empty"
            raise ValueError(msg)
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def command_line(self) -> str:
        """Command and arguments joined for display."""
        return " ".join((self.command, *self.args))

    @property
    def display_name(self) -> str:
        """Label if set, otherwise the command line."""
        return self.label or self.command_line

    @property
    def prompt(self) -> str:
        """Confirmation question for a destructive step."""
        if self.confirm_prompt:
            return self.confirm_prompt
        return f"Run '{self.command_line}'? This may delete more than caches."


@dataclass(frozen=True, slots=True)
class ToolOutcome:
    """Result of a single external tool step.

    Attributes:
        step: The step that was processed.
        status: What happened.
        reason: Error text for FAILED, None otherwise.
        dry_run: Whether the command was only simulated.
    """

    step: ExternalToolStep
    status: ToolStatus
    reason: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the step failed."""
        return self.status == ToolStatus.FAILED


@dataclass(frozen=True, slots=True)
class Category:
    """A named group of cache locations and cache-clear commands.

    Categories are configuration data: defined once at process start and
    never mutated.

    Attributes:
        id: Unique kebab-case identifier, e.g. ``package-managers``.
        label: Human-readable name shown in menus and reports.
        paths: Ordered path patterns to resolve and remove.
        tools: Ordered external tool steps to invoke after path removal.
        description: Optional longer explanation.
    """

    id: str
    label: str
    paths: tuple[PathPattern, ...] = ()
    tools: tuple[ExternalToolStep, ...] = ()
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate category data after initialization."""
        if not _CATEGORY_ID_PATTERN.match(self.id):
            msg = f"Category id must be lowercase kebab-case: {self.id!r}"
            raise ValueError(msg)
        if not self.label:
            msg = f"Category {self.id} needs a label"
            raise ValueError(msg)
        object.__setattr__(self, "paths", tuple(self.paths))
        object.__setattr__(self, "tools", tuple(self.tools))

    @property
    def destructive(self) -> bool:
        """Check if any tool step requires confirmation."""
        return any(step.destructive for step in self.tools)


@dataclass(frozen=True, slots=True)
class CategoryReport:
    """Everything that happened while running one category.

    Attributes:
        category_id: Id of the category that ran.
        label: Label of the category that ran.
        removals: One outcome per resolved target.
        tools: One outcome per tool step.
        error: Unexpected error that ended the category early, if any.
    """

    category_id: str
    label: str
    removals: tuple[RemovalOutcome, ...] = ()
    tools: tuple[ToolOutcome, ...] = ()
    error: str | None = None

    def count(self, status: RemovalStatus | ToolStatus) -> int:
        """Count outcomes with the given status."""
        if isinstance(status, RemovalStatus):
            return sum(1 for r in self.removals if r.status == status)
        return sum(1 for t in self.tools if t.status == status)

    @property
    def failures(self) -> list[tuple[str, str]]:
        """Label and reason for every failed unit of work."""
        items: list[tuple[str, str]] = []
        for removal in self.removals:
            if removal.failed:
                items.append((removal.target.path, removal.reason or "Unknown error"))
        for tool in self.tools:
            if tool.failed:
                items.append((tool.step.display_name, tool.reason or "Unknown error"))
        if self.error:
            items.append((self.label, self.error))
        return items

    @property
    def ok(self) -> bool:
        """Check if the category completed without failures."""
        return not self.failures


@dataclass(frozen=True, slots=True)
class RunReport:
    """Reports for every category executed in one run.

    Attributes:
        categories: Category reports in execution order.
    """

    categories: tuple[CategoryReport, ...] = field(default_factory=tuple)

    def get(self, category_id: str) -> CategoryReport | None:
        """Return the report for a category id, if it ran."""
        for report in self.categories:
            if report.category_id == category_id:
                return report
        return None

    def count(self, status: RemovalStatus | ToolStatus) -> int:
        """Count outcomes with the given status across all categories."""
        return sum(report.count(status) for report in self.categories)

    @property
    def failures(self) -> list[tuple[str, str]]:
        """Label and reason for every failure across all categories."""
        return [item for report in self.categories for item in report.failures]
