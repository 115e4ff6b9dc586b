"""User settings.

This module provides the settings model and I/O functions for devsweep.
Settings are optional: without a settings file the built-in catalog runs
with default behavior.

Settings are stored in ~/.config/devsweep/config.toml, for example::

    tool_timeout_seconds = 600
    disabled_categories = ["containers"]

    [[categories]]
    id = "my-tool"
    label = "My tool caches"

    [[categories.paths]]
    pattern = "%LOCALAPPDATA%/MyTool/Cache"

    [[categories.tools]]
    command = "mytool"
    args = ["cache", "clear"]
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from devsweep.cleanup.models import Category, ExternalToolStep, PathPattern, validate_template
from devsweep.core.paths import get_settings_path


class PathPatternConfig(BaseModel):
    """A cache location in a user-defined category."""

    model_config = ConfigDict(extra="forbid")

    pattern: Annotated[str, Field(description="Template such as %APPDATA%/Tool/Cache")]
    recursive: bool = True

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        """Apply the same anchoring rules as PathPattern."""
        return validate_template(v)

    def to_pattern(self) -> PathPattern:
        """Convert to the immutable domain model."""
        return PathPattern(self.pattern, recursive=self.recursive)


class ToolStepConfig(BaseModel):
    """A cache-clear command in a user-defined category."""

    model_config = ConfigDict(extra="forbid")

    command: Annotated[str, Field(min_length=1)]
    args: list[str] = Field(default_factory=list)
    label: str | None = None
    destructive: bool = False
    confirm_prompt: str | None = None

    def to_step(self) -> ExternalToolStep:
        """Convert to the immutable domain model."""
        return ExternalToolStep(
            command=self.command,
            args=tuple(self.args),
            label=self.label,
            destructive=self.destructive,
            confirm_prompt=self.confirm_prompt,
        )


class CategoryConfig(BaseModel):
    """A user-defined cache category appended to the built-in catalog."""

    model_config = ConfigDict(extra="forbid")

    id: Annotated[str, Field(pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")]
    label: Annotated[str, Field(min_length=1)]
    description: str | None = None
    paths: list[PathPatternConfig] = Field(default_factory=list)
    tools: list[ToolStepConfig] = Field(default_factory=list)

    def to_category(self) -> Category:
        """Convert to the immutable domain model."""
        return Category(
            id=self.id,
            label=self.label,
            description=self.description,
            paths=tuple(p.to_pattern() for p in self.paths),
            tools=tuple(t.to_step() for t in self.tools),
        )


class Settings(BaseModel):
    """devsweep settings.

    Attributes:
        tool_timeout_seconds: Upper bound for each external command. None
            waits until the command exits.
        disabled_categories: Built-in category ids to leave out of the catalog.
        categories: Extra categories appended after the built-in ones.
    """

    model_config = ConfigDict(extra="forbid")

    tool_timeout_seconds: Annotated[
        int | None,
        Field(ge=1, le=86400, description="Timeout per external command (1-86400s)"),
    ] = None
    disabled_categories: list[str] = Field(default_factory=list)
    categories: list[CategoryConfig] = Field(default_factory=list)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings. Defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = settings.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        # Write atomically using a temporary file in the same directory
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
