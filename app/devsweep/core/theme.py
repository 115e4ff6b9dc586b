"""Console colour theme.

Colours default to the values on ThemeColors. A ``[colors]`` table in
``~/.config/devsweep/theme.toml`` may override any of them.
"""

import logging
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from devsweep.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class ThemeColors(BaseModel):
    """Hex colours (#RGB or #RRGGBB) for each console style."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    removed: str = "#c1ff62"
    skipped: str = "#7f8c8d"
    declined: str = "#d44ebc"
    destructive: str = "#f53263"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.match(value.strip()):
            msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def _read_overrides(path: Path) -> dict[str, object]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_colors(path: Path | None = None) -> ThemeColors:
    """Load theme colours, falling back to defaults on an invalid file.

    Args:
        path: Theme file to read. Defaults to the user theme path.

    Returns:
        ThemeColors with any valid overrides applied.
    """
    path = path or get_user_theme_path()
    try:
        return ThemeColors.model_validate(_read_overrides(path))
    except ValidationError as e:
        logger.warning("Invalid theme file %s, using default colors: %s", path, e)
        return ThemeColors()


def get_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for the shared consoles.

    Args:
        colors: Colours to use. Loaded from the user theme file if None.

    Returns:
        Rich Theme with the style names used across the CLI.
    """
    colors = colors or load_colors()
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "removed": colors.removed,
            "skipped": colors.skipped,
            "declined": colors.declined,
            "destructive": f"bold {colors.destructive}",
            "category.id": f"bold {colors.text}",
        }
    )
