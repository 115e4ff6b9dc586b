"""Unit tests for theme module.

Tests colour validation, user overrides, and Rich theme generation.
"""

from pathlib import Path

import pytest
from devsweep.core.paths import get_user_theme_path
from devsweep.core.theme import ThemeColors, get_theme, load_colors
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    @pytest.mark.parametrize("color", ["#abc", "#A1B2C3", " #ffffff "])
    def test_accepts_hex(self, color: str) -> None:
        """ThemeColors accepts #RGB and #RRGGBB codes."""
        assert ThemeColors(muted=color).muted == color.strip()

    @pytest.mark.parametrize("color", ["ffffff", "#ff", "#gggggg", "red", 42])
    def test_rejects_non_hex(self, color: object) -> None:
        """ThemeColors rejects anything but hex codes."""
        with pytest.raises(ValueError, match="#RGB or #RRGGBB"):
            ThemeColors(skipped=color)  # type: ignore[arg-type]

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadColors:
    """Tests for load_colors function."""

    def test_defaults_without_user_file(self) -> None:
        """No theme file yields the default colours."""
        assert load_colors() == ThemeColors()

    def test_user_file_overrides(self) -> None:
        """Values in the user theme file replace the defaults."""
        user_theme = get_user_theme_path()
        user_theme.parent.mkdir(parents=True)
        user_theme.write_text('[colors]\nremoved = "#00ff00"\n')

        colors = load_colors()

        assert colors.removed == "#00ff00"
        assert colors.success == ThemeColors().success

    @pytest.mark.parametrize(
        "content",
        [
            "not valid [ toml syntax",
            'colors = "red"\n',
            '[colors]\nerror = "red"\n',
            '[colors]\nunknown = "#ffffff"\n',
        ],
    )
    def test_invalid_file_falls_back_to_defaults(self, tmp_path: Path, content: str) -> None:
        """A broken theme file never prevents the CLI from starting."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text(content)

        assert load_colors(theme_file) == ThemeColors()


class TestGetTheme:
    """Tests for get_theme function."""

    def test_includes_outcome_styles(self) -> None:
        """Theme includes the styles used by run reports."""
        theme = get_theme(ThemeColors())

        for name in ("removed", "skipped", "declined", "destructive", "category.id"):
            assert name in theme.styles

    def test_uses_given_colors(self) -> None:
        """Styles are built from the supplied colours."""
        theme = get_theme(ThemeColors(removed="#123456"))

        assert theme.styles["removed"].color is not None
        assert theme.styles["removed"].color.name == "#123456"

    def test_loads_colors_when_omitted(self) -> None:
        """Without arguments the user theme is loaded."""
        assert isinstance(get_theme(), Theme)
