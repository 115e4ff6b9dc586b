"""Unit tests for config CLI commands."""

import tomllib
from pathlib import Path

from devsweep.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _settings_file(config_home: Path) -> Path:
    return config_home / "devsweep" / "config.toml"


class TestConfigPath:
    """Tests for devsweep config path."""

    def test_prints_settings_location(self, isolated_config_home: Path) -> None:
        """The settings path follows XDG_CONFIG_HOME."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.output.strip() == str(_settings_file(isolated_config_home))


class TestConfigShow:
    """Tests for devsweep config show."""

    def test_defaults_without_file(self) -> None:
        """Without a file the defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "No settings file" in result.output
        assert "disabled_categories = []" in result.output

    def test_shows_file_contents(self, isolated_config_home: Path) -> None:
        """Values from the settings file are shown."""
        settings_file = _settings_file(isolated_config_home)
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("tool_timeout_seconds = 120\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "tool_timeout_seconds = 120" in result.output

    def test_invalid_file(self, isolated_config_home: Path) -> None:
        """Invalid settings exit with code 1."""
        settings_file = _settings_file(isolated_config_home)
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("tool_timeout_seconds = [\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output


class TestConfigInit:
    """Tests for devsweep config init."""

    def test_creates_file(self, isolated_config_home: Path) -> None:
        """init writes a default settings file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        data = tomllib.loads(_settings_file(isolated_config_home).read_text())
        assert data["disabled_categories"] == []

    def test_refuses_to_overwrite(self, isolated_config_home: Path) -> None:
        """init keeps an existing file unless --force is given."""
        settings_file = _settings_file(isolated_config_home)
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("tool_timeout_seconds = 120\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert "120" in settings_file.read_text()

    def test_force_overwrites(self, isolated_config_home: Path) -> None:
        """--force replaces an existing file with defaults."""
        settings_file = _settings_file(isolated_config_home)
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text("tool_timeout_seconds = 120\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert "tool_timeout_seconds" not in settings_file.read_text()
