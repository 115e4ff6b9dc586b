"""Unit tests for the run command."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from devsweep.cli.main import app
from devsweep.utils.shell import CommandResult
from typer.testing import CliRunner

runner = CliRunner()


def _docker_only(name: str) -> str | None:
    return "/usr/bin/docker" if name == "docker" else None


class TestRunCommand:
    """Tests for devsweep run."""

    def test_requires_selection(self, sandbox_env: dict[str, str]) -> None:
        """Without --category or --all the command fails."""
        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "--category" in result.output

    def test_unknown_category(self, sandbox_env: dict[str, str]) -> None:
        """Unknown ids fail before anything is deleted."""
        npm_cache = Path(sandbox_env["LOCALAPPDATA"]) / "npm-cache"
        npm_cache.mkdir()

        result = runner.invoke(app, ["run", "-c", "package-managers", "-c", "nope"])

        assert result.exit_code == 1
        assert "Unknown category: nope" in result.output
        assert npm_cache.is_dir()

    def test_cleans_selected_categories(self, sandbox_env: dict[str, str]) -> None:
        """Selected categories are cleaned."""
        local = Path(sandbox_env["LOCALAPPDATA"])
        (local / "npm-cache" / "_cacache").mkdir(parents=True)
        (local / "JetBrains" / "PyCharm2024.1" / "caches").mkdir(parents=True)
        (local / "pip" / "cache").mkdir(parents=True)

        result = runner.invoke(app, ["run", "-c", "ide", "--category", "package-managers"])

        assert result.exit_code == 0
        assert not (local / "npm-cache").exists()
        assert not (local / "pip" / "cache").exists()
        assert not (local / "JetBrains" / "PyCharm2024.1" / "caches").exists()
        assert (local / "JetBrains" / "PyCharm2024.1").is_dir()

    def test_all(self, sandbox_env: dict[str, str]) -> None:
        """--all cleans every category."""
        temp = Path(sandbox_env["TEMP"])
        (temp / "setup.log").write_text("log")
        (temp / "build-1234").mkdir()

        result = runner.invoke(app, ["run", "--all"])

        assert result.exit_code == 0
        assert list(temp.iterdir()) == []
        assert temp.is_dir()
        assert "completed without errors" in result.output

    def test_dry_run_option(self, sandbox_env: dict[str, str]) -> None:
        """--dry-run deletes nothing."""
        temp = Path(sandbox_env["TEMP"])
        (temp / "setup.log").write_text("log")

        result = runner.invoke(app, ["run", "-c", "system-temp", "--dry-run"])

        assert result.exit_code == 0
        assert (temp / "setup.log").exists()
        assert "dry-run" in result.output

    def test_global_dry_run(self, sandbox_env: dict[str, str]) -> None:
        """The global --dry-run option also applies."""
        temp = Path(sandbox_env["TEMP"])
        (temp / "setup.log").write_text("log")

        result = runner.invoke(app, ["--dry-run", "run", "-c", "system-temp"])

        assert result.exit_code == 0
        assert (temp / "setup.log").exists()

    def test_contained_failure_keeps_exit_code(self, sandbox_env: dict[str, str]) -> None:
        """Failures are reported in the summary without failing the command."""
        temp = Path(sandbox_env["TEMP"])
        (temp / "locked.tmp").write_text("busy")

        with patch.object(Path, "unlink", side_effect=PermissionError(13, "Permission denied")):
            result = runner.invoke(app, ["run", "-c", "system-temp"])

        assert result.exit_code == 0
        assert "1 item(s) could not be cleaned" in result.output
        assert (temp / "locked.tmp").exists()

    @patch("devsweep.cleanup.invoker.run_command")
    def test_destructive_declined_without_yes(
        self, mock_run: MagicMock, sandbox_env: dict[str, str]
    ) -> None:
        """Destructive steps are declined unless --yes is given."""
        with patch("devsweep.cleanup.invoker.find_command", side_effect=_docker_only):
            result = runner.invoke(app, ["run", "-c", "containers"])

        assert result.exit_code == 0
        assert "declined" in result.output
        mock_run.assert_not_called()

    @patch("devsweep.cleanup.invoker.run_command")
    def test_destructive_approved_with_yes(
        self, mock_run: MagicMock, sandbox_env: dict[str, str]
    ) -> None:
        """--yes approves destructive steps."""
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

        with patch("devsweep.cleanup.invoker.find_command", side_effect=_docker_only):
            result = runner.invoke(app, ["run", "-c", "containers", "--yes"])

        assert result.exit_code == 0
        mock_run.assert_called_once()

    @patch("devsweep.cleanup.invoker.run_command")
    def test_failed_tool_is_reported(
        self, mock_run: MagicMock, sandbox_env: dict[str, str]
    ) -> None:
        """A failing tool shows up in the summary."""
        mock_run.return_value = CommandResult(stdout="", stderr="daemon not running", returncode=1)

        with patch("devsweep.cleanup.invoker.find_command", side_effect=_docker_only):
            result = runner.invoke(app, ["run", "-c", "containers", "-y"])

        assert result.exit_code == 0
        assert "daemon not running" in result.output

    @patch("devsweep.cli.commands.run.build_orchestrator")
    def test_interrupt(self, mock_build: MagicMock, sandbox_env: dict[str, str]) -> None:
        """Ctrl-C exits with code 130."""
        mock_build.return_value.run_all.side_effect = KeyboardInterrupt

        result = runner.invoke(app, ["run", "--all"])

        assert result.exit_code == 130

    def test_user_category(self, sandbox_env: dict[str, str], isolated_config_home: Path) -> None:
        """Categories from the settings file can be run by id."""
        tool_cache = Path(sandbox_env["APPDATA"]) / "MyTool" / "Cache"
        tool_cache.mkdir(parents=True)
        settings_file = isolated_config_home / "devsweep" / "config.toml"
        settings_file.parent.mkdir(parents=True)
        settings_file.write_text(
            '[[categories]]\nid = "my-tool"\nlabel = "My tool"\n'
            '[[categories.paths]]\npattern = "%APPDATA%/MyTool/Cache"\n'
        )

        result = runner.invoke(app, ["run", "-c", "my-tool"])

        assert result.exit_code == 0
        assert not tool_cache.exists()
