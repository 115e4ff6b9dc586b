"""Unit tests for protected path detection."""

import os
from pathlib import Path
from unittest.mock import patch

from devsweep.cleanup.protected import is_protected_path


class TestIsProtectedPath:
    """Tests for is_protected_path."""

    def test_filesystem_root(self) -> None:
        """The filesystem root is always protected."""
        assert is_protected_path("/", environ={}) is True

    def test_environment_root_itself(self, cache_env: dict[str, str]) -> None:
        """A directory named by a root variable is protected."""
        assert is_protected_path(cache_env["LOCALAPPDATA"], environ=cache_env) is True
        assert is_protected_path(cache_env["TEMP"], environ=cache_env) is True

    def test_trailing_separator(self, cache_env: dict[str, str]) -> None:
        """Trailing separators do not bypass the check."""
        assert is_protected_path(cache_env["APPDATA"] + "/", environ=cache_env) is True

    def test_ancestor_of_environment_root(self, cache_env: dict[str, str]) -> None:
        """Parents of protected roots are protected."""
        app_data = str(Path(cache_env["LOCALAPPDATA"]).parent)
        assert is_protected_path(app_data, environ=cache_env) is True

    def test_cache_below_root_is_allowed(self, cache_env: dict[str, str]) -> None:
        """Entries below a root are deletable."""
        cache = os.path.join(cache_env["LOCALAPPDATA"], "npm-cache")
        assert is_protected_path(cache, environ=cache_env) is False

    def test_temp_children_are_allowed(self, cache_env: dict[str, str]) -> None:
        """Children of TEMP are deletable even though TEMP itself is not."""
        assert is_protected_path(os.path.join(cache_env["TEMP"], "x.tmp"), cache_env) is False

    def test_user_documents(self, cache_env: dict[str, str]) -> None:
        """Document folders and their contents are protected."""
        profile = cache_env["USERPROFILE"]
        assert is_protected_path(os.path.join(profile, "Documents"), cache_env) is True
        assert is_protected_path(os.path.join(profile, "Desktop", "notes.txt"), cache_env) is True
        assert is_protected_path(os.path.join(profile, "OneDrive - Work"), cache_env) is True

    def test_credentials(self, cache_env: dict[str, str]) -> None:
        """SSH keys and the Docker credential file are protected."""
        profile = cache_env["USERPROFILE"]
        assert is_protected_path(os.path.join(profile, ".ssh", "id_ed25519"), cache_env) is True
        assert is_protected_path(os.path.join(profile, ".docker", "config.json"), cache_env) is True

    def test_profile_caches_are_allowed(self, cache_env: dict[str, str]) -> None:
        """Tool caches in the profile are deletable."""
        profile = cache_env["USERPROFILE"]
        assert is_protected_path(os.path.join(profile, ".gradle", "caches"), cache_env) is False

    def test_home_used_without_userprofile(self, tmp_path: Path) -> None:
        """HOME stands in for USERPROFILE."""
        environ = {"HOME": str(tmp_path)}
        assert is_protected_path(str(tmp_path / ".ssh"), environ) is True
        assert is_protected_path(str(tmp_path / ".cache" / "pip"), environ) is False

    def test_defaults_to_process_environment(self, tmp_path: Path) -> None:
        """Without an explicit mapping, os.environ is used."""
        local = tmp_path / "Local"
        with patch.dict(os.environ, {"LOCALAPPDATA": str(local)}):
            assert is_protected_path(str(local)) is True
