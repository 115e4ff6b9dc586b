"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from devsweep.cleanup.protected import ROOT_VARIABLES


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def cache_env(tmp_path: Path) -> dict[str, str]:
    """Windows-style per-user directories laid out under tmp_path."""
    profile = tmp_path / "profile"
    local = profile / "AppData" / "Local"
    roaming = profile / "AppData" / "Roaming"
    temp = local / "Temp"
    for directory in (local, roaming, temp):
        directory.mkdir(parents=True)
    return {
        "USERPROFILE": str(profile),
        "LOCALAPPDATA": str(local),
        "APPDATA": str(roaming),
        "TEMP": str(temp),
        "TMP": str(temp),
    }


@pytest.fixture
def sandbox_env(cache_env: dict[str, str], monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Replace the process environment roots with cache_env.

    Also hides every external tool so that nothing outside tmp_path runs.
    """
    for name in ROOT_VARIABLES:
        if name != "HOME":
            monkeypatch.delenv(name, raising=False)
    for name, value in cache_env.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setattr("devsweep.cleanup.invoker.find_command", lambda name: None)
    return cache_env


@pytest.fixture
def deny_access(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make existence checks below a named directory fail with EACCES.

    Mirrors a directory without search permission, where stat() raises
    instead of reporting the entry as missing.
    """
    real_exists = Path.exists
    real_is_dir = Path.is_dir

    def deny(name: str) -> None:
        def check(path: Path) -> None:
            if name in path.parts:
                raise PermissionError(13, "Permission denied", str(path))

        def exists(self: Path, *args: Any, **kwargs: Any) -> bool:
            check(self)
            return real_exists(self, *args, **kwargs)

        def is_dir(self: Path, *args: Any, **kwargs: Any) -> bool:
            check(self)
            return real_is_dir(self, *args, **kwargs)

        monkeypatch.setattr(Path, "exists", exists)
        monkeypatch.setattr(Path, "is_dir", is_dir)

    return deny
