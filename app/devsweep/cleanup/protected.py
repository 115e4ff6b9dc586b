"""Protected filesystem paths that should never be deleted.

Cache patterns are anchored to per-user environment directories. A
misconfigured pattern (or an environment variable pointing somewhere
unexpected) could otherwise resolve to the anchor itself or to a folder
holding user documents. Those paths are refused by the remover.
"""

import fnmatch
import glob
import os
from collections.abc import Mapping
from pathlib import Path

# Environment variables whose values are directory roots. The roots and
# any of their ancestors are never deleted.
ROOT_VARIABLES: tuple[str, ...] = (
    "USERPROFILE",
    "LOCALAPPDATA",
    "APPDATA",
    "TEMP",
    "TMP",
    "SystemRoot",
    "HOME",
)

# Glob-style patterns relative to the user profile (or home directory).
PROTECTED_PROFILE_PATTERNS: list[str] = [
    # User documents
    "Desktop",
    "Desktop/*",
    "Documents",
    "Documents/*",
    "Downloads",
    "Downloads/*",
    "Pictures",
    "Pictures/*",
    "Music",
    "Music/*",
    "Videos",
    "Videos/*",
    "OneDrive*",
    # Source trees
    "source",
    "source/*",
    "repos",
    "repos/*",
    "src",
    "src/*",
    # Credentials
    ".ssh",
    ".ssh/*",
    ".gnupg",
    ".gnupg/*",
    ".aws",
    ".docker/config.json",
]


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.normpath(path))


def _profile_root(environ: Mapping[str, str]) -> str | None:
    return environ.get("USERPROFILE") or environ.get("HOME") or None


def is_protected_path(path: str, environ: Mapping[str, str] | None = None) -> bool:
    """Check if a filesystem path is protected and should not be deleted.

    A path is protected when it is a filesystem root, equal to or an
    ancestor of one of the environment root directories, or matches one of
    the user-profile patterns.

    Args:
        path: Absolute filesystem path to check.
        environ: Environment mapping to read roots from. Defaults to os.environ.

    Returns:
        True if the path must not be deleted, False otherwise.
    """
    env = os.environ if environ is None else environ
    target = _normalize(path)

    if Path(target).parent == Path(target):
        return True

    for name in ROOT_VARIABLES:
        value = env.get(name)
        if not value:
            continue
        root = _normalize(value)
        if root == target or root.startswith(target.rstrip(os.sep) + os.sep):
            return True

    profile = _profile_root(env)
    if profile:
        base = glob.escape(_normalize(profile))
        for pattern in PROTECTED_PROFILE_PATTERNS:
            if fnmatch.fnmatch(target, os.path.join(base, _normalize(pattern))):
                return True

    return False
