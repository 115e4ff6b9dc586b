"""Path pattern resolution.

Expands environment-anchored, wildcarded cache patterns into the concrete
filesystem entries that currently exist. Resolution is read-only: it only
lists directories and never modifies anything.

Only wildcard characters written in a template act as wildcards. Values
substituted from the environment are matched literally, so a profile path
such as ``C:\\Users\\dev[1]`` neither hides its caches nor reaches into a
sibling directory.
"""

import fnmatch
import glob
import logging
import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path

from devsweep.cleanup.models import (
    ENV_REF_PATTERN,
    SEGMENT_SEPARATORS,
    PathPattern,
    PathType,
    ResolvedTarget,
)

logger = logging.getLogger(__name__)

_WILDCARD_CHARS = frozenset("*?[")

# glob.escape wraps each special character in brackets: "*" -> "[*]"
_ESCAPED_CHAR = re.compile(r"\[([*?[])\]")


def has_wildcard(segment: str) -> bool:
    """Check if a path segment contains glob wildcard characters."""
    return any(char in _WILDCARD_CHARS for char in segment)


def _literal_name(segment: str) -> str | None:
    """Return the plain name of a segment, or None if it holds a wildcard."""
    if has_wildcard(_ESCAPED_CHAR.sub("", segment)):
        return None
    return _ESCAPED_CHAR.sub(r"\1", segment)


def _split(path: str) -> list[str]:
    """Split a path on either separator into anchor and segments."""
    return list(Path(SEGMENT_SEPARATORS.sub("/", path)).parts)


class PathPatternResolver:
    """Resolves PathPatterns to existing filesystem entries.

    Args:
        environ: Environment mapping used for ``%NAME%`` substitution.
            Defaults to the live process environment.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        """Environment mapping used for substitution."""
        return os.environ if self._environ is None else self._environ

    def expand(self, template: str) -> str | None:
        """Substitute every environment variable reference in a template.

        Args:
            template: Pattern template containing ``%NAME%`` references.

        Returns:
            The substituted string, or None if any referenced variable is
            unset or empty.
        """
        return self._substitute(template, escape=False)

    def _substitute(self, template: str, escape: bool) -> str | None:
        missing: list[str] = []

        def _value(match: re.Match[str]) -> str:
            name = match.group(1)
            value = self.environ.get(name)
            if not value:
                missing.append(name)
                return ""
            return glob.escape(value) if escape else value

        substituted = ENV_REF_PATTERN.sub(_value, template)
        if missing:
            logger.debug("Skipping %s: unset variable(s) %s", template, ", ".join(missing))
            return None
        return substituted

    def resolve(self, pattern: PathPattern) -> list[ResolvedTarget]:
        """Resolve a pattern to the entries that currently exist.

        Literal segments are joined as-is. Wildcard segments list the
        current directory and recurse into every match; in a non-final
        position only directories match, in the final position files and
        directories both match. Missing or inaccessible intermediate
        segments end that branch without error.

        Args:
            pattern: The pattern to resolve.

        Returns:
            Existing targets in filesystem enumeration order, without duplicates.
        """
        expanded = self.expand(pattern.template)
        if expanded is None:
            return []

        if not Path(SEGMENT_SEPARATORS.sub("/", expanded)).is_absolute():
            logger.warning(
                "Skipping %s: expands to relative path %s", pattern.template, expanded
            )
            return []

        escaped = self._substitute(pattern.template, escape=True)
        if escaped is None:
            return []

        anchor, *segments = _split(escaped)
        found: dict[str, ResolvedTarget] = {}
        for match in self._walk(Path(anchor), segments):
            key = str(match)
            if key not in found:
                found[key] = ResolvedTarget(
                    path=key,
                    path_type=_path_type(match),
                    recursive=pattern.recursive,
                    pattern=pattern.template,
                )

        logger.debug("Resolved %s to %d target(s)", pattern.template, len(found))
        return list(found.values())

    def _walk(self, base: Path, segments: list[str]) -> Iterator[Path]:
        """Yield existing paths below base that match the remaining segments."""
        if not segments:
            if _exists(base):
                yield base
            return

        head, rest = segments[0], segments[1:]

        name = _literal_name(head)
        if name is not None:
            candidate = base / name
            if rest and not _is_dir(candidate):
                return
            yield from self._walk(candidate, rest)
            return

        for entry in self._list_dir(base):
            if not fnmatch.fnmatch(entry.name, head):
                continue
            if rest:
                if _is_dir(entry):
                    yield from self._walk(entry, rest)
            else:
                yield entry

    def _list_dir(self, directory: Path) -> list[Path]:
        """List a directory, treating unreadable or missing ones as empty."""
        try:
            if not directory.is_dir():
                return []
            return list(directory.iterdir())
        except PermissionError:
            logger.warning("Permission denied listing directory: %s", directory)
            return []
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e)
            return []


def _exists(path: Path) -> bool:
    try:
        return path.exists() or path.is_symlink()
    except OSError as e:
        logger.warning("Cannot access %s: %s", path, e)
        return False


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as e:
        logger.warning("Cannot access %s: %s", path, e)
        return False


def _path_type(path: Path) -> PathType:
    try:
        is_directory = path.is_dir() and not path.is_symlink()
    except OSError:
        is_directory = False
    return PathType.DIRECTORY if is_directory else PathType.FILE
