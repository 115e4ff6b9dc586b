"""Cache category catalog.

Defines the built-in cache categories and the Catalog collection that the
CLI menu and the orchestrator work from. Patterns follow Windows per-user
directory conventions; on other platforms the referenced variables are
usually unset and those patterns resolve to nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from devsweep.cleanup.models import RUN_ALL_ID, Category, ExternalToolStep, PathPattern

if TYPE_CHECKING:
    from devsweep.core.settings import Settings

logger = logging.getLogger(__name__)

RUN_ALL_LABEL = "Run all categories"


class CatalogError(ValueError):
    """Raised for invalid catalog contents or unknown category selections."""


def _paths(*templates: str, recursive: bool = True) -> tuple[PathPattern, ...]:
    return tuple(PathPattern(t, recursive=recursive) for t in templates)


BUILD_TOOLS = Category(
    id="build-tools",
    label="Build tool caches",
    description="Gradle, Maven and Android build caches; Flutter pub cache.",
    paths=_paths(
        "%USERPROFILE%/.gradle/caches",
        "%USERPROFILE%/.gradle/daemon/*/*.log",
        "%USERPROFILE%/.gradle/wrapper/dists",
        "%USERPROFILE%/.m2/repository",
        "%USERPROFILE%/.android/build-cache",
        "%USERPROFILE%/.android/cache",
    ),
    tools=(
        ExternalToolStep(
            "flutter",
            ("pub", "cache", "clean", "--force"),
            label="Flutter pub cache",
        ),
    ),
)

PACKAGE_MANAGERS = Category(
    id="package-managers",
    label="Package manager caches",
    description="npm, Yarn, pnpm, pip and NuGet download caches.",
    paths=_paths(
        "%LOCALAPPDATA%/npm-cache",
        "%APPDATA%/npm-cache",
        "%LOCALAPPDATA%/Yarn/Cache",
        "%LOCALAPPDATA%/pnpm-cache",
        "%LOCALAPPDATA%/pip/cache",
        "%LOCALAPPDATA%/NuGet/v3-cache",
        "%LOCALAPPDATA%/NuGet/plugins-cache",
    ),
    tools=(
        ExternalToolStep("npm", ("cache", "clean", "--force"), label="npm cache"),
        ExternalToolStep("yarn", ("cache", "clean"), label="Yarn cache"),
        ExternalToolStep("pnpm", ("store", "prune"), label="pnpm store"),
        ExternalToolStep("pip", ("cache", "purge"), label="pip cache"),
    ),
)

IDE = Category(
    id="ide",
    label="IDE caches",
    description="VS Code, JetBrains, Android Studio and Visual Studio caches.",
    paths=_paths(
        "%APPDATA%/Code/Cache",
        "%APPDATA%/Code/CachedData",
        "%APPDATA%/Code/CachedExtensionVSIXs",
        "%APPDATA%/Code/Code Cache",
        "%APPDATA%/Code/GPUCache",
        "%APPDATA%/Code/logs",
        "%LOCALAPPDATA%/JetBrains/*/caches",
        "%LOCALAPPDATA%/JetBrains/*/log",
        "%LOCALAPPDATA%/Google/AndroidStudio*/caches",
        "%LOCALAPPDATA%/Microsoft/VisualStudio/*/ComponentModelCache",
    ),
)

BROWSERS = Category(
    id="browsers",
    label="Browser caches",
    description="Per-profile disk caches of Chromium browsers and Firefox.",
    paths=_paths(
        "%LOCALAPPDATA%/Google/Chrome/User Data/*/Cache",
        "%LOCALAPPDATA%/Google/Chrome/User Data/*/Code Cache",
        "%LOCALAPPDATA%/Google/Chrome/User Data/*/GPUCache",
        "%LOCALAPPDATA%/Microsoft/Edge/User Data/*/Cache",
        "%LOCALAPPDATA%/Microsoft/Edge/User Data/*/Code Cache",
        "%LOCALAPPDATA%/Microsoft/Edge/User Data/*/GPUCache",
        "%LOCALAPPDATA%/BraveSoftware/Brave-Browser/User Data/*/Cache",
        "%LOCALAPPDATA%/BraveSoftware/Brave-Browser/User Data/*/Code Cache",
        "%LOCALAPPDATA%/Mozilla/Firefox/Profiles/*/cache2",
    ),
)

CREATIVE_APPS = Category(
    id="creative-apps",
    label="Creative app caches",
    description="Adobe media caches and Blender cache files.",
    paths=_paths(
        "%APPDATA%/Adobe/Common/Media Cache Files/*",
        "%APPDATA%/Adobe/Common/Media Cache/*",
        "%APPDATA%/Adobe/Common/Peak Files/*",
        "%LOCALAPPDATA%/Adobe/*/Cache",
        "%LOCALAPPDATA%/Temp/blender_*",
    ),
)

GAME_ENGINES = Category(
    id="game-engines",
    label="Game engine caches",
    description="Unity and Unreal Engine shared caches.",
    paths=_paths(
        "%LOCALAPPDATA%/Unity/cache",
        "%APPDATA%/Unity/Asset Store-5.x",
        "%LOCALAPPDATA%/UnrealEngine/Common/DerivedDataCache",
        "%LOCALAPPDATA%/UnrealEngine/*/DerivedDataCache",
        "%LOCALAPPDATA%/UnrealEngine/*/Saved/Logs",
    ),
)

CONTAINERS = Category(
    id="containers",
    label="Container runtime caches",
    description="Docker Desktop logs; optionally prunes all unused images and volumes.",
    paths=_paths(
        "%LOCALAPPDATA%/Docker/log",
    ),
    tools=(
        ExternalToolStep(
            "docker",
            ("system", "prune", "--all", "--volumes", "--force"),
            label="Docker system prune",
            destructive=True,
            confirm_prompt=(
                "Prune ALL unused Docker images, containers, networks and volumes? "
                "Volume data cannot be recovered."
            ),
        ),
    ),
)

SYSTEM_TEMP = Category(
    id="system-temp",
    label="System temporary files",
    description="User and system temp folders, crash dumps and the recycle bin.",
    paths=_paths(
        "%TEMP%/*",
        "%TMP%/*",
        "%SystemRoot%/Temp/*",
        "%LOCALAPPDATA%/CrashDumps/*",
    ),
    tools=(
        ExternalToolStep(
            "powershell",
            (
                "-NoProfile",
                "-Command",
                "Clear-RecycleBin -Force -ErrorAction SilentlyContinue",
            ),
            label="Recycle bin",
        ),
    ),
)

BUILTIN_CATEGORIES: tuple[Category, ...] = (
    BUILD_TOOLS,
    PACKAGE_MANAGERS,
    IDE,
    BROWSERS,
    CREATIVE_APPS,
    GAME_ENGINES,
    CONTAINERS,
    SYSTEM_TEMP,
)


@dataclass(frozen=True, slots=True)
class MenuEntry:
    """One line of the numbered menu.

    Attributes:
        number: Number the user types to select the entry.
        id: Category id, or ``all`` for the run-all entry.
        label: Human-readable label.
        destructive: Whether the entry contains a confirmation-gated step.
    """

    number: int
    id: str
    label: str
    destructive: bool = False


class Catalog:
    """Ordered, immutable collection of cache categories.

    Besides the declared categories, the catalog exposes a derived
    "run all" entry that executes every category in declared order.

    Args:
        categories: Categories in their fixed execution order.

    Raises:
        CatalogError: If ids are duplicated or use the reserved ``all`` id.
    """

    def __init__(self, categories: Iterable[Category]) -> None:
        self._categories = tuple(categories)
        seen: set[str] = set()
        for category in self._categories:
            if category.id == RUN_ALL_ID:
                msg = f"Category id '{RUN_ALL_ID}' is reserved"
                raise CatalogError(msg)
            if category.id in seen:
                msg = f"Duplicate category id: {category.id}"
                raise CatalogError(msg)
            seen.add(category.id)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return any(c.id == category_id for c in self._categories)

    @property
    def ids(self) -> list[str]:
        """Category ids in declared order."""
        return [c.id for c in self._categories]

    def get(self, category_id: str) -> Category:
        """Look up a category by id.

        Raises:
            CatalogError: If no category has this id.
        """
        for category in self._categories:
            if category.id == category_id:
                return category
        msg = f"Unknown category: {category_id} (available: {', '.join(self.ids)})"
        raise CatalogError(msg)

    def menu_entries(self) -> list[MenuEntry]:
        """Numbered menu entries: 1 runs everything, 2..N+1 one category each."""
        entries = [
            MenuEntry(
                number=1,
                id=RUN_ALL_ID,
                label=RUN_ALL_LABEL,
                destructive=any(c.destructive for c in self._categories),
            )
        ]
        for number, category in enumerate(self._categories, start=2):
            entries.append(
                MenuEntry(
                    number=number,
                    id=category.id,
                    label=category.label,
                    destructive=category.destructive,
                )
            )
        return entries

    def select(self, choice: int) -> list[Category]:
        """Map a menu number to the categories it runs.

        Args:
            choice: 1 for all categories, 2..N+1 for a single category.

        Returns:
            Categories to run, in declared order.

        Raises:
            CatalogError: If the number is out of range.
        """
        if choice == 1:
            return list(self._categories)
        index = choice - 2
        if 0 <= index < len(self._categories):
            return [self._categories[index]]
        msg = f"Invalid selection: {choice} (choose 1-{len(self._categories) + 1})"
        raise CatalogError(msg)

    def without(self, category_ids: Iterable[str]) -> Catalog:
        """Return a catalog without the given categories.

        Unknown ids are logged and ignored.
        """
        excluded = set(category_ids)
        for unknown in sorted(excluded - set(self.ids)):
            logger.warning("Cannot disable unknown category: %s", unknown)
        return Catalog(c for c in self._categories if c.id not in excluded)

    def extended(self, categories: Iterable[Category]) -> Catalog:
        """Return a catalog with extra categories appended."""
        return Catalog((*self._categories, *categories))


def build_default_catalog() -> Catalog:
    """Create the catalog of built-in categories."""
    return Catalog(BUILTIN_CATEGORIES)


def load_catalog(settings: Settings | None = None) -> Catalog:
    """Create the catalog for a run.

    Starts from the built-in categories, drops the ones the settings
    disable, and appends the user-defined ones.

    Args:
        settings: Loaded settings. If None, the built-in catalog is returned.

    Returns:
        The catalog to present and run.

    Raises:
        CatalogError: If a user-defined category is invalid or clashes with
            an existing id.
    """
    catalog = build_default_catalog()
    if settings is None:
        return catalog

    catalog = catalog.without(settings.disabled_categories)
    try:
        extra = [c.to_category() for c in settings.categories]
    except ValueError as e:
        msg = f"Invalid user category: {e}"
        raise CatalogError(msg) from e
    return catalog.extended(extra)
