"""Cache cleanup engine.

This module provides the cache category model, path pattern resolution,
safe removal, external tool invocation, orchestration, and the built-in
category catalog.
"""

from devsweep.cleanup.catalog import (
    BUILTIN_CATEGORIES,
    Catalog,
    CatalogError,
    MenuEntry,
    build_default_catalog,
    load_catalog,
)
from devsweep.cleanup.invoker import ExternalToolInvoker
from devsweep.cleanup.models import (
    RUN_ALL_ID,
    Category,
    CategoryReport,
    ExternalToolStep,
    PathPattern,
    PathType,
    RemovalOutcome,
    RemovalStatus,
    ResolvedTarget,
    RunReport,
    ToolOutcome,
    ToolStatus,
)
from devsweep.cleanup.orchestrator import CleanupOrchestrator, ConfirmFn, approve, decline
from devsweep.cleanup.protected import is_protected_path
from devsweep.cleanup.remover import SafeRemover
from devsweep.cleanup.resolver import PathPatternResolver

__all__ = [
    "BUILTIN_CATEGORIES",
    "RUN_ALL_ID",
    "Catalog",
    "CatalogError",
    "Category",
    "CategoryReport",
    "CleanupOrchestrator",
    "ConfirmFn",
    "ExternalToolInvoker",
    "ExternalToolStep",
    "MenuEntry",
    "PathPattern",
    "PathPatternResolver",
    "PathType",
    "RemovalOutcome",
    "RemovalStatus",
    "ResolvedTarget",
    "RunReport",
    "SafeRemover",
    "ToolOutcome",
    "ToolStatus",
    "approve",
    "build_default_catalog",
    "decline",
    "is_protected_path",
    "load_catalog",
]
