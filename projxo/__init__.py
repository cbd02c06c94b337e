"""ProjXO -- scaffold web-framework projects and keep a registry of them.

The registry persists tracked projects in ``~/.projxo/projects.json`` and
offers lookups, recency views, search, bookmarks and statistics.

Usage::

    from projxo import ProjectRegistry, RegistryConfig

    registry = ProjectRegistry(RegistryConfig.from_env())
    registry.add_or_update("shop", "~/code/shop", "nextjs")
    for project in registry.recent(5):
        print(project.name, project.last_accessed)
"""

from projxo.config import Preferences, RegistryConfig
from projxo.models import (
    ProjectFilter,
    ProjectRecord,
    ProjectStats,
    ProjectUpdate,
)
from projxo.registry import InvalidProjectError, ProjectRegistry
from projxo.store import ProjectStore, StoreWriteError

__all__ = [
    # Configuration
    "RegistryConfig",
    "Preferences",
    # Models
    "ProjectRecord",
    "ProjectUpdate",
    "ProjectFilter",
    "ProjectStats",
    # Storage
    "ProjectStore",
    "StoreWriteError",
    # Registry
    "ProjectRegistry",
    "InvalidProjectError",
]
