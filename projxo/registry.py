"""Project registry: CRUD over the persisted collection.

Every mutating call loads the whole collection from the store, changes it in
memory and writes it back.  Lookups that find nothing return ``None`` (or
``False``/``[]``) rather than raising.

Usage::

    from projxo import ProjectRegistry, RegistryConfig

    registry = ProjectRegistry(RegistryConfig.from_env())
    project = registry.add_or_update("shop", "~/code/shop", "nextjs", ide="vscode")
    registry.set_bookmark(project.id, True)
    print(registry.stats().by_type)
"""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime

from projxo import query
from projxo.config import RegistryConfig
from projxo.models import (
    ProjectFilter,
    ProjectRecord,
    ProjectStats,
    ProjectUpdate,
    new_project_id,
    utc_now,
)
from projxo.stats import compute_stats
from projxo.store import ProjectStore
from projxo.utils import normalize_path

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidProjectError(ValueError):
    """Raised for input the registry refuses before doing any I/O."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


def _require_text(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise InvalidProjectError(field, "must not be empty")
    return value


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ProjectRegistry:
    """Tracked projects keyed by id, unique by normalized path.

    Attributes:
        store: Durable store holding the collection between calls.
        clock: Source of ``created_at``/``last_accessed`` timestamps.
        id_factory: Generator for new record ids.
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        *,
        store: ProjectStore | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_project_id,
    ) -> None:
        if store is None:
            store = ProjectStore(config or RegistryConfig())
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    # ------------------------------------------------------------------
    # Create / update
    # ------------------------------------------------------------------

    def add_or_update(
        self,
        name: str,
        path: str,
        type: str,
        ide: str | None = None,
    ) -> ProjectRecord:
        """Track a project, or refresh the record already tracking *path*.

        An existing record keeps its ``id``, ``created_at``, ``bookmarked``
        and ``tags``; its ``type`` and ``last_accessed`` are refreshed and
        its ``ide`` replaced only when *ide* is given.

        Raises:
            InvalidProjectError: *name*, *path* or *type* is empty.
            StoreWriteError: The collection could not be saved.
        """
        _require_text("name", name)
        _require_text("path", path)
        _require_text("type", type)
        normalized = normalize_path(path)

        projects = self.store.load()
        now = self.clock()

        existing = _find(projects, lambda p: p.path == normalized)
        if existing is not None:
            existing.type = type
            existing.last_accessed = now
            if ide:
                existing.ide = ide
            self.store.save(projects)
            return existing

        project = ProjectRecord(
            id=self.id_factory(),
            name=name,
            path=normalized,
            type=type,
            created_at=now,
            last_accessed=now,
            ide=ide or None,
        )
        projects.append(project)
        self.store.save(projects)
        return project

    def update(self, project_id: str, changes: ProjectUpdate) -> ProjectRecord | None:
        """Merge *changes* into a record and refresh its ``last_accessed``.

        Raises:
            InvalidProjectError: A text field was set to an empty value, or
                the new path is already tracked by another record.
        """
        values = changes.changes()
        for field in ("name", "path", "type"):
            if field in values:
                _require_text(field, values[field])
        if "path" in values:
            values["path"] = normalize_path(values["path"])

        projects = self.store.load()
        project = _find(projects, lambda p: p.id == project_id)
        if project is None:
            return None

        if "path" in values:
            clash = _find(
                projects, lambda p: p.path == values["path"] and p.id != project_id
            )
            if clash is not None:
                raise InvalidProjectError("path", f"already tracked as '{clash.name}'")

        for field, value in values.items():
            setattr(project, field, value)
        project.last_accessed = self.clock()

        self.store.save(projects)
        return project

    def touch(self, project_id: str) -> ProjectRecord | None:
        """Refresh ``last_accessed`` only."""
        return self.update(project_id, ProjectUpdate())

    def set_bookmark(self, project_id: str, bookmarked: bool) -> ProjectRecord | None:
        return self._mutate(project_id, lambda p: setattr(p, "bookmarked", bookmarked))

    def toggle_bookmark(self, project_id: str) -> ProjectRecord | None:
        return self._mutate(project_id, lambda p: setattr(p, "bookmarked", not p.bookmarked))

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def delete(self, project_id: str) -> bool:
        """Stop tracking a project.  Files on disk are never touched."""
        projects = self.store.load()
        remaining = [p for p in projects if p.id != project_id]
        if len(remaining) == len(projects):
            return False
        self.store.save(remaining)
        return True

    def clean_unreachable(
        self, exists: Callable[[str], bool] = os.path.exists
    ) -> list[str]:
        """Drop every record whose path fails *exists*.

        Returns:
            The paths that were removed, in collection order.
        """
        projects = self.store.load()
        kept: list[ProjectRecord] = []
        removed: list[str] = []
        for project in projects:
            if exists(project.path):
                kept.append(project)
            else:
                removed.append(project.path)

        if removed:
            self.store.save(kept)
        return removed

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def all(self) -> list[ProjectRecord]:
        """Every record in collection order."""
        return self.store.load()

    def get_by_id(self, project_id: str) -> ProjectRecord | None:
        return _find(self.store.load(), lambda p: p.id == project_id)

    def get_by_path(self, path: str) -> ProjectRecord | None:
        normalized = normalize_path(path)
        return _find(self.store.load(), lambda p: p.path == normalized)

    def get_by_name(self, name: str) -> ProjectRecord | None:
        """Exact name first (case-insensitive), otherwise the first partial match."""
        return query.resolve_name(self.store.load(), name)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def list(self, project_filter: ProjectFilter | None = None) -> list[ProjectRecord]:
        return query.filter_projects(self.store.load(), project_filter)

    def recent(self, limit: int = 10) -> list[ProjectRecord]:
        return query.recent(self.store.load(), limit)

    def search(self, text: str) -> list[ProjectRecord]:
        return query.search(self.store.load(), text)

    def stats(self) -> ProjectStats:
        return compute_stats(self.store.load())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _mutate(
        self, project_id: str, change: Callable[[ProjectRecord], None]
    ) -> ProjectRecord | None:
        projects = self.store.load()
        project = _find(projects, lambda p: p.id == project_id)
        if project is None:
            return None
        change(project)
        self.store.save(projects)
        return project


def _find(
    projects: list[ProjectRecord], predicate: Callable[[ProjectRecord], bool]
) -> ProjectRecord | None:
    return next((p for p in projects if predicate(p)), None)
