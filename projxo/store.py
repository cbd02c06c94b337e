"""Durable whole-document storage for the project registry.

The full collection is read and written as one ``projects.json`` document.
Reads degrade to an empty collection when the file is missing or damaged;
writes go through a temp file and ``os.replace`` and raise on failure.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from projxo.config import RegistryConfig
from projxo.models import ProjectRecord, ProjectsDocument
from projxo.utils import print_warning

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class StoreWriteError(Exception):
    """Raised when the projects document or a backup cannot be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ProjectStore:
    """Reads and writes the project collection as a single JSON document.

    Attributes:
        config: Storage location.
        warn: Callback that receives operator-facing warnings (unreadable or
            corrupted document).  Defaults to a Rich console warning.
    """

    def __init__(
        self,
        config: RegistryConfig,
        warn: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config
        self.warn = warn or print_warning

    @property
    def path(self) -> Path:
        return self.config.projects_path

    def initialize(self) -> None:
        """Create the storage directory and an empty document if missing."""
        self.config.ensure_directories()
        if not self.path.exists():
            self._write_document(ProjectsDocument())

    def load(self) -> list[ProjectRecord]:
        """Return the persisted collection, or ``[]`` if it cannot be read."""
        try:
            self.initialize()
            raw = self.path.read_text(encoding="utf-8")
            return ProjectsDocument.model_validate_json(raw).projects
        except (OSError, UnicodeDecodeError, StoreWriteError, ValidationError) as exc:
            self.warn(
                f"Failed to read projects database ({self.path}), starting with an "
                f"empty one: {_short_reason(exc)}"
            )
            return []

    def save(self, projects: list[ProjectRecord]) -> None:
        """Overwrite the document with *projects*.

        Raises:
            StoreWriteError: The directory or file could not be written.
        """
        try:
            self.config.ensure_directories()
        except OSError as exc:
            raise StoreWriteError(self.path, exc) from exc
        self._write_document(ProjectsDocument(projects=projects))

    def backup(self) -> Path:
        """Copy the current documents into ``backups/<timestamp>/``.

        Returns:
            The backup directory that was created.

        Raises:
            StoreWriteError: The backup could not be written.
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        backup_dir = self.config.backups_dir / timestamp
        try:
            backup_dir.mkdir(parents=True, exist_ok=True)
            for source in (self.config.projects_path, self.config.preferences_path):
                if source.exists():
                    shutil.copy2(source, backup_dir / source.name)
        except OSError as exc:
            raise StoreWriteError(backup_dir, exc) from exc

        return backup_dir

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _write_document(self, document: ProjectsDocument) -> None:
        content = json.dumps(
            document.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
        )
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix="projects_", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreWriteError(self.path, exc) from exc


def _short_reason(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        return f"{exc.error_count()} validation error(s)"
    return str(exc)
