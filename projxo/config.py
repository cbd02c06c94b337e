"""ProjXO configuration.

Typed configuration for the project registry. The storage location is an
explicit ``RegistryConfig`` value handed to the registry at construction time,
so nothing in the package depends on a process-wide storage constant.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STORAGE_DIR = Path.home() / ".projxo"
PREFERENCES_VERSION = "1.0.0"


class Preferences(BaseModel):
    """User defaults persisted next to the project registry.

    Stored with the key names the ``config.json`` document has always used
    (``defaultIDE``, ``lastSync``).
    """

    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(default=PREFERENCES_VERSION)
    default_ide: Optional[str] = Field(
        default=None, alias="defaultIDE", description="IDE used when a project has no preference"
    )
    last_sync: Optional[datetime] = Field(default=None, alias="lastSync")


class RegistryConfig(BaseModel):
    """Where the registry lives on disk.

    Every file the registry reads or writes is derived from ``storage_dir``.
    """

    storage_dir: Path = Field(default=DEFAULT_STORAGE_DIR)
    projects_file: str = Field(default="projects.json")
    preferences_file: str = Field(default="config.json")
    backups_dir_name: str = Field(default="backups")

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def projects_path(self) -> Path:
        """Path to the ``projects.json`` document."""
        return self.storage_dir / self.projects_file

    @property
    def preferences_path(self) -> Path:
        """Path to the ``config.json`` preferences document."""
        return self.storage_dir / self.preferences_file

    @property
    def backups_dir(self) -> Path:
        """Root directory for timestamped backups."""
        return self.storage_dir / self.backups_dir_name

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Build a ``RegistryConfig`` from environment variables.

        Recognised variables (all optional):
            PROJXO_HOME -- storage directory (``~`` is expanded).
        """
        home = os.environ.get("PROJXO_HOME")
        if home:
            return cls(storage_dir=Path(home).expanduser())
        return cls()

    def ensure_directories(self) -> None:
        """Create the storage directory if it does not exist yet."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def load_preferences(self) -> Preferences:
        """Read ``config.json``, falling back to defaults when missing or invalid."""
        path = self.preferences_path
        if not path.exists():
            return Preferences()
        try:
            return Preferences.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return Preferences()

    def save_preferences(self, preferences: Preferences) -> Path:
        """Persist *preferences* to ``config.json`` and return the path written."""
        self.ensure_directories()
        path = self.preferences_path
        path.write_text(preferences.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
        return path
