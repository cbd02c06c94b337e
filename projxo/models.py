"""Pydantic v2 models for the ProjXO project registry.

Defines the persisted ``ProjectRecord``, the document that wraps the whole
collection on disk, and the value objects used by the query and statistics
layers.  Attribute names are snake_case in Python and camelCase on disk.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Default clock: the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_project_id() -> str:
    """Default id generator: a random UUID4 string."""
    return str(uuid.uuid4())


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Persisted models
# ---------------------------------------------------------------------------

class ProjectRecord(_CamelModel):
    """A single tracked project.

    Keys outside the schema are kept and written back unchanged.  Timestamps
    without a UTC offset are read as UTC.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=new_project_id, description="Opaque, immutable identifier")
    name: str = Field(..., description="Display name")
    path: str = Field(..., description="Normalized absolute path; unique per registry")
    type: str = Field(..., description="Project type key, e.g. 'react-vite'")
    created_at: datetime = Field(default_factory=utc_now)
    last_accessed: datetime = Field(default_factory=utc_now)
    ide: Optional[str] = Field(default=None, description="Preferred IDE key, None to ask")
    bookmarked: bool = Field(default=False)
    tags: list[str] = Field(default_factory=list)

    @field_validator("created_at", "last_accessed")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ProjectsDocument(BaseModel):
    """The whole-document shape of ``projects.json``."""
    projects: list[ProjectRecord] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Operation inputs
# ---------------------------------------------------------------------------

class ProjectUpdate(BaseModel):
    """Partial update for a record. ``None`` leaves a field unchanged."""
    name: Optional[str] = None
    path: Optional[str] = None
    type: Optional[str] = None
    ide: Optional[str] = None
    bookmarked: Optional[bool] = None
    tags: Optional[list[str]] = None

    def changes(self) -> dict[str, object]:
        """Return only the fields that were given a value."""
        return self.model_dump(exclude_none=True)


class ProjectFilter(BaseModel):
    """Conjunctive filter for listing projects."""
    bookmarked_only: bool = False
    type: Optional[str] = None


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

NO_IDE = "None"


class ProjectStats(BaseModel):
    """Summary statistics computed from the current collection."""
    total: int = Field(default=0, ge=0)
    bookmarked_count: int = Field(default=0, ge=0)
    by_type: dict[str, int] = Field(default_factory=dict)
    most_used_ide: str = Field(default=NO_IDE)
    oldest: Optional[ProjectRecord] = None
    newest: Optional[ProjectRecord] = None
