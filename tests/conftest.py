"""Shared pytest fixtures for the ProjXO test suite.

Provides reusable fixtures for:
- Temporary storage directories and configs
- A deterministic clock and id generator
- Registries wired to both
- Record factories for pure query/stat tests
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from projxo.config import RegistryConfig
from projxo.models import ProjectRecord
from projxo.registry import ProjectRegistry
from projxo.store import ProjectStore

EPOCH = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that advances a fixed step on every call."""

    def __init__(self, start: datetime = EPOCH, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Storage directory that does not exist yet."""
    return tmp_path / ".projxo"


@pytest.fixture
def config(storage_dir: Path) -> RegistryConfig:
    return RegistryConfig(storage_dir=storage_dir)


@pytest.fixture
def warnings() -> list[str]:
    """Collects warnings emitted by the store."""
    return []


@pytest.fixture
def store(config: RegistryConfig, warnings: list[str]) -> ProjectStore:
    return ProjectStore(config, warn=warnings.append)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(store: ProjectStore, clock: FakeClock) -> ProjectRegistry:
    """Registry with a deterministic clock and ids ``id-1``, ``id-2`` ..."""
    counter = itertools.count(1)
    return ProjectRegistry(store=store, clock=clock, id_factory=lambda: f"id-{next(counter)}")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@pytest.fixture
def make_record():
    """Factory for standalone records; minutes offset both timestamps from EPOCH."""

    def _make(
        name: str,
        path: str | None = None,
        type: str = "react-vite",
        created: int = 0,
        accessed: int | None = None,
        **extra: Any,
    ) -> ProjectRecord:
        return ProjectRecord(
            id=extra.pop("id", f"rec-{name}"),
            name=name,
            path=path or f"/p/{name}",
            type=type,
            created_at=EPOCH + timedelta(minutes=created),
            last_accessed=EPOCH + timedelta(minutes=created if accessed is None else accessed),
            **extra,
        )

    return _make
