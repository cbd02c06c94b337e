"""Summary statistics for a project collection."""

from __future__ import annotations

from collections import Counter

from projxo.catalog import SKIP
from projxo.models import NO_IDE, ProjectRecord, ProjectStats


def most_used_ide(projects: list[ProjectRecord]) -> str:
    """The most common IDE preference; ties go to the first one encountered.

    Records without a preference, or with the ``skip`` choice, are ignored.
    Returns ``"None"`` when no record has an IDE set.
    """
    counts = Counter(p.ide for p in projects if p.ide and p.ide != SKIP)
    if not counts:
        return NO_IDE
    # Counter preserves first-insertion order and max() keeps the first maximum.
    return max(counts, key=lambda ide: counts[ide])


def compute_stats(projects: list[ProjectRecord]) -> ProjectStats:
    """Compute fresh statistics from *projects*."""
    by_type: dict[str, int] = {}
    for project in projects:
        by_type[project.type] = by_type.get(project.type, 0) + 1

    oldest = min(projects, key=lambda p: p.created_at, default=None)
    newest = max(projects, key=lambda p: p.created_at, default=None)

    return ProjectStats(
        total=len(projects),
        bookmarked_count=sum(1 for p in projects if p.bookmarked),
        by_type=by_type,
        most_used_ide=most_used_ide(projects),
        oldest=oldest,
        newest=newest,
    )
