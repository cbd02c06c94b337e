"""Read-only views over a project collection.

All functions are pure: they take the loaded records and return new lists
without touching storage.
"""

from __future__ import annotations

from projxo.models import ProjectFilter, ProjectRecord


def sort_by_recency(projects: list[ProjectRecord]) -> list[ProjectRecord]:
    """Most recently accessed first; ties keep collection order."""
    return sorted(projects, key=lambda p: p.last_accessed, reverse=True)


def filter_projects(
    projects: list[ProjectRecord],
    project_filter: ProjectFilter | None = None,
) -> list[ProjectRecord]:
    """Apply *project_filter* and return the matches sorted by recency."""
    project_filter = project_filter or ProjectFilter()
    matches = [
        p
        for p in projects
        if (not project_filter.bookmarked_only or p.bookmarked)
        and (project_filter.type is None or p.type == project_filter.type)
    ]
    return sort_by_recency(matches)


def recent(projects: list[ProjectRecord], limit: int = 10) -> list[ProjectRecord]:
    """Return at most *limit* projects, most recently accessed first."""
    if limit <= 0:
        return []
    return sort_by_recency(projects)[:limit]


def search(projects: list[ProjectRecord], query: str) -> list[ProjectRecord]:
    """Case-insensitive substring search over name, type, path and tags.

    Results keep collection order.
    """
    needle = query.lower()
    return [
        p
        for p in projects
        if needle in p.name.lower()
        or needle in p.type.lower()
        or needle in p.path.lower()
        or any(needle in tag.lower() for tag in p.tags)
    ]


def name_matches(projects: list[ProjectRecord], name: str) -> list[ProjectRecord]:
    """Every project whose name contains *name*, case-insensitively."""
    needle = name.lower()
    return [p for p in projects if needle in p.name.lower()]


def resolve_name(projects: list[ProjectRecord], name: str) -> ProjectRecord | None:
    """Exact (case-insensitive) name match first, then the first partial match."""
    needle = name.lower()
    for project in projects:
        if project.name.lower() == needle:
            return project
    partial = name_matches(projects, name)
    return partial[0] if partial else None
