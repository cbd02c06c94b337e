"""ProjXO command-line interface.

Usage::

    pxo create react-vite my-app -d ~/code --ide vscode
    pxo list --bookmarked
    pxo open my-app
    python -m projxo stats
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from projxo import query
from projxo.catalog import IDES, PROJECT_TYPES, SKIP, get_next_steps, is_valid_ide, type_display_name
from projxo.config import RegistryConfig
from projxo.creator import ProjectCreationError, ProjectCreator
from projxo.ide import open_in_ide
from projxo.models import ProjectFilter, ProjectRecord, ProjectUpdate
from projxo.registry import InvalidProjectError, ProjectRegistry
from projxo.store import StoreWriteError
from projxo.utils import (
    console,
    format_relative_time,
    print_error,
    print_info,
    print_section,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _project_table(projects: list[ProjectRecord], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Last accessed")
    table.add_column("Path", style="dim")
    table.add_column("★", justify="center")

    for index, project in enumerate(projects, start=1):
        table.add_row(
            str(index),
            escape(project.name),
            type_display_name(project.type),
            format_relative_time(project.last_accessed),
            escape(project.path),
            "★" if project.bookmarked else "",
        )
    return table


def _print_projects(projects: list[ProjectRecord], title: str, empty_message: str) -> None:
    if not projects:
        print_info(empty_message)
        return
    console.print()
    console.print(_project_table(projects, f"{title} ({len(projects)})"))
    console.print()


def _print_details(project: ProjectRecord) -> None:
    print_summary_table(
        {
            "ID": project.id,
            "Name": project.name,
            "Path": project.path,
            "Type": type_display_name(project.type),
            "IDE": project.ide or "(ask every time)",
            "Bookmarked": "yes" if project.bookmarked else "no",
            "Tags": ", ".join(project.tags) or "-",
            "Created": project.created_at.isoformat(),
            "Last accessed": f"{project.last_accessed.isoformat()} "
            f"({format_relative_time(project.last_accessed)})",
        },
        title=project.name,
    )


def _default_ide(registry: ProjectRegistry) -> str | None:
    return registry.store.config.load_preferences().default_ide


def _resolve(registry: ProjectRegistry, name: str) -> ProjectRecord | None:
    """Find a project by name, warning when a partial name is ambiguous."""
    project = registry.get_by_name(name)
    if project is None:
        print_error(f"No project matches '{name}'")
        return None
    if project.name.lower() != name.lower():
        matches = query.name_matches(registry.all(), name)
        if len(matches) > 1:
            others = ", ".join(p.name for p in matches[1:])
            print_warning(f"'{name}' also matches: {others}; using '{project.name}'")
    return project


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_create(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    creator = ProjectCreator(registry)
    project = asyncio.run(
        creator.create(
            args.type,
            args.name,
            args.directory,
            ide=args.ide,
            overwrite=args.overwrite,
        )
    )

    print_section("Project created successfully!")
    console.print("[bold]Project location:[/bold]")
    console.print(f"  {project.path}", style="cyan", markup=False)
    console.print()
    console.print("[bold]Next steps:[/bold]")
    for step in get_next_steps(project.type, project.path):
        console.print(f"  {step}", style="green", markup=False)
    console.print()

    if args.ide and args.ide != SKIP:
        asyncio.run(open_in_ide(project.path, args.ide))
    return 0


def cmd_track(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    path = Path(args.path).expanduser()
    if not path.is_dir():
        print_error(f"Not a directory: {path}")
        return 1
    name = args.name or path.resolve().name
    existing = registry.get_by_path(str(path))
    project = registry.add_or_update(name, str(path), args.type, ide=args.ide)
    verb = "Updated" if existing else "Now tracking"
    print_success(f"{verb} {project.name} ({project.path})")
    return 0


def cmd_list(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    projects = registry.list(ProjectFilter(bookmarked_only=args.bookmarked, type=args.type))
    title = "Bookmarked Projects" if args.bookmarked else "Your Projects"
    _print_projects(projects, title, "No projects found. Create one with: pxo create")
    return 0


def cmd_bookmarks(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    projects = registry.list(ProjectFilter(bookmarked_only=True))
    _print_projects(projects, "Bookmarked Projects", "No bookmarked projects")
    return 0


def cmd_recent(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    _print_projects(registry.recent(args.limit), "Recent Projects", "No recent projects")
    return 0


def cmd_search(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    projects = registry.search(args.query)
    _print_projects(projects, f"Matches for '{escape(args.query)}'", "No matching projects")
    return 0


def cmd_open(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    project = _resolve(registry, args.name)
    if project is None:
        return 1
    if args.ide and not is_valid_ide(args.ide):
        print_error(f"Unknown IDE: {args.ide}")
        return 1

    changes = ProjectUpdate(ide=args.ide) if args.remember and args.ide else ProjectUpdate()
    project = registry.update(project.id, changes) or project

    ide_key = args.ide or project.ide or _default_ide(registry)
    if not ide_key or ide_key == SKIP:
        print_info("No IDE selected. Project path:")
        console.print(f"  {project.path}", style="cyan", markup=False)
        return 0
    if not is_valid_ide(ide_key):
        print_error(f"Unknown IDE: {ide_key}")
        return 1

    opened = asyncio.run(open_in_ide(project.path, ide_key))
    return 0 if opened else 1


def cmd_bookmark(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    project = _resolve(registry, args.name)
    if project is None:
        return 1
    if args.state is None:
        updated = registry.toggle_bookmark(project.id)
    else:
        updated = registry.set_bookmark(project.id, args.state)
    if updated is None:
        print_error(f"Project '{project.name}' disappeared while updating")
        return 1
    state = "Bookmarked" if updated.bookmarked else "Removed bookmark from"
    print_success(f"{state} {updated.name}")
    return 0


def cmd_remove(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    project = _resolve(registry, args.name)
    if project is None:
        return 1
    if registry.delete(project.id):
        print_success(f"Removed {project.name} from tracking (files were not deleted)")
        return 0
    print_error(f"Project '{project.name}' was not found")
    return 1


def cmd_info(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    project = _resolve(registry, args.name)
    if project is None:
        return 1
    _print_details(project)
    return 0


def cmd_clean(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    removed = registry.clean_unreachable(os.path.exists)
    if not removed:
        print_success("All tracked projects still exist")
        return 0
    print_success(f"Removed {len(removed)} missing project(s) from tracking")
    for path in removed:
        console.print(f"  - {path}", style="dim", markup=False)
    return 0


def cmd_stats(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    stats = registry.stats()
    if stats.total == 0:
        print_info("No projects tracked yet")
        return 0

    summary = {
        "Total projects": str(stats.total),
        "Bookmarked": str(stats.bookmarked_count),
        "Most used IDE": IDES[stats.most_used_ide].name
        if stats.most_used_ide in IDES
        else stats.most_used_ide,
    }
    if stats.oldest is not None:
        summary["Oldest"] = f"{stats.oldest.name} ({format_relative_time(stats.oldest.created_at)})"
    if stats.newest is not None:
        summary["Newest"] = f"{stats.newest.name} ({format_relative_time(stats.newest.created_at)})"
    print_summary_table(summary, title="Project Statistics")

    by_type = {type_display_name(key): str(count) for key, count in stats.by_type.items()}
    print_summary_table(by_type, title="Projects by Type")
    return 0


def cmd_backup(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    backup_dir = registry.store.backup()
    print_success(f"Backup written to {backup_dir}")
    return 0


def cmd_types(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    table = Table(title="Project Types", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Name")
    table.add_column("Description", style="dim")
    for key, project_type in PROJECT_TYPES.items():
        table.add_row(key, project_type.name, project_type.description)
    console.print(table)
    return 0


def cmd_ides(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    table = Table(title="IDEs", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Name")
    table.add_column("Command", style="dim")
    for key, ide in IDES.items():
        table.add_row(key, ide.name, ide.command or "-")
    console.print(table)
    return 0


def cmd_config(args: argparse.Namespace, registry: ProjectRegistry) -> int:
    config = registry.store.config
    preferences = config.load_preferences()
    if args.default_ide is not None:
        if not is_valid_ide(args.default_ide):
            print_error(f"Unknown IDE: {args.default_ide}")
            return 1
        preferences.default_ide = args.default_ide
        config.save_preferences(preferences)
        print_success(f"Default IDE set to {IDES[args.default_ide].name}")
        return 0

    print_summary_table(
        {
            "Storage": str(config.storage_dir),
            "Version": preferences.version,
            "Default IDE": preferences.default_ide or "(none)",
        },
        title="Configuration",
    )
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pxo",
        description="ProjXO -- scaffold web projects and keep track of them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  pxo create react-vite my-app -d ~/code --ide vscode\n"
            "  pxo track . --type nextjs\n"
            "  pxo recent -n 5\n"
            "  pxo open my-app\n"
        ),
    )
    parser.add_argument(
        "--home",
        default=None,
        help="Storage directory (default: $PROJXO_HOME or ~/.projxo)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create", help="Create a new project and track it")
    p.add_argument("type", choices=sorted(PROJECT_TYPES), help="Project type")
    p.add_argument("name", help="Project name (also the directory name)")
    p.add_argument("--directory", "-d", default=os.getcwd(), help="Parent directory (default: cwd)")
    p.add_argument("--ide", choices=sorted(IDES), default=None, help="IDE to open afterwards")
    p.add_argument("--overwrite", action="store_true", help="Replace an existing directory")
    p.set_defaults(handler=cmd_create)

    p = sub.add_parser("track", help="Track an existing project directory")
    p.add_argument("path", help="Project directory")
    p.add_argument("--name", default=None, help="Display name (default: directory name)")
    p.add_argument("--type", default="other", help="Project type key (default: other)")
    p.add_argument("--ide", choices=sorted(IDES), default=None, help="Preferred IDE")
    p.set_defaults(handler=cmd_track)

    p = sub.add_parser("list", help="List tracked projects, most recent first")
    p.add_argument("--bookmarked", action="store_true", help="Only bookmarked projects")
    p.add_argument("--type", default=None, help="Only projects of this type")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("recent", help="Show recently accessed projects")
    p.add_argument("--limit", "-n", type=int, default=10, help="How many (default: 10)")
    p.set_defaults(handler=cmd_recent)

    p = sub.add_parser("search", help="Search names, types, paths and tags")
    p.add_argument("query")
    p.set_defaults(handler=cmd_search)

    p = sub.add_parser("open", help="Open a project in its IDE")
    p.add_argument("name", help="Project name (partial names allowed)")
    p.add_argument("--ide", default=None, help="IDE to use instead of the saved one")
    p.add_argument("--remember", action="store_true", help="Save --ide as the project's IDE")
    p.set_defaults(handler=cmd_open)

    p = sub.add_parser("bookmark", help="Toggle or set a project's bookmark")
    p.add_argument("name")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--on", dest="state", action="store_const", const=True, default=None)
    group.add_argument("--off", dest="state", action="store_const", const=False)
    p.set_defaults(handler=cmd_bookmark)

    p = sub.add_parser("bookmarks", help="List bookmarked projects")
    p.set_defaults(handler=cmd_bookmarks)

    p = sub.add_parser("remove", help="Stop tracking a project (files are kept)")
    p.add_argument("name")
    p.set_defaults(handler=cmd_remove)

    p = sub.add_parser("info", help="Show a project's details")
    p.add_argument("name")
    p.set_defaults(handler=cmd_info)

    p = sub.add_parser("clean", help="Forget projects whose directory no longer exists")
    p.set_defaults(handler=cmd_clean)

    p = sub.add_parser("stats", help="Show usage statistics")
    p.set_defaults(handler=cmd_stats)

    p = sub.add_parser("backup", help="Back up the registry files")
    p.set_defaults(handler=cmd_backup)

    p = sub.add_parser("types", help="List supported project types")
    p.set_defaults(handler=cmd_types)

    p = sub.add_parser("ides", help="List supported IDEs")
    p.set_defaults(handler=cmd_ides)

    p = sub.add_parser("config", help="Show or change preferences")
    p.add_argument("--default-ide", default=None, help="IDE used when a project has none")
    p.set_defaults(handler=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``pxo`` and ``python -m projxo``."""
    args = build_parser().parse_args(argv)

    if args.home:
        config = RegistryConfig(storage_dir=Path(args.home).expanduser())
    else:
        config = RegistryConfig.from_env()
    registry = ProjectRegistry(config)
    handler: Callable[[argparse.Namespace, ProjectRegistry], int] = args.handler

    try:
        return handler(args, registry)
    except (InvalidProjectError, ProjectCreationError, StoreWriteError) as exc:
        print_error(str(exc))
        return 1
    except KeyboardInterrupt:
        console.print()
        print_warning("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
