"""Shared utility functions for ProjXO.

Provides async command execution, path helpers, name validation, relative
time formatting, and Rich-based console output.
"""

from __future__ import annotations

import asyncio
import os
import re
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int | None = None,
    capture: bool = False,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Project generators are interactive, so by default the child inherits the
    parent's streams.  Pass ``capture=True`` to collect stdout/stderr instead.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed;
            ``None`` waits indefinitely.
        capture: Whether to capture stdout/stderr.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If the program cannot be
        started the return code is 127 and stderr carries the reason.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    except OSError as exc:
        return (127, "", f"Failed to execute {cmd[0]}: {exc}")

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def expand_home_path(path: str | Path) -> Path:
    """Expand a leading ``~`` to the user's home directory."""
    return Path(path).expanduser()


def normalize_path(path: str | Path) -> str:
    """Return the canonical string form used to store and compare project paths.

    Examples::

        normalize_path("~/code/app")      -> "/home/me/code/app"
        normalize_path("/p/a/../a/")       -> "/p/a"
    """
    return str(expand_home_path(path).resolve())


# ---------------------------------------------------------------------------
# Name validation
# ---------------------------------------------------------------------------

_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_project_name(name: str) -> str | None:
    """Check a name that will become a directory.

    Returns:
        ``None`` when the name is acceptable, otherwise a message explaining
        why it is not.
    """
    if not name or not name.strip():
        return "Project name cannot be empty"
    if not _PROJECT_NAME_RE.match(name):
        return "Project name can only contain letters, numbers, hyphens, underscores, and dots"
    if name[0] in ".-":
        return "Project name cannot start with a dot or hyphen"
    return None


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def format_relative_time(when: datetime, now: datetime | None = None) -> str:
    """Format a timestamp relative to *now*.

    Examples::

        30 seconds earlier -> "just now"
        90 minutes earlier -> "1 hour ago"
        10 days earlier    -> "1 week ago"
    """
    now = now or datetime.now(timezone.utc)
    seconds = (now - when).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return _plural(minutes, "min")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _plural(days // 7, "week")
    return _plural(days // 30, "month")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_section(title: str) -> None:
    """Print a full-width rule with a bold title."""
    console.print()
    console.print(Rule(f"[bold]{title}[/bold]"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]✓ {escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]✗ {escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]⚠ {escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]ℹ {escape(message)}[/blue]")
