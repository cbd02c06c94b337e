"""Open a project directory in an external editor."""

from __future__ import annotations

import shutil

from projxo.catalog import get_ide, get_install_instructions
from projxo.utils import console, print_error, print_info, print_success, print_warning, run_command


def command_exists(ide_key: str) -> bool:
    """Whether the launcher for *ide_key* is on ``PATH``.

    Unknown keys are reported as missing; ``skip`` needs no launcher.
    """
    ide = get_ide(ide_key)
    if ide is None:
        return False
    if ide.command is None:
        return True
    return shutil.which(ide.command) is not None


async def open_in_ide(project_path: str, ide_key: str) -> bool:
    """Launch the editor for *ide_key* on *project_path*.

    Returns:
        ``True`` if the launcher exited successfully, ``False`` for ``skip``,
        unknown keys or a failing launcher.
    """
    ide = get_ide(ide_key)
    if ide is None or ide.command is None:
        return False

    print_info(f"Opening project in {ide.name}...")
    returncode, _, stderr = await run_command([ide.command, project_path], capture=True)
    if returncode == 0:
        print_success(f"Project opened in {ide.name}")
        return True

    print_error(f"Could not open {ide.name}")
    if stderr:
        console.print(stderr, style="dim", markup=False)
    print_warning(f"Please ensure {ide.name} is installed and command-line tools are enabled")
    console.print(f"\n  Setup: {get_install_instructions(ide_key)}", style="dim", markup=False)
    console.print(f"  Or manually open: {project_path}", style="yellow", markup=False)
    return False
