"""Project creation: run a framework generator and track the result.

The generator (``npm create vite@latest``, ``npx create-next-app@latest`` ...)
runs as a child process in the parent directory, followed by ``npm install``
for project types that need it.  A successful run is recorded in the
registry through ``add_or_update``.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from projxo.catalog import ProjectType, get_project_type, is_valid_ide
from projxo.models import ProjectRecord
from projxo.registry import ProjectRegistry
from projxo.utils import (
    console,
    expand_home_path,
    print_info,
    print_section,
    run_command,
    validate_project_name,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ProjectCreationError(Exception):
    """Raised when a project cannot be created."""

    def __init__(self, message: str, project_path: Path | None = None) -> None:
        self.project_path = project_path
        super().__init__(message)


class ProjectExistsError(ProjectCreationError):
    """The target directory already exists and overwrite was not requested."""


# ---------------------------------------------------------------------------
# Creator
# ---------------------------------------------------------------------------


def validate_project_params(type_key: str, name: str, directory: str) -> str | None:
    """Return an error message for invalid creation parameters, else ``None``."""
    if get_project_type(type_key) is None:
        return f"Invalid project type: {type_key}"
    name_error = validate_project_name(name)
    if name_error:
        return name_error
    if not directory or not directory.strip():
        return "Directory is required"
    return None


class ProjectCreator:
    """Scaffolds projects and records them in a ``ProjectRegistry``."""

    def __init__(self, registry: ProjectRegistry) -> None:
        self.registry = registry

    async def create(
        self,
        type_key: str,
        name: str,
        directory: str,
        ide: str | None = None,
        overwrite: bool = False,
    ) -> ProjectRecord:
        """Generate a project and track it.

        Args:
            type_key: Key from ``PROJECT_TYPES``.
            name: Project (and directory) name.
            directory: Parent directory; ``~`` is expanded and missing
                directories are created.
            ide: Preferred IDE key stored on the record.
            overwrite: Remove an existing directory at the target first.

        Returns:
            The tracked record.

        Raises:
            ProjectCreationError: Invalid parameters or a failing command.
            ProjectExistsError: The target exists and *overwrite* is false.
        """
        error = validate_project_params(type_key, name, directory)
        if error:
            raise ProjectCreationError(error)
        if ide is not None and not is_valid_ide(ide):
            raise ProjectCreationError(f"Invalid IDE: {ide}")
        project_type = get_project_type(type_key)
        assert project_type is not None  # checked by validate_project_params

        parent = expand_home_path(directory)
        parent.mkdir(parents=True, exist_ok=True)
        project_path = parent / name

        if project_path.exists():
            if not overwrite:
                raise ProjectExistsError(
                    f"Project '{name}' already exists at {project_path}", project_path
                )
            print_info(f"Removing existing directory {project_path}")
            shutil.rmtree(project_path)

        print_section("Starting project creation...")
        await self._run_generator(project_type, name, parent, project_path)

        return self.registry.add_or_update(name, str(project_path), type_key, ide=ide)

    async def _run_generator(
        self,
        project_type: ProjectType,
        name: str,
        parent: Path,
        project_path: Path,
    ) -> None:
        cmd = project_type.build_command(name)
        console.print(f"\n[cyan]Executing: {' '.join(cmd)}[/cyan]")
        returncode, _, stderr = await run_command(cmd, cwd=parent)
        if returncode != 0:
            raise ProjectCreationError(
                f"Failed to create project: {stderr or f'command exited with code {returncode}'}",
                project_path,
            )

        if project_type.post_install:
            print_info("Installing dependencies...")
            returncode, _, stderr = await run_command(["npm", "install"], cwd=project_path)
            if returncode != 0:
                raise ProjectCreationError(
                    f"Failed to install dependencies: "
                    f"{stderr or f'command exited with code {returncode}'}",
                    project_path,
                )
