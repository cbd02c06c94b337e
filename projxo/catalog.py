"""Supported project types and IDEs.

To add a project type, add an entry to ``PROJECT_TYPES`` with the generator
command and its arguments (``{name}`` is replaced with the project name), and
a run command in ``_RUN_COMMANDS`` if it is not ``npm run dev``.  To add an
IDE, add an entry to ``IDES`` and optionally setup instructions to
``_IDE_INSTALL_INSTRUCTIONS``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ProjectType(BaseModel):
    """How to scaffold one kind of project."""

    key: str = Field(..., description="Registry type key, e.g. 'react-vite'")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    command: str = Field(..., description="Generator executable, e.g. 'npm' or 'npx'")
    args: list[str] = Field(default_factory=list, description="Arguments; '{name}' is substituted")
    post_install: bool = Field(default=False, description="Run 'npm install' afterwards")
    short_name: str = Field(default="", description="Compact label for tables")

    def build_command(self, project_name: str) -> list[str]:
        """Full argv for creating *project_name*."""
        return [self.command, *(arg.replace("{name}", project_name) for arg in self.args)]


class IDE(BaseModel):
    """An editor that can be launched from the command line."""

    key: str
    name: str
    command: Optional[str] = Field(default=None, description="Launcher; None means do not open")
    description: str = Field(default="")


# ---------------------------------------------------------------------------
# Project types
# ---------------------------------------------------------------------------

PROJECT_TYPES: dict[str, ProjectType] = {
    t.key: t
    for t in (
        ProjectType(
            key="react-vite",
            name="React + Vite",
            short_name="React+Vite",
            description="React with Vite bundler (JavaScript)",
            command="npm",
            args=["create", "vite@latest", "{name}", "--", "--template", "react"],
            post_install=True,
        ),
        ProjectType(
            key="react-vite-ts",
            name="React + Vite (TypeScript)",
            short_name="React+Vite(TS)",
            description="React with Vite bundler and TypeScript",
            command="npm",
            args=["create", "vite@latest", "{name}", "--", "--template", "react-ts"],
            post_install=True,
        ),
        ProjectType(
            key="nextjs",
            name="Next.js",
            short_name="Next.js",
            description="React framework for production",
            command="npx",
            args=["create-next-app@latest", "{name}"],
        ),
        ProjectType(
            key="angular",
            name="Angular",
            short_name="Angular",
            description="Platform for building web applications",
            command="npx",
            args=["@angular/cli@latest", "new", "{name}"],
        ),
        ProjectType(
            key="react-native",
            name="React Native (Expo)",
            short_name="React Native",
            description="Build native mobile apps with React",
            command="npx",
            args=["create-expo-app", "{name}"],
        ),
    )
}

_RUN_COMMANDS: dict[str, str] = {
    "react-vite": "npm run dev",
    "react-vite-ts": "npm run dev",
    "nextjs": "npm run dev",
    "angular": "ng serve",
    "react-native": "npx expo start",
}


def get_project_type(key: str) -> ProjectType | None:
    return PROJECT_TYPES.get(key)


def is_valid_project_type(key: str) -> bool:
    return key in PROJECT_TYPES


def type_display_name(key: str) -> str:
    """Compact label for *key*, or the key itself for unknown types."""
    project_type = PROJECT_TYPES.get(key)
    return project_type.short_name if project_type else key


def get_next_steps(key: str, project_path: str) -> list[str]:
    """Shell commands to start working on a freshly created project."""
    return [f"cd {project_path}", _RUN_COMMANDS.get(key, "npm start")]


# ---------------------------------------------------------------------------
# IDEs
# ---------------------------------------------------------------------------

SKIP = "skip"

IDES: dict[str, IDE] = {
    ide.key: ide
    for ide in (
        IDE(key="vscode", name="VS Code", command="code", description="Visual Studio Code"),
        IDE(key="cursor", name="Cursor", command="cursor", description="Cursor AI Editor"),
        IDE(key="webstorm", name="WebStorm", command="webstorm", description="JetBrains WebStorm IDE"),
        IDE(key="idea", name="IntelliJ IDEA", command="idea", description="JetBrains IntelliJ IDEA"),
        IDE(key="sublime", name="Sublime Text", command="subl", description="Sublime Text Editor"),
        IDE(key="atom", name="Atom", command="atom", description="GitHub Atom Editor"),
        IDE(key=SKIP, name="Skip (open manually)", description="Do not open in any IDE"),
    )
}

_IDE_INSTALL_INSTRUCTIONS: dict[str, str] = {
    "vscode": "Run \"Shell Command: Install 'code' command in PATH\" from the Command Palette",
    "cursor": "The cursor command is usually available after installation",
    "webstorm": "Enable in WebStorm: Tools > Create Command-line Launcher",
    "idea": "Enable in IntelliJ IDEA: Tools > Create Command-line Launcher",
    "sublime": (
        'Create a symlink: ln -s "/Applications/Sublime Text.app/Contents/SharedSupport/bin/subl" '
        "/usr/local/bin/subl"
    ),
    "atom": "Install shell commands from Atom: Atom > Install Shell Commands",
}


def get_ide(key: str) -> IDE | None:
    return IDES.get(key)


def is_valid_ide(key: str) -> bool:
    return key in IDES


def get_install_instructions(key: str) -> str:
    return _IDE_INSTALL_INSTRUCTIONS.get(
        key, "Please refer to your IDE's documentation for command-line setup"
    )
