"""Tests for project scaffolding (projxo.creator).

The generator commands are never executed: ``run_command`` is patched with an
AsyncMock so each test controls the exit codes.

Tests cover:
- Parameter validation
- Generator + npm install command sequencing
- Failure handling for both steps
- Existing-directory handling (error vs. overwrite)
- Registration of the created project
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, call, patch

import pytest

from projxo.creator import (
    ProjectCreationError,
    ProjectCreator,
    ProjectExistsError,
    validate_project_params,
)
from projxo.utils import normalize_path


@pytest.fixture()
def creator(registry):
    return ProjectCreator(registry)


@pytest.fixture()
def quiet():
    with patch("projxo.creator.console"), patch("projxo.creator.print_section"), patch(
        "projxo.creator.print_info"
    ):
        yield


def _mock_run(*results):
    return AsyncMock(side_effect=list(results))


# ---------------------------------------------------------------------------
# validate_project_params
# ---------------------------------------------------------------------------


class TestValidateParams:
    @pytest.mark.unit
    def test_valid(self):
        assert validate_project_params("nextjs", "shop", "~/code") is None

    @pytest.mark.unit
    def test_unknown_type(self):
        assert validate_project_params("svelte", "shop", "~/code") == "Invalid project type: svelte"

    @pytest.mark.unit
    def test_bad_name(self):
        assert "cannot start" in validate_project_params("nextjs", "-shop", "~/code")

    @pytest.mark.unit
    @pytest.mark.parametrize("directory", ["", "  "])
    def test_missing_directory(self, directory):
        assert validate_project_params("nextjs", "shop", directory) == "Directory is required"


# ---------------------------------------------------------------------------
# ProjectCreator.create
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nextjs_runs_generator_only(self, creator, registry, tmp_path: Path, quiet):
        run = _mock_run((0, "", ""))
        with patch("projxo.creator.run_command", run):
            record = await creator.create("nextjs", "shop", str(tmp_path), ide="cursor")

        run.assert_awaited_once_with(["npx", "create-next-app@latest", "shop"], cwd=tmp_path)
        assert record.name == "shop"
        assert record.type == "nextjs"
        assert record.ide == "cursor"
        assert record.path == normalize_path(tmp_path / "shop")
        assert registry.get_by_path(tmp_path / "shop") == record

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_vite_runs_npm_install_in_project(self, creator, tmp_path: Path, quiet):
        run = _mock_run((0, "", ""), (0, "", ""))
        with patch("projxo.creator.run_command", run):
            await creator.create("react-vite", "shop", str(tmp_path))

        assert run.await_args_list == [
            call(
                ["npm", "create", "vite@latest", "shop", "--", "--template", "react"],
                cwd=tmp_path,
            ),
            call(["npm", "install"], cwd=tmp_path / "shop"),
        ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_creates_missing_parent_directory(self, creator, tmp_path: Path, quiet):
        parent = tmp_path / "deep" / "parent"
        with patch("projxo.creator.run_command", _mock_run((0, "", ""))):
            await creator.create("angular", "shop", str(parent))
        assert parent.is_dir()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generator_failure(self, creator, registry, tmp_path: Path, quiet):
        with patch("projxo.creator.run_command", _mock_run((1, "", "npm ERR! boom"))):
            with pytest.raises(ProjectCreationError, match="npm ERR! boom") as exc_info:
                await creator.create("nextjs", "shop", str(tmp_path))
        assert exc_info.value.project_path == tmp_path / "shop"
        assert registry.all() == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_install_failure_without_stderr(self, creator, registry, tmp_path: Path, quiet):
        with patch("projxo.creator.run_command", _mock_run((0, "", ""), (2, "", ""))):
            with pytest.raises(ProjectCreationError, match="exited with code 2"):
                await creator.create("react-vite-ts", "shop", str(tmp_path))
        assert registry.all() == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_existing_directory_rejected(self, creator, tmp_path: Path, quiet):
        (tmp_path / "shop").mkdir()
        run = _mock_run((0, "", ""))
        with patch("projxo.creator.run_command", run):
            with pytest.raises(ProjectExistsError):
                await creator.create("nextjs", "shop", str(tmp_path))
        run.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_existing_directory_overwritten(self, creator, tmp_path: Path, quiet):
        target = tmp_path / "shop"
        target.mkdir()
        (target / "old.txt").write_text("old", encoding="utf-8")
        with patch("projxo.creator.run_command", _mock_run((0, "", ""))):
            await creator.create("nextjs", "shop", str(tmp_path), overwrite=True)
        assert not target.exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "type_key, name, ide, message",
        [
            ("svelte", "shop", None, "Invalid project type"),
            ("nextjs", "my shop", None, "can only contain"),
            ("nextjs", "shop", "emacs", "Invalid IDE: emacs"),
        ],
    )
    async def test_invalid_arguments(self, creator, tmp_path: Path, quiet, type_key, name, ide, message):
        run = _mock_run((0, "", ""))
        with patch("projxo.creator.run_command", run):
            with pytest.raises(ProjectCreationError, match=message):
                await creator.create(type_key, name, str(tmp_path), ide=ide)
        run.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_recreating_tracked_path_updates_record(self, creator, registry, tmp_path: Path, quiet):
        with patch("projxo.creator.run_command", _mock_run((0, "", ""), (0, "", ""))):
            first = await creator.create("nextjs", "shop", str(tmp_path))
            (tmp_path / "shop").mkdir()
            second = await creator.create("angular", "shop", str(tmp_path), overwrite=True)

        assert second.id == first.id
        assert second.type == "angular"
        assert len(registry.all()) == 1
