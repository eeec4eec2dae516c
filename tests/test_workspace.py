"""Tests for pride.workspace."""

from __future__ import annotations

from pathlib import Path

import pytest

from pride.config import PrideConfig
from pride.errors import WorkspaceError
from pride.workspace import Workspace, is_valid_module_directory
from tests._fixtures.workspace_builder import WorkspaceBuilder


@pytest.mark.parametrize(
    "build_file",
    ["build.gradle", "build.gradle.kts", "settings.gradle", "settings.gradle.kts"],
)
def test_module_with_build_file_is_valid(workspace_builder: WorkspaceBuilder, build_file: str) -> None:
    module = workspace_builder.module("mod", build_file=build_file)

    assert is_valid_module_directory(module)


def test_missing_or_plain_directory_is_not_a_module(workspace_builder: WorkspaceBuilder) -> None:
    assert not is_valid_module_directory(workspace_builder.path() / "absent")
    assert not is_valid_module_directory(workspace_builder.directory("plain"))


def test_create_writes_marker_directory(workspace_builder: WorkspaceBuilder) -> None:
    root = workspace_builder.path()
    (root / ".pride").mkdir()
    (root / ".pride" / "stale").write_text("leftover", encoding="utf-8")

    workspace = Workspace.create(root, PrideConfig(modules=["a"]))

    assert workspace.version_file.read_text(encoding="utf-8") == "0\n"
    assert workspace.load_config().modules == ["a"]
    assert not (workspace.config_dir / "stale").exists()
    assert Workspace.is_workspace(root)


def test_create_keeps_existing_projects_index(workspace_builder: WorkspaceBuilder) -> None:
    root = workspace_builder.path()
    (root / ".pride" / "cache").mkdir(parents=True)
    (root / ".pride" / "projects").write_text("old projects\n", encoding="utf-8")

    workspace = Workspace.create(root, PrideConfig())

    assert workspace.projects_file.read_text(encoding="utf-8") == "old projects\n"
    assert not (workspace.config_dir / "cache").exists()


def test_artifact_locations(tmp_path: Path) -> None:
    workspace = Workspace(tmp_path)

    assert workspace.settings_file == tmp_path.resolve() / "settings.gradle"
    assert workspace.projects_file == tmp_path.resolve() / ".pride" / "projects"


def test_open_requires_marker(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceError, match="pride init"):
        Workspace.open(tmp_path)


def test_module_directories_follow_registration_order(workspace_builder: WorkspaceBuilder) -> None:
    workspace = Workspace.create(workspace_builder.path(), PrideConfig(modules=["zeta", "alpha"]))

    assert workspace.module_directories() == [workspace.root / "zeta", workspace.root / "alpha"]


def test_discover_modules_lists_valid_directories(workspace_builder: WorkspaceBuilder) -> None:
    workspace_builder.module("service")
    workspace_builder.module("api")
    workspace_builder.directory("notes")
    workspace_builder.module(".hidden")

    assert Workspace(workspace_builder.path()).discover_modules() == ["api", "service"]
