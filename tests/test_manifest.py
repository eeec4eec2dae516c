"""Tests for pride.manifest."""

from __future__ import annotations

from pathlib import Path

import pytest

from pride.errors import DuplicateProjectPathError
from pride.manifest import build_manifest
from tests._fixtures.workspace_builder import node


def test_build_manifest_relativizes_against_workspace_root(tmp_path: Path) -> None:
    module = tmp_path / "libs" / "a"
    tree = node("app", module, "com.x", node("core", tmp_path / "libs" / "a-core", "com.x"))

    entries = build_manifest(tmp_path, [(module, tree)])

    assert [(e.workspace_path, e.relative_location) for e in entries] == [
        (":app", "libs/a"),
        (":app:core", "libs/a-core"),
    ]
    assert {e.module_location for e in entries} == {str(module)}


def test_build_manifest_keeps_module_then_tree_order(tmp_path: Path) -> None:
    first = node(
        "zeta",
        tmp_path / "zeta",
        None,
        node("b", tmp_path / "zeta" / "b", None, node("deep", tmp_path / "zeta" / "b" / "deep")),
        node("a", tmp_path / "zeta" / "a"),
    )
    second = node("alpha", tmp_path / "alpha")

    entries = build_manifest(
        tmp_path, [(tmp_path / "zeta", first), (tmp_path / "alpha", second)]
    )

    assert [e.workspace_path for e in entries] == [
        ":zeta",
        ":zeta:b",
        ":zeta:b:deep",
        ":zeta:a",
        ":alpha",
    ]


def test_build_manifest_root_uses_its_own_location(tmp_path: Path) -> None:
    module = tmp_path / "checkout"
    tree = node("app", tmp_path / "checkout" / "app-root")

    entries = build_manifest(tmp_path, [(module, tree)])

    assert entries[0].relative_location == "checkout/app-root"


def test_build_manifest_rejects_duplicate_root_names(tmp_path: Path) -> None:
    one = tmp_path / "one"
    two = tmp_path / "two"

    with pytest.raises(DuplicateProjectPathError) as excinfo:
        build_manifest(
            tmp_path,
            [(one, node("shared", one)), (two, node("shared", two))],
        )

    error = excinfo.value
    assert error.path == ":shared"
    assert error.first_module == one
    assert error.second_module == two
    assert str(one) in str(error) and str(two) in str(error)


def test_build_manifest_rejects_duplicate_siblings(tmp_path: Path) -> None:
    tree = node("app", tmp_path, None, node("core", tmp_path / "c1"), node("core", tmp_path / "c2"))

    with pytest.raises(DuplicateProjectPathError):
        build_manifest(tmp_path, [(tmp_path, tree)])


def test_build_manifest_includes_projects_without_group(tmp_path: Path) -> None:
    tree = node("app", tmp_path / "app", None, node("docs", tmp_path / "app" / "docs"))

    entries = build_manifest(tmp_path, [(tmp_path / "app", tree)])

    assert [e.workspace_path for e in entries] == [":app", ":app:docs"]


def test_build_manifest_of_no_modules_is_empty(tmp_path: Path) -> None:
    assert build_manifest(tmp_path, []) == []
