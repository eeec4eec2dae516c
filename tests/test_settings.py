"""Tests for pride.settings."""

from __future__ import annotations

from pathlib import Path

from pride.manifest import build_manifest
from pride.models import ManifestEntry
from pride.settings import DO_NOT_MODIFY_WARNING, render_settings
from tests._fixtures.workspace_builder import node


def test_render_settings_starts_with_warning(tmp_path: Path) -> None:
    assert render_settings([], tmp_path).startswith(DO_NOT_MODIFY_WARNING)


def test_render_settings_groups_entries_by_module(tmp_path: Path) -> None:
    module_a = tmp_path / "libs" / "a"
    module_b = tmp_path / "b"
    entries = build_manifest(
        tmp_path,
        [
            (module_a, node("app", module_a, "com.x", node("core", tmp_path / "libs" / "a-core"))),
            (module_b, node("other", module_b)),
        ],
    )

    text = render_settings(entries, tmp_path)
    lines = [line for line in text[len(DO_NOT_MODIFY_WARNING):].splitlines() if line]

    assert lines == [
        "// Settings from project in directory /libs/a/",
        "include ':app'",
        "project(':app').projectDir = file('libs/a')",
        "include ':app:core'",
        "project(':app:core').projectDir = file('libs/a-core')",
        "// Settings from project in directory /b/",
        "include ':other'",
        "project(':other').projectDir = file('b')",
    ]
    assert text.endswith("\n")


def test_render_settings_uses_dot_for_workspace_root(tmp_path: Path) -> None:
    entries = [ManifestEntry(":root", "", str(tmp_path))]

    text = render_settings(entries, tmp_path)

    assert "// Settings from project in directory /\n" in text
    assert "project(':root').projectDir = file('.')" in text


def test_render_settings_escapes_quotes(tmp_path: Path) -> None:
    entries = [ManifestEntry(":app", "it's", str(tmp_path / "it's"))]

    text = render_settings(entries, tmp_path)

    assert "file('it\\'s')" in text
