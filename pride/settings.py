"""Renders the generated Gradle settings file for the workspace."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment, FileSystemLoader

from .models import ManifestEntry
from .paths import relativize

DO_NOT_MODIFY_WARNING = (
    "//\n"
    "// DO NOT MODIFY -- This file is generated by pride, and will be\n"
    "// overwritten whenever the pride itself is changed.\n"
    "//\n"
)

_TEMPLATE_NAME = "settings.gradle.j2"


@dataclass
class ModuleSettings:
    """Consecutive manifest entries contributed by a single module."""

    directory: str
    entries: List[ManifestEntry]


def render_settings(
    entries: Sequence[ManifestEntry],
    workspace_root: Path | str,
    *,
    templates_dir: Path | None = None,
) -> str:
    """Render manifest entries as `include`/`projectDir` statements grouped by module."""
    modules = [
        ModuleSettings(
            directory=_module_directory(workspace_root, module_location),
            entries=list(group),
        )
        for module_location, group in groupby(entries, key=lambda entry: entry.module_location)
    ]
    env = _create_env(templates_dir or Path(__file__).with_name("templates"))
    template = env.get_template(_TEMPLATE_NAME)
    return template.render(header=DO_NOT_MODIFY_WARNING, modules=modules)


def _module_directory(workspace_root: Path | str, module_location: str) -> str:
    relative = relativize(workspace_root, module_location)
    return f"{relative}/" if relative else ""


def _create_env(templates_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        keep_trailing_newline=False,
        trim_blocks=False,
        lstrip_blocks=False,
    )
    env.filters["groovy"] = _groovy_escape
    return env


def _groovy_escape(value: object) -> str:
    return str(value).replace("\\", "\\\\").replace("'", "\\'")


__all__ = ["DO_NOT_MODIFY_WARNING", "ModuleSettings", "render_settings"]
