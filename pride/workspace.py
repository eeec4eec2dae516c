"""Workspace layout: marker directory, artifact locations and module discovery."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .config import PrideConfig, load_config, save_config
from .errors import WorkspaceError

CONFIG_DIRECTORY = ".pride"
VERSION_FILE = "version"
CONFIG_FILE = "config.yml"
PROJECTS_FILE = "projects"
SETTINGS_FILE = "settings.gradle"
WORKSPACE_VERSION = "0"

_MODULE_MARKERS = (
    "build.gradle",
    "build.gradle.kts",
    "settings.gradle",
    "settings.gradle.kts",
)


def is_valid_module_directory(path: Path) -> bool:
    """Return True when `path` is a checked-out module with a Gradle build."""
    if not path.is_dir():
        return False
    return any((path / marker).is_file() for marker in _MODULE_MARKERS)


class Workspace:
    """A pride root directory and the files pride maintains inside it."""

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser().resolve()
        self.config_dir = self.root / CONFIG_DIRECTORY
        self.version_file = self.config_dir / VERSION_FILE
        self.config_file = self.config_dir / CONFIG_FILE
        self.projects_file = self.config_dir / PROJECTS_FILE
        self.settings_file = self.root / SETTINGS_FILE

    @staticmethod
    def is_workspace(path: Path) -> bool:
        return (path / CONFIG_DIRECTORY / VERSION_FILE).is_file()

    @classmethod
    def create(cls, root: Path, config: PrideConfig) -> "Workspace":
        """Reset the marker directory and persist `config`.

        The generated projects index survives the reset; only a successful
        synthesis may replace it.
        """
        workspace = cls(root)
        workspace.root.mkdir(parents=True, exist_ok=True)
        workspace.config_dir.mkdir(exist_ok=True)
        for child in workspace.config_dir.iterdir():
            if child == workspace.projects_file:
                continue
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        workspace.version_file.write_text(f"{WORKSPACE_VERSION}\n", encoding="utf-8")
        save_config(workspace.config_file, config)
        return workspace

    @classmethod
    def open(cls, root: Path) -> "Workspace":
        workspace = cls(root)
        if not cls.is_workspace(workspace.root):
            raise WorkspaceError(
                f"No pride found in {workspace.root}; run `pride init` first"
            )
        return workspace

    def load_config(self) -> PrideConfig:
        return load_config(self.config_file)

    def module_directories(self, config: PrideConfig | None = None) -> List[Path]:
        """Configured module directories in registration order."""
        config = config or self.load_config()
        return [self.root / name for name in config.modules]

    def discover_modules(self) -> List[str]:
        """Names of valid module directories directly under the root, sorted."""
        if not self.root.is_dir():
            return []
        return sorted(
            child.name
            for child in self.root.iterdir()
            if not child.name.startswith(".") and is_valid_module_directory(child)
        )


__all__ = [
    "CONFIG_DIRECTORY",
    "Workspace",
    "is_valid_module_directory",
]
