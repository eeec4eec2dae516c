"""Workspace path computation and filesystem relativization."""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Iterator, Tuple

from .models import ProjectNode

PATH_SEPARATOR = ":"


def relativize(workspace_root: Path | str, target: Path | str) -> str:
    """Return `target` relative to `workspace_root` using `/` separators.

    Targets outside the root are expressed with `..` segments. The result is the
    empty string when both paths point at the same directory.
    """
    root = os.path.realpath(os.path.abspath(os.fspath(workspace_root)))
    destination = os.path.realpath(os.path.abspath(os.fspath(target)))
    try:
        relative = os.path.relpath(destination, root)
    except ValueError:
        # No relative route exists, e.g. different drives on Windows.
        return PurePath(destination).as_posix()
    if relative == os.curdir:
        return ""
    return PurePath(relative).as_posix()


def child_path(parent_path: str, name: str) -> str:
    """Append a project name to a workspace path."""
    return f"{parent_path}{PATH_SEPARATOR}{name}"


def walk_tree(root: ProjectNode) -> Iterator[Tuple[ProjectNode, str]]:
    """Yield every node of the tree with its workspace path, depth-first in tree order."""
    yield from _walk(root, child_path("", root.name))


def _walk(node: ProjectNode, path: str) -> Iterator[Tuple[ProjectNode, str]]:
    yield node, path
    for child in node.children:
        yield from _walk(child, child_path(path, child.name))


__all__ = ["PATH_SEPARATOR", "child_path", "relativize", "walk_tree"]
