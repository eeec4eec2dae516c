"""Dependency index construction and the projects index file format."""

from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Set

from .errors import IndexFormatError
from .logging import get_logger
from .models import IndexEntry, ProjectNode
from .paths import walk_tree

_LOGGER = get_logger("index")

INDEX_HEADER = (
    "#\n"
    "# DO NOT MODIFY -- This file is generated by pride, and will be\n"
    "# overwritten whenever the pride itself is changed.\n"
    "#\n"
)


def build_index(trees: Iterable[ProjectNode]) -> List[IndexEntry]:
    """Collect every project with a group into a sorted, deduplicated index."""
    entries: Set[IndexEntry] = set()
    for root in trees:
        for node, path in walk_tree(root):
            if node.group is None:
                continue
            entry = IndexEntry(group=node.group, artifact=node.name, workspace_path=path)
            if entry not in entries:
                _LOGGER.debug("Found project %s at %s", entry.coordinate, path)
                entries.add(entry)
    return sorted(entries)


def find_ambiguities(entries: Iterable[IndexEntry]) -> Dict[str, List[str]]:
    """Return coordinates that resolve to more than one workspace path."""
    paths: Dict[str, Set[str]] = defaultdict(set)
    for entry in entries:
        paths[entry.coordinate].add(entry.workspace_path)
    return {
        coordinate: sorted(found)
        for coordinate, found in sorted(paths.items())
        if len(found) > 1
    }


def lookup(entries: Iterable[IndexEntry], group: str, artifact: str) -> List[str]:
    """Return all workspace paths registered for `group:artifact`."""
    return sorted(
        {
            entry.workspace_path
            for entry in entries
            if entry.group == group and entry.artifact == artifact
        }
    )


def dump_index(entries: Iterable[IndexEntry]) -> str:
    lines = [INDEX_HEADER]
    for entry in entries:
        record = {
            "group": entry.group,
            "artifact": entry.artifact,
            "path": entry.workspace_path,
        }
        lines.append(json.dumps(record, sort_keys=True) + "\n")
    return "".join(lines)


def parse_index(text: str) -> List[IndexEntry]:
    entries: List[IndexEntry] = []
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            record = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise IndexFormatError(f"Invalid index record on line {number}: {exc}") from exc
        if not isinstance(record, dict):
            raise IndexFormatError(f"Index record on line {number} must be an object")
        values = [record.get(key) for key in ("group", "artifact", "path")]
        if not all(isinstance(value, str) and value for value in values):
            raise IndexFormatError(
                f"Index record on line {number} needs non-empty group, artifact and path"
            )
        group, artifact, path = values
        entries.append(IndexEntry(group=group, artifact=artifact, workspace_path=path))
    return entries


def load_index(path: Path) -> List[IndexEntry]:
    """Read a projects index file; a missing file is an empty index."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    return parse_index(text)


__all__ = [
    "INDEX_HEADER",
    "build_index",
    "dump_index",
    "find_ambiguities",
    "load_index",
    "lookup",
    "parse_index",
]
