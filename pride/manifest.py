"""Workspace manifest construction from per-module project trees."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from .errors import DuplicateProjectPathError
from .logging import get_logger
from .models import ManifestEntry, ProjectNode
from .paths import relativize, walk_tree

_LOGGER = get_logger("manifest")


def build_manifest(
    workspace_root: Path | str,
    modules: Sequence[Tuple[Path | str, ProjectNode]],
) -> List[ManifestEntry]:
    """Flatten module trees into manifest entries in emission order.

    Modules are processed in the order given and each tree depth-first in its own
    child order. Every location is relativized against the workspace root, not the
    module root, since child projects may live outside their module's directory.
    """
    entries: List[ManifestEntry] = []
    owners: Dict[str, str] = {}
    for module_location, root in modules:
        module = str(module_location)
        for node, path in walk_tree(root):
            if path in owners:
                raise DuplicateProjectPathError(path, owners[path], module)
            owners[path] = module
            entries.append(
                ManifestEntry(
                    workspace_path=path,
                    relative_location=relativize(workspace_root, node.location),
                    module_location=module,
                )
            )
        _LOGGER.debug("Module %s contributed root project :%s", module, root.name)
    return entries


__all__ = ["build_manifest"]
