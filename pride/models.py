"""Core data models shared across pride components."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ProjectNode:
    """One project in a module's tree, as reported by model extraction."""

    name: str
    location: str
    group: Optional[str] = None
    children: Tuple["ProjectNode", ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProjectNode":
        """Build a node tree from the JSON shape emitted by the model init script."""
        if not isinstance(payload, Mapping):
            raise ValueError("Project model must be a mapping")
        name = payload.get("name")
        location = payload.get("location")
        if not isinstance(name, str) or not name:
            raise ValueError("Project model is missing a name")
        if not isinstance(location, str) or not location:
            raise ValueError(f"Project '{name}' is missing a location")
        group = payload.get("group")
        if group is not None and not isinstance(group, str):
            group = str(group)
        raw_children = payload.get("children") or []
        if not isinstance(raw_children, list):
            raise ValueError(f"Children of project '{name}' must be a list")
        children = tuple(cls.from_dict(child) for child in raw_children)
        return cls(name=name, location=location, group=group or None, children=children)


@dataclass(frozen=True)
class ManifestEntry:
    """Inclusion and location record for one project in the workspace manifest."""

    workspace_path: str
    relative_location: str
    module_location: str


@dataclass(frozen=True, order=True)
class IndexEntry:
    """A `group:artifact -> workspace path` row of the projects index."""

    group: str
    artifact: str
    workspace_path: str

    @property
    def coordinate(self) -> str:
        return f"{self.group}:{self.artifact}"
