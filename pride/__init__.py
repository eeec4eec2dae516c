"""Merge the project trees of independently versioned modules into one workspace."""

from .errors import (
    ArtifactWriteError,
    DuplicateProjectPathError,
    ExtractionError,
    PrideError,
)
from .index import build_index
from .manifest import build_manifest
from .models import IndexEntry, ManifestEntry, ProjectNode
from .paths import relativize
from .synthesizer import SynthesisResult, WorkspaceSynthesizer

__all__ = [
    "ArtifactWriteError",
    "DuplicateProjectPathError",
    "ExtractionError",
    "IndexEntry",
    "ManifestEntry",
    "PrideError",
    "ProjectNode",
    "SynthesisResult",
    "WorkspaceSynthesizer",
    "build_index",
    "build_manifest",
    "relativize",
]
