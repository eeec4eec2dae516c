"""Synthesis of the workspace manifest and projects index from module trees."""

from __future__ import annotations

import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

from .config import PrideConfig
from .errors import ArtifactWriteError, ExtractionError
from .extraction import GradleModelExtractor, ModelExtractor
from .index import build_index, dump_index, find_ambiguities
from .logging import get_logger
from .manifest import build_manifest
from .models import IndexEntry, ManifestEntry, ProjectNode
from .settings import render_settings
from .workspace import Workspace, is_valid_module_directory


@dataclass
class SynthesisResult:
    """Outcome of a successful synthesis run."""

    manifest: List[ManifestEntry]
    index: List[IndexEntry]
    skipped: List[Path] = field(default_factory=list)
    ambiguities: Dict[str, List[str]] = field(default_factory=dict)
    written: List[Path] = field(default_factory=list)


class WorkspaceSynthesizer:
    """Extracts every module and regenerates the settings file and projects index."""

    def __init__(
        self,
        extractor: ModelExtractor,
        *,
        is_valid_module: Callable[[Path], bool] = is_valid_module_directory,
        max_workers: int = 1,
    ) -> None:
        self.extractor = extractor
        self.is_valid_module = is_valid_module
        self.max_workers = max(1, max_workers)
        self.logger = get_logger("synthesizer")

    def synthesize(
        self,
        workspace_root: Path,
        module_directories: Sequence[Path],
        *,
        settings_file: Path,
        projects_file: Path,
    ) -> SynthesisResult:
        """Rebuild both artifacts; nothing is written unless every module extracts."""
        self.logger.info("Synthesizing workspace %s", workspace_root)
        valid: List[Path] = []
        skipped: List[Path] = []
        for directory in module_directories:
            if self.is_valid_module(directory):
                valid.append(directory)
            else:
                self.logger.debug("Skipping %s: not a valid module directory", directory)
                skipped.append(directory)

        modules = self._extract_all(valid)

        manifest = build_manifest(workspace_root, modules)
        index = build_index(tree for _, tree in modules)
        ambiguities = find_ambiguities(index)
        for coordinate, paths in ambiguities.items():
            self.logger.warning(
                "Project %s is provided by several projects: %s", coordinate, ", ".join(paths)
            )

        artifacts = [
            (settings_file, render_settings(manifest, workspace_root)),
            (projects_file, dump_index(index)),
        ]
        _replace_all(artifacts)
        self.logger.info(
            "Wrote %d projects from %d modules (%d indexed)",
            len(manifest),
            len(modules),
            len(index),
        )
        return SynthesisResult(
            manifest=manifest,
            index=index,
            skipped=skipped,
            ambiguities=ambiguities,
            written=[path for path, _ in artifacts],
        )

    def _extract_all(self, directories: Sequence[Path]) -> List[Tuple[Path, ProjectNode]]:
        if self.max_workers > 1 and len(directories) > 1:
            # Executor.map yields in submission order, which keeps module order intact.
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                trees = list(executor.map(self._extract, directories))
        else:
            trees = [self._extract(directory) for directory in directories]
        return list(zip(directories, trees))

    def _extract(self, directory: Path) -> ProjectNode:
        self.logger.info("Loading project model from %s", directory)
        try:
            return self.extractor.extract(directory)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(directory, exc) from exc


def _replace_all(artifacts: Sequence[Tuple[Path, str]]) -> None:
    """Stage every artifact in a temporary file, then rename each into place."""
    staged: List[Tuple[Path, Path]] = []
    try:
        for target, content in artifacts:
            staged.append((target, _stage(target, content)))
        for target, temporary in staged:
            try:
                os.replace(temporary, target)
            except OSError as exc:
                raise ArtifactWriteError(target, exc) from exc
    finally:
        for _, temporary in staged:
            if temporary.exists():
                temporary.unlink()


def _stage(target: Path, content: str) -> Path:
    temporary: Path | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}-",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temporary = Path(handle.name)
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError as exc:
        if temporary is not None and temporary.exists():
            temporary.unlink()
        raise ArtifactWriteError(target, exc) from exc
    return temporary


def synthesize_workspace(
    workspace: Workspace,
    config: PrideConfig | None = None,
    *,
    extractor: ModelExtractor | None = None,
) -> SynthesisResult:
    """Regenerate a workspace's artifacts from its configured modules."""
    config = config or workspace.load_config()
    if extractor is None:
        extractor = GradleModelExtractor(
            config.gradle.executable, verbose=config.gradle.verbose
        )
    synthesizer = WorkspaceSynthesizer(extractor, max_workers=config.max_workers)
    return synthesizer.synthesize(
        workspace.root,
        workspace.module_directories(config),
        settings_file=workspace.settings_file,
        projects_file=workspace.projects_file,
    )


__all__ = ["SynthesisResult", "WorkspaceSynthesizer", "synthesize_workspace"]
