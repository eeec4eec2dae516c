"""Exception hierarchy for workspace synthesis."""

from __future__ import annotations

from pathlib import Path

RETRY_HINT = "Fix the errors above, and try again with\n\n\tpride init --force"


class PrideError(RuntimeError):
    """Base class for failures that abort a pride command."""


class WorkspaceError(PrideError):
    """Raised when a directory is not a usable pride workspace."""


class ExtractionError(PrideError):
    """Raised when a module's project tree cannot be extracted."""

    def __init__(self, module_directory: Path | str, cause: object) -> None:
        self.module_directory = Path(module_directory)
        self.cause = cause
        super().__init__(f"Could not parse module in {self.module_directory}: {cause}")


class DuplicateProjectPathError(PrideError):
    """Raised when two project nodes resolve to the same workspace path."""

    def __init__(self, path: str, first_module: Path | str, second_module: Path | str) -> None:
        self.path = path
        self.first_module = Path(first_module)
        self.second_module = Path(second_module)
        super().__init__(
            f"Project path '{path}' is declared by both {self.first_module} "
            f"and {self.second_module}; rename one of the projects"
        )


class ArtifactWriteError(PrideError):
    """Raised when a generated artifact cannot be written into place."""

    def __init__(self, artifact: Path | str, cause: object) -> None:
        self.artifact = Path(artifact)
        self.cause = cause
        super().__init__(f"Failed to write {self.artifact}: {cause}")


class IndexFormatError(PrideError):
    """Raised when a projects index cannot be parsed."""


__all__ = [
    "ArtifactWriteError",
    "DuplicateProjectPathError",
    "ExtractionError",
    "IndexFormatError",
    "PrideError",
    "RETRY_HINT",
    "WorkspaceError",
]
