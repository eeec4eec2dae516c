"""Adapters that extract a module's project tree from its build tool."""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

from .errors import ExtractionError
from .logging import get_logger
from .models import ProjectNode

MODEL_BEGIN_MARKER = "PRIDE-MODEL-BEGIN"
MODEL_END_MARKER = "PRIDE-MODEL-END"
MODEL_TASK = "prideModel"

Runner = Callable[..., str]


class ModelExtractor(Protocol):
    """Contract for collaborators that turn a module directory into a project tree."""

    def extract(self, module_directory: Path) -> ProjectNode:
        """Return the root project of the module, raising ExtractionError on failure."""


class GradleModelExtractor:
    """Runs Gradle with the pride model init script and parses the printed tree."""

    DEFAULT_EXECUTABLE = "gradle"

    def __init__(
        self,
        executable: str | None = None,
        *,
        verbose: bool = False,
        init_script: Path | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.executable = executable or self.DEFAULT_EXECUTABLE
        self.verbose = verbose
        self.init_script = init_script or Path(__file__).with_name("resources") / "model-init.gradle"
        self._runner = runner or self._default_runner
        self.logger = get_logger("extraction")

    def extract(self, module_directory: Path) -> ProjectNode:
        args = self.build_command(module_directory)
        self.logger.debug("Extracting project model in %s: %s", module_directory, " ".join(args))
        try:
            output = self._runner(args, cwd=module_directory)
        except FileNotFoundError as exc:
            raise ExtractionError(
                module_directory, f"unable to locate '{args[0]}'; install Gradle or configure gradle.executable"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
            raise ExtractionError(module_directory, f"Gradle failed: {detail}") from exc
        except OSError as exc:
            raise ExtractionError(module_directory, exc) from exc
        return self.parse_output(module_directory, output)

    def build_command(self, module_directory: Path) -> List[str]:
        args = [self._resolve_executable(module_directory)]
        if self.verbose:
            args.extend(["--info", "--stacktrace"])
        else:
            args.append("-q")
        args.extend(["--init-script", str(self.init_script)])
        # Keeps a pride-aware build from rewriting its own dependencies while being introspected.
        args.extend(["-P", "pride.disable"])
        args.append(MODEL_TASK)
        return args

    @staticmethod
    def parse_output(module_directory: Path, output: str) -> ProjectNode:
        payload = _extract_payload(output)
        if payload is None:
            raise ExtractionError(module_directory, "Gradle did not print a project model")
        try:
            return ProjectNode.from_dict(json.loads(payload))
        except (json.JSONDecodeError, ValueError) as exc:
            raise ExtractionError(module_directory, f"invalid project model: {exc}") from exc

    def _resolve_executable(self, module_directory: Path) -> str:
        wrapper = module_directory / ("gradlew.bat" if os.name == "nt" else "gradlew")
        if wrapper.is_file():
            return str(wrapper)
        return self.executable

    @staticmethod
    def _default_runner(args: Sequence[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


def _extract_payload(output: str) -> Optional[str]:
    lines = output.splitlines()
    try:
        start = lines.index(MODEL_BEGIN_MARKER)
        end = lines.index(MODEL_END_MARKER, start + 1)
    except ValueError:
        return None
    return "\n".join(lines[start + 1 : end])


__all__ = ["GradleModelExtractor", "ModelExtractor"]
