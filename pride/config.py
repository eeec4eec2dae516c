"""Configuration loading for pride workspaces (.pride/config.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GradleConfig:
    """How module project models are extracted through Gradle."""

    executable: Optional[str] = None
    verbose: bool = False


@dataclass
class PrideConfig:
    """Represents the settings stored in .pride/config.yml."""

    modules: List[str] = field(default_factory=list)
    gradle: GradleConfig = field(default_factory=GradleConfig)
    max_workers: int = 1


def load_config(config_file: Path) -> PrideConfig:
    """Load configuration from disk, returning defaults when the file is missing."""
    if not config_file.exists():
        return PrideConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    gradle_data = _as_dict(data.get("gradle"))
    gradle = GradleConfig(
        executable=_as_str(gradle_data.get("executable")),
        verbose=_as_bool(gradle_data.get("verbose")) or False,
    )

    synthesis_data = _as_dict(data.get("synthesis"))
    max_workers = _as_int(synthesis_data.get("max_workers"))
    if max_workers is None or max_workers < 1:
        max_workers = 1

    return PrideConfig(
        modules=_as_str_list(data.get("modules")),
        gradle=gradle,
        max_workers=max_workers,
    )


def save_config(config_file: Path, config: PrideConfig) -> None:
    """Write configuration as YAML, omitting unset optional values."""
    payload: Dict[str, Any] = {"modules": list(config.modules)}
    gradle: Dict[str, Any] = {}
    if config.gradle.executable:
        gradle["executable"] = config.gradle.executable
    if config.gradle.verbose:
        gradle["verbose"] = True
    if gradle:
        payload["gradle"] = gradle
    if config.max_workers != 1:
        payload["synthesis"] = {"max_workers": config.max_workers}

    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(
        yaml.safe_dump(payload, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["ConfigError", "GradleConfig", "PrideConfig", "load_config", "save_config"]
