"""Configuration loading for repolens (.repolens.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".repolens.yml"
OUTPUT_FORMATS = ("json", "yaml", "markdown")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class SamplingConfig:
    """Upper bounds on files read for content-based heuristics."""

    source_files: int = 50
    test_files: int = 20


@dataclass(frozen=True)
class OutputConfig:
    format: str = "json"


@dataclass(frozen=True)
class RepoLensConfig:
    """Represents the settings defined in .repolens.yml."""

    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    source: Optional[Path] = None


def load_config(config_path: Path) -> RepoLensConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(Path(config_path))
    if not config_file.exists():
        return RepoLensConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    sampling_data = _as_dict(data.get("sampling"), "sampling")
    defaults = SamplingConfig()
    sampling = SamplingConfig(
        source_files=_as_positive_int(
            sampling_data.get("source_files"), "sampling.source_files", defaults.source_files
        ),
        test_files=_as_positive_int(
            sampling_data.get("test_files"), "sampling.test_files", defaults.test_files
        ),
    )

    output_data = _as_dict(data.get("output"), "output")
    fmt = output_data.get("format", OutputConfig.format)
    if not isinstance(fmt, str) or fmt.lower() not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)} (got {fmt!r})"
        )

    return RepoLensConfig(
        sampling=sampling,
        output=OutputConfig(format=fmt.lower()),
        source=config_file,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any, key: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _as_positive_int(value: Any, key: str, default: int) -> int:
    if value is None:
        return default
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer (got {value!r})")
    return value


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "OUTPUT_FORMATS",
    "OutputConfig",
    "RepoLensConfig",
    "SamplingConfig",
    "load_config",
]
