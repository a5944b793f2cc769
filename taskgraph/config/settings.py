"""
Analysis settings loader: supports YAML files, dicts, AnalysisSettings instances, and defaults.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

SETTINGS_ENV = "TASKGRAPH_SETTINGS"

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisSettings:
    """Tunable policies shared by graph construction and path analysis."""

    label_prefix: str = "Task_"  # Synthesized label for unlabeled vertices
    default_weight: float = 1.0  # Weight used when an edge is given without one
    critical_path_baseline: float = 0.0  # Critical path end must exceed this distance


def default_settings() -> AnalysisSettings:
    return AnalysisSettings()


def load_settings(
    source: AnalysisSettings | str | Path | dict | None = None,
) -> AnalysisSettings:
    """
    Load AnalysisSettings from various sources.

    Args:
        source: Can be:
            - AnalysisSettings instance: returned as-is
            - str or Path: treated as YAML file path
            - dict: constructed directly from dict keys
            - None: the YAML file named by $TASKGRAPH_SETTINGS if set,
              otherwise default_settings()

    Raises:
        FileNotFoundError: If source is a file path that doesn't exist
        ValueError: If the YAML is invalid or a field has the wrong type
        TypeError: If source is of an unsupported type
    """
    if source is None:
        env_path = os.getenv(SETTINGS_ENV)
        if env_path and env_path.strip():
            LOGGER.debug("load_settings: using %s=%s", SETTINGS_ENV, env_path)
            return _load_from_yaml_file(env_path.strip())
        return default_settings()

    if isinstance(source, AnalysisSettings):
        return source

    if isinstance(source, (str, Path)):
        return _load_from_yaml_file(source)

    if isinstance(source, dict):
        return _load_from_dict(source)

    raise TypeError(
        f"Unsupported source type for load_settings: {type(source).__name__}"
    )


def _load_from_yaml_file(path: str | Path) -> AnalysisSettings:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {file_path}: {e}") from e

    if data is None:
        return default_settings()
    if not isinstance(data, dict):
        raise ValueError(f"YAML file {file_path}: expected dict, got {type(data).__name__}")

    # Settings may sit at the root or under an "analysis" key
    if "analysis" in data:
        section = data["analysis"]
        if not isinstance(section, dict):
            raise ValueError(f"YAML file {file_path}: 'analysis' must be a dict")
        return _load_from_dict(section)
    return _load_from_dict(data)


def _number_field(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(
            f"Settings '{key}' must be a number, got {type(value).__name__}"
        )
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Settings '{key}' must be finite, got {value}")
    return value


def _load_from_dict(data: dict) -> AnalysisSettings:
    defaults = default_settings()

    label_prefix = data.get("label_prefix", defaults.label_prefix)
    if not isinstance(label_prefix, str):
        raise ValueError(
            f"Settings 'label_prefix' must be a string, got {type(label_prefix).__name__}"
        )

    return AnalysisSettings(
        label_prefix=label_prefix,
        default_weight=_number_field(data, "default_weight", defaults.default_weight),
        critical_path_baseline=_number_field(
            data, "critical_path_baseline", defaults.critical_path_baseline
        ),
    )
