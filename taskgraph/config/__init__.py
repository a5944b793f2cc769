"""Analysis settings."""

from taskgraph.config.settings import (
    SETTINGS_ENV,
    AnalysisSettings,
    default_settings,
    load_settings,
)

__all__ = [
    "AnalysisSettings",
    "SETTINGS_ENV",
    "default_settings",
    "load_settings",
]
