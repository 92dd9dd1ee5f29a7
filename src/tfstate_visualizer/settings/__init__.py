"""Report settings management."""

from .report_settings import (
    DEFAULT_OUTPUT_PATH,
    DEFAULT_TITLE,
    ReportSettings,
    SettingsError,
    SettingsLoader,
)

__all__ = [
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_TITLE",
    "ReportSettings",
    "SettingsError",
    "SettingsLoader",
]
