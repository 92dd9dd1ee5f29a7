"""Utilities for loading report settings files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

DEFAULT_TITLE = "Terraform State"
DEFAULT_OUTPUT_PATH = "state-visualization.html"


class SettingsError(RuntimeError):
    """Raised when a settings file cannot be loaded or parsed."""


@dataclass(slots=True)
class ReportSettings:
    """Presentation options for a generated report."""

    title: str = DEFAULT_TITLE
    output_path: str = DEFAULT_OUTPUT_PATH
    extra_sensitive_keywords: List[str] = field(default_factory=list)


class SettingsLoader:
    """Load report settings from a YAML (or JSON) file on top of the defaults."""

    def load(self, path: Path | str | None = None) -> ReportSettings:
        """Return settings from ``path``; defaults when no path is given."""

        settings = ReportSettings()
        if path is None:
            return settings

        data = self._load_file(Path(path))

        title = data.get("title")
        if isinstance(title, str) and title.strip():
            settings.title = title.strip()

        output_path = data.get("output_path")
        if isinstance(output_path, str) and output_path.strip():
            settings.output_path = output_path.strip()

        keywords = data.get("extra_sensitive_keywords")
        if isinstance(keywords, list):
            for keyword in keywords:
                if not isinstance(keyword, str):
                    continue
                normalized = keyword.strip().lower()
                if normalized and normalized not in settings.extra_sensitive_keywords:
                    settings.extra_sensitive_keywords.append(normalized)

        return settings

    # ------------------------------------------------------------------
    def _load_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise SettingsError(f"Settings file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise SettingsError(f"Failed to read settings file {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise SettingsError(f"Invalid YAML in settings file {path}") from exc

        if not isinstance(data, Mapping):
            raise SettingsError(f"Settings file must be a mapping: {path}")

        return dict(data)


__all__ = [
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_TITLE",
    "ReportSettings",
    "SettingsError",
    "SettingsLoader",
]
