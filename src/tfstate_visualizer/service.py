"""Orchestration layer used by the CLI to turn a state file into an HTML report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from jinja2 import TemplateError

from .adapters import StateLoader, StateLoaderError
from .models import State
from .parsing import StateFormatError, StateParser
from .rendering import HtmlReportRenderer

logger = logging.getLogger(__name__)


class ReportError(RuntimeError):
    """Raised when a report run fails, naming the stage that failed."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"{stage}: {message}")
        self.stage = stage


@dataclass(slots=True)
class ReportResult:
    """Result returned by :class:`ReportService` runs."""

    state: State
    output_path: Path
    byte_count: int
    html_length: int


StateLoaderFactory = Callable[[Path], StateLoader]


class ReportService:
    """High level service responsible for state ingestion and report rendering."""

    def __init__(
        self,
        *,
        loader_factory: StateLoaderFactory | None = None,
        parser: StateParser | None = None,
        renderer: HtmlReportRenderer | None = None,
    ) -> None:
        self._loader_factory = loader_factory or StateLoader
        self._parser = parser or StateParser()
        self._renderer = renderer or HtmlReportRenderer()

    # ------------------------------------------------------------------
    def generate(self, input_path: Path, output_path: Path) -> ReportResult:
        """Read ``input_path``, render it and write the report to ``output_path``."""

        loader = self._loader_factory(input_path)
        try:
            raw = loader.load_state()
        except StateLoaderError as exc:
            raise ReportError("reading state file", str(exc)) from exc
        logger.info("Loaded %d bytes of state data from %s", loader.byte_count, input_path)

        state = self.parse(raw)
        logger.info(
            "Parsed %d resources and %d outputs", len(state.resources), len(state.outputs)
        )

        try:
            html = self._renderer.render(state)
        except (TemplateError, RecursionError) as exc:
            raise ReportError("rendering HTML", str(exc)) from exc

        self._write(output_path, html)
        logger.info("Wrote HTML report to %s", output_path)

        return ReportResult(
            state=state,
            output_path=output_path,
            byte_count=loader.byte_count,
            html_length=len(html),
        )

    def parse(self, raw: Any) -> State:
        try:
            return self._parser.parse(raw)
        except StateFormatError as exc:
            raise ReportError("parsing state data", str(exc)) from exc

    # ------------------------------------------------------------------
    def _write(self, output_path: Path, html: str) -> None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise ReportError(
                "writing HTML file", f"failed to write HTML file {output_path}: {exc}"
            ) from exc


__all__ = ["ReportError", "ReportResult", "ReportService", "StateFormatError", "StateLoaderError"]
