from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StateLoaderError(RuntimeError):
    """Exception raised when a Terraform state document cannot be read or decoded."""


class StateLoader:
    """Load a Terraform state document exported with ``terraform show -json``."""

    def __init__(self, state_json_path: str | os.PathLike[str] | None) -> None:
        self.state_json_path = Path(state_json_path) if state_json_path else None
        self.byte_count = 0

    def validate(self) -> Path:
        """Return the state path after checking that it names a readable file."""

        if self.state_json_path is None:
            raise StateLoaderError("input file is required")

        path = self.state_json_path
        if not path.exists():
            raise StateLoaderError(f"input file '{path}' does not exist")
        if not path.is_file():
            raise StateLoaderError(f"input file '{path}' is not a regular file")
        if not os.access(path, os.R_OK):
            raise StateLoaderError(f"cannot read input file '{path}'")
        return path

    def load_state(self) -> Any:
        """Read and decode the state document, returning the raw JSON value."""

        path = self.validate()

        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StateLoaderError(f"failed to read file {path}: {exc}") from exc

        self.byte_count = len(raw)
        logger.debug("Read %d bytes from %s", self.byte_count, path)

        try:
            return json.loads(raw.decode("utf-8-sig"))
        except UnicodeDecodeError as exc:
            raise StateLoaderError(f"State file is not valid UTF-8: {path}") from exc
        except json.JSONDecodeError as exc:
            raise StateLoaderError(f"Invalid JSON in state file {path}: {exc.msg}") from exc
        except RecursionError as exc:
            raise StateLoaderError(f"State file is nested too deeply to decode: {path}") from exc


__all__ = ["StateLoader", "StateLoaderError"]
