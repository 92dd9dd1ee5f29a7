"""Command-line interface package for the state visualizer."""

from .app import build_parser, main, resolve_output_path, run, version_info

__all__ = [
    "build_parser",
    "main",
    "resolve_output_path",
    "run",
    "version_info",
]
