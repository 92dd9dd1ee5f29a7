"""Command-line interface implementation for the state visualizer."""

from __future__ import annotations

import argparse
import logging
import platform
import sys
from pathlib import Path
from typing import Sequence

from .. import __version__
from ..adapters import StateLoader, StateLoaderError
from ..rendering import HtmlReportRenderer
from ..service import ReportError, ReportResult, ReportService
from ..settings import ReportSettings, SettingsError, SettingsLoader

PROG = "terraform-state-visualizer"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog=PROG,
        description=(
            "Convert a Terraform state JSON file (terraform show -json) "
            "into a static HTML report."
        ),
        epilog=(
            "Examples:\n"
            f"  {PROG} -i state.json\n"
            f"  {PROG} -i state.json -o state-visualization.html\n"
            f"  {PROG} -i state.json --output-html-path my-state.html"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=None,
        help="Input Terraform state JSON file (required).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output HTML file path (default: state-visualization.html).",
    )
    parser.add_argument(
        "--output-html-path",
        type=Path,
        default=None,
        help="Output HTML file path (alternative to -o; -o wins when both are set).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML/JSON settings file with report title and extra sensitive keywords.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Show version information.",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors.")

    return parser


def version_info() -> str:
    return "\n".join(
        [
            f"Terraform State Visualizer {__version__}",
            f"Python Version: {platform.python_version()}",
            f"Platform: {sys.platform}/{platform.machine()}",
        ]
    )


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def resolve_output_path(
    output: Path | None,
    output_html_path: Path | None,
    settings: ReportSettings,
) -> Path:
    """Pick the output path: ``-o`` first, then ``--output-html-path``, then settings."""

    if output is not None:
        return output
    if output_html_path is not None:
        return output_html_path
    return Path(settings.output_path)


def create_service(settings: ReportSettings) -> ReportService:
    """Create a report service wired with the renderer for ``settings``."""

    return ReportService(renderer=HtmlReportRenderer(settings=settings))


def _error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _print_result(result: ReportResult) -> None:
    print(f"JSON contains {result.byte_count} bytes of data")
    print(
        f"Found {len(result.state.resources)} resources and "
        f"{len(result.state.outputs)} outputs"
    )
    print(f"Generated HTML content ({result.html_length} characters)")
    print(f"Successfully wrote HTML to: {result.output_path}")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the console script."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(version_info())
        return 0

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        StateLoader(args.input).validate()
    except StateLoaderError as exc:
        _error(str(exc))
        print(f"Usage: {PROG} -i <input-file> [-o <output-file>]")
        print("Use -h for more help information")
        return 1

    try:
        settings = SettingsLoader().load(args.config)
    except SettingsError as exc:
        _error(str(exc))
        return 1

    output_path = resolve_output_path(args.output, args.output_html_path, settings)
    print(f"Input file: {args.input}")
    print(f"Output file: {output_path}")

    service = create_service(settings)
    try:
        result = service.generate(args.input, output_path)
    except ReportError as exc:
        logger.debug("Report generation failed during %s", exc.stage, exc_info=True)
        _error(str(exc))
        return 1

    _print_result(result)
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
