"""Plain display formatting for attribute values that are not masked."""

from __future__ import annotations

from typing import Any, Mapping

MAX_STRING_LENGTH = 100


def format_value(value: Any) -> str:
    """Render a JSON value as a short, single-line summary.

    Numbers are always shown without decimals, so fractional attribute values
    are rounded in the report.
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        if len(value) > MAX_STRING_LENGTH:
            return value[:MAX_STRING_LENGTH] + "..."
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value:
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "+Inf" if value > 0 else "-Inf"
        return f"{value:.0f}"
    if isinstance(value, list):
        if not value:
            return "[]"
        return f"[{len(value)} items]"
    if isinstance(value, Mapping):
        return f"{{{len(value)} fields}}"
    return str(value)


__all__ = ["MAX_STRING_LENGTH", "format_value"]
