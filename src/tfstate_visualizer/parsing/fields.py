"""Permissive field extraction helpers for untyped JSON documents."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Tuple, Type, TypeVar, Union

T = TypeVar("T")

_MISSING = object()


def field_of(
    data: Mapping[str, Any],
    key: str,
    expected: Union[Type[T], Tuple[type, ...]],
    default: Callable[[], T],
) -> T:
    """Return ``data[key]`` when it has the expected JSON type, else ``default()``.

    Booleans are never accepted where a number is expected, mirroring the JSON
    distinction between ``true`` and ``1``.
    """

    value = data.get(key, _MISSING)
    if value is _MISSING:
        return default()

    if isinstance(value, bool) and bool not in _as_tuple(expected):
        return default()
    if not isinstance(value, expected):
        return default()
    return value  # type: ignore[return-value]


def string_field(data: Mapping[str, Any], key: str) -> str:
    return field_of(data, key, str, str)


def bool_field(data: Mapping[str, Any], key: str) -> bool:
    return field_of(data, key, bool, bool)


def mapping_field(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    return dict(field_of(data, key, Mapping, dict))


def list_field(data: Mapping[str, Any], key: str) -> List[Any]:
    return list(field_of(data, key, list, list))


def non_negative_int_field(data: Mapping[str, Any], key: str) -> int:
    """Return a JSON number as an ``int``; fractions truncate, negatives become ``0``."""

    number = field_of(data, key, (int, float), int)
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return max(int(number), 0)


def any_field(data: Mapping[str, Any], key: str) -> Any:
    """Return the raw value of ``key`` or ``None``; any JSON type is acceptable."""

    return data.get(key)


def string_items(values: List[Any]) -> List[str]:
    """Keep only the string entries of ``values``, preserving order and duplicates."""

    return [value for value in values if isinstance(value, str)]


def _as_tuple(expected: Union[type, Tuple[type, ...]]) -> Tuple[type, ...]:
    if isinstance(expected, tuple):
        return expected
    return (expected,)


__all__ = [
    "any_field",
    "bool_field",
    "field_of",
    "list_field",
    "mapping_field",
    "non_negative_int_field",
    "string_field",
    "string_items",
]
