"""Classification and masking of sensitive attribute values."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, Tuple

from .display import format_value

SENSITIVE_KEYWORDS: Tuple[str, ...] = (
    "password",
    "secret",
    "key",
    "token",
    "credential",
    "private_key",
    "public_key",
    "certificate",
    "ca_cert",
    "access_key",
    "secret_key",
    "api_key",
    "auth_token",
)

MASK = "***"
MASKED_LIST = "[***]"
MASKED_MAPPING = "{***}"


class SensitivityClassifier:
    """Decide which attribute values must be masked in the report.

    A key is sensitive when Terraform marks it in ``sensitive_values`` or when
    its lower-cased name contains one of the known keywords. The keyword match
    is a plain substring test, so names like ``keyboard_layout`` match ``key``.
    """

    def __init__(self, extra_keywords: Iterable[str] | None = None) -> None:
        keywords = list(SENSITIVE_KEYWORDS)
        for keyword in extra_keywords or []:
            normalized = keyword.strip().lower()
            if normalized and normalized not in keywords:
                keywords.append(normalized)
        self._keywords: Sequence[str] = tuple(keywords)

    @property
    def keywords(self) -> Sequence[str]:
        return self._keywords

    # ------------------------------------------------------------------
    def is_sensitive(self, key: str, sensitive_markers: Mapping[str, Any] | None = None) -> bool:
        """Return ``True`` when ``key`` is explicitly marked or matches a keyword."""

        if sensitive_markers and key in sensitive_markers:
            return True

        key_lower = key.lower()
        return any(keyword in key_lower for keyword in self._keywords)

    def display_value(
        self,
        key: str,
        value: Any,
        sensitive_markers: Mapping[str, Any] | None = None,
    ) -> Tuple[str, bool]:
        """Return the display text for an attribute and whether it was masked."""

        if self.is_sensitive(key, sensitive_markers):
            return mask_value(value), True
        return format_value(value), False


def mask_value(value: Any) -> str:
    """Return the masked display form of a sensitive value."""

    if isinstance(value, str):
        if len(value) > 8:
            return f"{value[:4]}...{value[-4:]}"
        return MASK
    if isinstance(value, list):
        return MASKED_LIST
    if isinstance(value, Mapping):
        return MASKED_MAPPING
    return MASK


__all__ = ["SENSITIVE_KEYWORDS", "SensitivityClassifier", "mask_value"]
