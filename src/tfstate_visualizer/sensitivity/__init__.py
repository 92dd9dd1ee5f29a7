"""Sensitive value detection, masking and display formatting."""

from .classifier import SENSITIVE_KEYWORDS, SensitivityClassifier, mask_value
from .display import format_value

__all__ = [
    "SENSITIVE_KEYWORDS",
    "SensitivityClassifier",
    "format_value",
    "mask_value",
]
