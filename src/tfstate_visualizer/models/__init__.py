"""Data models for parsed Terraform state."""

from .state import Module, Output, OutputValue, Resource, ResourceMode, State

__all__ = [
    "Module",
    "Output",
    "OutputValue",
    "Resource",
    "ResourceMode",
    "State",
]
