"""Parsing of ``terraform show -json`` state documents into models."""

from .state_parser import StateFormatError, StateParser, flatten_module

__all__ = ["StateFormatError", "StateParser", "flatten_module"]
