"""Adapter layer package for state ingestion."""

from .state_loader import StateLoader, StateLoaderError

__all__ = [
    "StateLoader",
    "StateLoaderError",
]
