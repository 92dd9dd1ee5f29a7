"""Render Terraform state JSON exports as static HTML reports."""

__version__ = "0.1.0"

__all__ = ["__version__"]
