"""
Top-level package for conventional_changelog.

This package exposes the main CLI entry point via the
``conventional_changelog.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
