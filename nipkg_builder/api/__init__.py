# nipkg_builder/api/__init__.py
"""API layer for nipkg-builder"""

from .exceptions import (
    NipkgBuilderError,
    ConfigError,
    ProjectTypeError,
    ValidationError,
    BuildCommandError,
    PackagingError,
    ArchiveError,
)
from .builder import NipkgBuilder, build

__all__ = [
    # Main classes
    "NipkgBuilder",

    # Convenience functions
    "build",

    # Exceptions
    "NipkgBuilderError",
    "ConfigError",
    "ProjectTypeError",
    "ValidationError",
    "BuildCommandError",
    "PackagingError",
    "ArchiveError",
]
