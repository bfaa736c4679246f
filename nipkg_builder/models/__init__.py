"""Data models for nipkg-builder"""

from .metadata import PackageMetadata
from .config import NipkgConfig, BuildOptions
from .result import BuildResult

__all__ = [
    "PackageMetadata",
    "NipkgConfig",
    "BuildOptions",
    "BuildResult",
]
