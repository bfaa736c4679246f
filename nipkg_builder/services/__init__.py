"""Service layer for nipkg-builder"""

from .config_service import ConfigService
from .build_service import BuildService, package_file_stem

__all__ = [
    'ConfigService',
    'BuildService',
    'package_file_stem',
]
