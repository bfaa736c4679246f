"""Path resolution module for nipkg-builder"""

from pathlib import Path
from typing import Optional, Union

from ..constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_OUTPUT_DIR,
    NIPKG_SUBDIR,
    PACKAGE_JSON_FILE,
    ANGULAR_JSON_FILE,
)


class PathResolver:
    """Resolves paths within a web application project"""

    def __init__(self, project_root: Optional[Union[str, Path]] = None):
        """Initialize path resolver

        Args:
            project_root: Root directory of the project (default: cwd)
        """
        self.project_root = Path(project_root or Path.cwd()).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to project root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(path)

        if path.is_absolute():
            return path

        return (self.project_root / path).resolve()

    def get_config_path(self, config_path: Optional[Union[str, Path]] = None) -> Path:
        """Get tool configuration file path"""
        return self.resolve(config_path or DEFAULT_CONFIG_FILE)

    def get_package_json_path(self) -> Path:
        """Get project manifest path"""
        return self.project_root / PACKAGE_JSON_FILE

    def get_angular_json_path(self) -> Path:
        """Get Angular workspace descriptor path"""
        return self.project_root / ANGULAR_JSON_FILE

    def get_output_dir(self, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """Get output directory path

        Args:
            output_dir: Configured output directory (default: dist/)

        Returns:
            Path to output directory
        """
        return self.resolve(output_dir or DEFAULT_OUTPUT_DIR)

    def get_nipkg_dir(self, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """Get directory holding produced packages"""
        return self.get_output_dir(output_dir) / NIPKG_SUBDIR

