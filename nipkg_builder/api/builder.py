"""Builder API for packaging operations"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from ..core import PathResolver, CommandRunner, get_project_type
from ..core.archive import PackagingDelegate
from ..models import BuildOptions, BuildResult
from ..services import BuildService, ConfigService


class NipkgBuilder:
    """Entry point for building .nipkg packages from a web project"""

    def __init__(self,
                 project_root: Optional[Union[str, Path]] = None,
                 runner: Optional[CommandRunner] = None,
                 delegate: Optional[PackagingDelegate] = None):
        """
        Initialize builder

        Args:
            project_root: Project directory (default: cwd)
            runner: Command runner for the build step and dpkg-deb
            delegate: Packaging delegate to use instead of the direct writer
        """
        self.path_resolver = PathResolver(project_root)
        self.build_service = BuildService(self.path_resolver, runner=runner, delegate=delegate)
        self.config_service = ConfigService(self.path_resolver)
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def project_root(self) -> Path:
        return self.path_resolver.project_root

    def build(self,
              config_path: Optional[Union[str, Path]] = None,
              **options) -> BuildResult:
        """
        Build the package

        Args:
            config_path: Configuration file (default: nipkg.config.json)
            **options: BuildOptions fields
                - name, version, description, maintainer, architecture
                - build_dir, output_dir, build_suffix
                - configuration: Angular build configuration
                - run_build: Run the build command first
                - verbose: Stream build command output and log staged files
                - skip_cleanup: Keep staging tree and previous packages
                - project_type: 'auto', 'node' or 'angular'
                - packager: 'direct' or 'dpkg-deb'

        Returns:
            BuildResult, never raises for pipeline failures
        """
        build_options = BuildOptions(**options)
        return asyncio.run(self.build_service.build(build_options, config_path=config_path))

    def init(self,
             project_type: Optional[str] = None,
             config_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """
        Create a default configuration file

        Args:
            project_type: 'auto', 'node' or 'angular'
            config_path: Target file (default: nipkg.config.json)

        Returns:
            Written path, None when a configuration already exists

        Raises:
            ConfigError: If project_type is unknown
        """
        handler = get_project_type(self.path_resolver, project_type)
        return self.config_service.init_config(handler, config_path)


def build(project_root: Optional[Union[str, Path]] = None, **options) -> BuildResult:
    """
    Build a package (convenience function)

    Args:
        project_root: Project directory (default: cwd)
        **options: See NipkgBuilder.build

    Returns:
        BuildResult
    """
    return NipkgBuilder(project_root).build(**options)
