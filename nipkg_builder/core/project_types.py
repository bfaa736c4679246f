# nipkg_builder/core/project_types.py
"""Project type detection and per-type behaviour

A project type knows how to tell whether a directory is a project of its
kind, where the build output lives and which command builds it. Everything
after that (staging, archive assembly) is shared.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Dict, Any, Type

from .metadata_resolver import format_author
from .path_resolver import PathResolver
from ..api.exceptions import ConfigError, ProjectTypeError
from ..constants import (
    ProjectKind,
    DEFAULT_NODE_BUILD_COMMAND,
    DEFAULT_ANGULAR_BUILD_COMMAND,
    DEFAULT_ARCHITECTURE,
    ANGULAR_INIT_ARCHITECTURE,
    DEFAULT_MAINTAINER,
    DEFAULT_VERSION,
    BUILD_DIR_REMEDIATION,
)
from ..models.config import NipkgConfig
from ..utils.file_utils import read_json_object


class ProjectType(ABC):
    """Base class for supported project kinds"""

    kind: ProjectKind = None

    def __init__(self, path_resolver: PathResolver):
        self.path_resolver = path_resolver
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def validate(self) -> None:
        """Raise ProjectTypeError when the project root is not of this kind"""
        pass

    @abstractmethod
    def default_build_command(self, configuration: Optional[str] = None) -> str:
        """Build command used when the config does not set one"""
        pass

    def detect_build_dir(self, config: NipkgConfig) -> Optional[str]:
        """Guess the build output directory when it is not configured"""
        return None

    def locate_build_output(self, config: NipkgConfig,
                            override: Optional[str] = None) -> Path:
        """
        Resolve the build output directory

        Args:
            config: Loaded configuration
            override: Build directory given on the command line

        Returns:
            Absolute path (not checked for existence)

        Raises:
            ConfigError: If no build directory can be determined
        """
        build_dir = override or config.build_dir or self.detect_build_dir(config)
        if not build_dir:
            raise ConfigError(BUILD_DIR_REMEDIATION)
        return self.path_resolver.resolve(build_dir)

    def build_command(self, config: NipkgConfig,
                      configuration: Optional[str] = None) -> str:
        if isinstance(config.build_command, str) and config.build_command.strip():
            return config.build_command
        return self.default_build_command(configuration)

    def read_manifest(self) -> Dict[str, Any]:
        """Read package.json, empty when missing or malformed"""
        return read_json_object(self.path_resolver.get_package_json_path()) or {}

    def default_config(self) -> NipkgConfig:
        """Configuration written by 'init'"""
        manifest = self.read_manifest()
        name = manifest.get('name') or self.path_resolver.project_root.name
        author = format_author(manifest.get('author'))

        return NipkgConfig(
            name=name,
            version=manifest.get('version') or DEFAULT_VERSION,
            description=manifest.get('description') or "",
            maintainer=author or DEFAULT_MAINTAINER,
            architecture=DEFAULT_ARCHITECTURE,
            display_name=name,
            build_dir="dist",
            user_visible=True,
        )


class NodeProjectType(ProjectType):
    """Generic Node.js project (package.json, 'npm run build')"""

    kind = ProjectKind.NODE

    def validate(self) -> None:
        if not self.path_resolver.get_package_json_path().exists():
            raise ProjectTypeError(
                "This is not a Node.js project. "
                "Please run this command in a Node.js project directory "
                f"(no package.json found in {self.path_resolver.project_root})."
            )

    def default_build_command(self, configuration: Optional[str] = None) -> str:
        return DEFAULT_NODE_BUILD_COMMAND


class AngularProjectType(ProjectType):
    """Angular CLI workspace (angular.json, 'ng build')"""

    kind = ProjectKind.ANGULAR

    def validate(self) -> None:
        if not self.path_resolver.get_angular_json_path().exists():
            raise ProjectTypeError(
                "This is not an Angular workspace. "
                "Please run this command in an Angular project directory "
                f"(no angular.json found in {self.path_resolver.project_root})."
            )

    def default_build_command(self, configuration: Optional[str] = None) -> str:
        if configuration:
            return f"{DEFAULT_ANGULAR_BUILD_COMMAND} --configuration={configuration}"
        return DEFAULT_ANGULAR_BUILD_COMMAND

    def read_workspace(self) -> Optional[Dict[str, Any]]:
        """Read angular.json, None when missing or malformed"""
        return read_json_object(self.path_resolver.get_angular_json_path())

    def select_project(self, config: NipkgConfig) -> Optional[str]:
        """
        Pick the workspace project to package

        Order: projectName from config, defaultProject, first project.
        """
        if config.project_name:
            return config.project_name

        workspace = self.read_workspace()
        if not workspace:
            return None

        default_project = workspace.get('defaultProject')
        if isinstance(default_project, str) and default_project:
            return default_project

        projects = workspace.get('projects')
        if isinstance(projects, dict) and projects:
            return next(iter(projects))

        return None

    def detect_build_dir(self, config: NipkgConfig) -> Optional[str]:
        project = self.select_project(config)
        if not project:
            return None

        output_path = None
        workspace = self.read_workspace() or {}
        try:
            output_path = (workspace['projects'][project]
                           ['architect']['build']['options']['outputPath'])
        except (KeyError, TypeError):
            pass

        # application builder (Angular 17+) emits into <outputPath>/browser
        if isinstance(output_path, dict):
            base = output_path.get('base')
            if not base:
                return f"dist/{project}/browser"
            browser = output_path.get('browser', 'browser')
            return f"{base}/{browser}" if browser else base

        if isinstance(output_path, str) and output_path:
            return output_path

        return f"dist/{project}/browser"

    def default_config(self) -> NipkgConfig:
        config = super().default_config()
        project = self.select_project(NipkgConfig()) or config.name

        config.architecture = ANGULAR_INIT_ARCHITECTURE
        config.description = config.description or f"{config.name} Angular application"
        config.build_dir = f"dist/{project}/browser"
        return config


PROJECT_TYPES: Dict[ProjectKind, Type[ProjectType]] = {
    ProjectKind.NODE: NodeProjectType,
    ProjectKind.ANGULAR: AngularProjectType,
}


def detect_project_kind(path_resolver: PathResolver) -> ProjectKind:
    """Angular when angular.json exists, Node otherwise"""
    if path_resolver.get_angular_json_path().exists():
        return ProjectKind.ANGULAR
    return ProjectKind.NODE


def get_project_type(path_resolver: PathResolver,
                     kind: Optional[str] = None) -> ProjectType:
    """
    Create the project type handler

    Args:
        path_resolver: Path resolver for the project
        kind: 'node', 'angular', 'auto' or None (auto)

    Returns:
        ProjectType instance
    """
    try:
        project_kind = ProjectKind(kind or ProjectKind.AUTO.value)
    except ValueError:
        raise ConfigError(
            f"Unknown project type: {kind}. "
            f"Expected one of: {', '.join(k.value for k in ProjectKind)}"
        )

    if project_kind == ProjectKind.AUTO:
        project_kind = detect_project_kind(path_resolver)

    return PROJECT_TYPES[project_kind](path_resolver)
