"""Configuration management service"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml

from ..api.exceptions import ConfigError
from ..core.path_resolver import PathResolver
from ..core.project_types import ProjectType
from ..models.config import NipkgConfig

YAML_SUFFIXES = ('.yaml', '.yml')

EXAMPLE_CONFIG = (
    '{\n'
    '  "name": "my-app",\n'
    '  "version": "1.0.0",\n'
    '  "buildDir": "dist"\n'
    '}'
)


class ConfigService:
    """Loads and creates nipkg.config.json"""

    def __init__(self, path_resolver: PathResolver):
        """Initialize config service

        Args:
            path_resolver: Path resolver for the project
        """
        self.path_resolver = path_resolver
        self.logger = logging.getLogger(self.__class__.__name__)

    def _parse(self, config_path: Path) -> dict:
        with open(config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        if config_path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)

        # An empty YAML document is an empty config
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration in {config_path.name} must be an object, "
                f"for example:\n{EXAMPLE_CONFIG}"
            )
        return data

    def load(self, config_path: Optional[Union[str, Path]] = None) -> Tuple[NipkgConfig, List[str]]:
        """Load configuration from file

        Args:
            config_path: Config file (default: nipkg.config.json in project root)

        Returns:
            (configuration, notices)

        Raises:
            ConfigError: If the file exists but cannot be parsed
        """
        path = self.path_resolver.get_config_path(config_path)
        notices = []

        if not path.exists():
            message = f"No {path.name} found, using defaults"
            self.logger.info(message)
            notices.append(message)
            return NipkgConfig(), notices

        try:
            data = self._parse(path)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to parse {path}: {e}\n"
                f"Fix the file or remove it. A minimal configuration looks like:\n"
                f"{EXAMPLE_CONFIG}"
            )

        try:
            config = NipkgConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"Invalid configuration in {path}: {e}\n"
                f"A valid configuration looks like:\n{EXAMPLE_CONFIG}"
            )

        self.logger.debug(f"Loaded configuration from {path}")
        return config, notices

    def init_config(self, project_type: ProjectType,
                    config_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Write the default configuration for a project

        Args:
            project_type: Project type providing the defaults
            config_path: Target file (default: nipkg.config.json)

        Returns:
            Path of the written file, None if one already exists
        """
        path = self.path_resolver.get_config_path(config_path)
        if path.exists():
            self.logger.info(f"{path.name} already exists, not overwriting")
            return None

        data = project_type.default_config().to_dict()
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)
                f.write("\n")

        self.logger.info(f"Created {path}")
        return path
