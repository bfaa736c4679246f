# nipkg_builder/core/metadata_resolver.py
"""Package metadata resolution"""

import logging
from pathlib import Path
from typing import Optional, Dict, Any, List

from .validation_engine import ValidationEngine
from ..api.exceptions import ValidationError
from ..constants import (
    DEFAULT_VERSION,
    DEFAULT_ARCHITECTURE,
    DEFAULT_MAINTAINER,
    DEFAULT_DESCRIPTION,
)
from ..models.config import NipkgConfig, BuildOptions
from ..models.metadata import PackageMetadata
from ..utils.file_utils import read_json_object

RESOLVABLE_FIELDS = ("name", "version", "description", "maintainer", "architecture")

# config/options attribute -> package.json key
MANIFEST_KEYS = {
    "name": "name",
    "version": "version",
    "description": "description",
    "maintainer": "author",
}


def format_author(author: Any) -> Optional[str]:
    """
    Render a package.json author entry as 'Name <email>'

    Args:
        author: String or {name, email, url} object

    Returns:
        Maintainer string or None
    """
    if isinstance(author, str):
        return author.strip() or None

    if isinstance(author, dict):
        name = str(author.get('name') or '').strip()
        email = str(author.get('email') or '').strip()
        if name and email:
            return f"{name} <{email}>"
        return name or (f"<{email}>" if email else None)

    return None


class MetadataResolver:
    """Resolve each metadata field from a priority chain

    For every field the first non-empty value wins:

    1. runtime override (BuildOptions)
    2. tool configuration (NipkgConfig)
    3. project manifest (package.json)
    4. built-in default

    Using tier 3 or 4 records a notice. A manifest that cannot be parsed
    is treated as missing.
    """

    def __init__(self,
                 config: NipkgConfig,
                 options: Optional[BuildOptions] = None,
                 manifest_path: Optional[Path] = None,
                 project_root: Optional[Path] = None):
        """
        Initialize metadata resolver

        Args:
            config: Loaded tool configuration
            options: Runtime overrides
            manifest_path: package.json path (optional)
            project_root: Project root, its base name is the fallback name
        """
        self.config = config
        self.options = options or BuildOptions()
        self.manifest_path = manifest_path
        self.project_root = Path(project_root or Path.cwd())
        self.validation_engine = ValidationEngine()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.notices: List[str] = []
        self.warnings: List[str] = []
        self._manifest: Optional[Dict[str, Any]] = None
        self._manifest_loaded = False

    @property
    def manifest(self) -> Dict[str, Any]:
        """Project manifest contents (lazy, empty when unavailable)"""
        if not self._manifest_loaded:
            self._manifest_loaded = True
            if self.manifest_path is not None:
                self._manifest = read_json_object(self.manifest_path)
        return self._manifest or {}

    def _default(self, field_name: str) -> str:
        defaults = {
            "name": self.project_root.name,
            "version": DEFAULT_VERSION,
            "description": DEFAULT_DESCRIPTION,
            "maintainer": DEFAULT_MAINTAINER,
            "architecture": DEFAULT_ARCHITECTURE,
        }
        return defaults[field_name]

    def _notice(self, message: str) -> None:
        self.notices.append(message)
        self.logger.info(message)

    def resolve(self, field_name: str) -> str:
        """
        Resolve a single metadata field

        Args:
            field_name: One of name, version, description, maintainer, architecture

        Returns:
            Resolved value (possibly empty for description)
        """
        if field_name not in RESOLVABLE_FIELDS:
            raise ValueError(f"Unknown metadata field: {field_name}")

        override = self.options.get_override(field_name)
        if override:
            return override

        configured = getattr(self.config, field_name, None)
        if configured:
            return configured

        manifest_key = MANIFEST_KEYS.get(field_name)
        if manifest_key:
            value = self.manifest.get(manifest_key)
            if field_name == "maintainer":
                value = format_author(value)
            elif value is not None and not isinstance(value, str):
                value = None

            if value:
                self._notice(f"Using {field_name} \"{value}\" from package.json")
                return value

        value = self._default(field_name)
        if field_name == "description":
            # Empty description is a normal outcome, not worth a notice
            return value

        self._notice(f"No {field_name} found, defaulting to \"{value}\"")
        return value

    def resolve_all(self) -> PackageMetadata:
        """
        Resolve every field and build validated metadata

        Returns:
            PackageMetadata

        Raises:
            ValidationError: If name, version or architecture is unusable
        """
        metadata = PackageMetadata(
            name=self.resolve("name"),
            version=self.resolve("version"),
            description=self.resolve("description"),
            maintainer=self.resolve("maintainer"),
            architecture=self.resolve("architecture"),
            display_name=self.config.display_name,
            user_visible=self.config.user_visible,
            depends=list(self.config.depends or []),
        )

        result = self.validation_engine.validate_metadata(metadata)
        if not result.is_valid:
            raise ValidationError("; ".join(result.errors))

        for warning in result.warnings:
            self.warnings.append(warning)
            self.logger.warning(warning)

        return metadata
