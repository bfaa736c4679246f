"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ..constants import ProjectKind, PackagerKind


@dataclass
class NipkgConfig:
    """Tool configuration as stored in nipkg.config.json

    File keys are camelCase; every field is optional so that a missing
    config file maps to an empty configuration.
    """

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    maintainer: Optional[str] = None
    architecture: Optional[str] = None
    display_name: Optional[str] = None
    user_visible: Optional[bool] = None
    depends: List[str] = field(default_factory=list)

    # Build related
    build_dir: Optional[str] = None
    build_command: Optional[str] = None
    output_dir: Optional[str] = None
    build_suffix: Optional[str] = None
    project_name: Optional[str] = None
    project_type: Optional[str] = None
    packager: Optional[str] = None

    # (file key, attribute) pairs in the order they are written
    _KEYS = (
        ("name", "name"),
        ("version", "version"),
        ("description", "description"),
        ("maintainer", "maintainer"),
        ("architecture", "architecture"),
        ("displayName", "display_name"),
        ("buildDir", "build_dir"),
        ("buildCommand", "build_command"),
        ("outputDir", "output_dir"),
        ("buildSuffix", "build_suffix"),
        ("projectName", "project_name"),
        ("projectType", "project_type"),
        ("packager", "packager"),
        ("depends", "depends"),
        ("userVisible", "user_visible"),
    )

    _TEXT_FIELDS = (
        "description",
        "maintainer",
        "display_name",
        "build_dir",
        "build_command",
        "output_dir",
        "project_name",
    )

    def __post_init__(self):
        """Validate field types and enumerated values"""
        if self.project_type is not None:
            ProjectKind(self.project_type)
        if self.packager is not None:
            PackagerKind(self.packager)
        # YAML reads versions such as 1.0 as numbers
        for attr in ("name", "version", "architecture", "build_suffix"):
            value = getattr(self, attr)
            if value is not None and not isinstance(value, str):
                setattr(self, attr, str(value))

        for attr in self._TEXT_FIELDS:
            value = getattr(self, attr)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{self._file_key(attr)} must be a string, got {value!r}")

        if self.user_visible is not None and not isinstance(self.user_visible, bool):
            raise ValueError(
                f"userVisible must be true or false (unquoted), got {self.user_visible!r}"
            )

        if self.depends is None:
            self.depends = []
        elif isinstance(self.depends, str):
            self.depends = [d.strip() for d in self.depends.split(",") if d.strip()]
        elif not isinstance(self.depends, list) or \
                not all(isinstance(d, str) for d in self.depends):
            raise ValueError(
                f"depends must be a list of package names, got {self.depends!r}"
            )

    @classmethod
    def _file_key(cls, attr: str) -> str:
        return next(key for key, name in cls._KEYS if name == attr)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NipkgConfig':
        """Create from dictionary

        Accepts both the camelCase file keys and snake_case attribute names.
        """
        kwargs = {}
        for key, attr in cls._KEYS:
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]

        if kwargs.get('depends') is None:
            kwargs.pop('depends', None)

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using file keys, skipping unset values"""
        data = {}
        for key, attr in self._KEYS:
            value = getattr(self, attr)
            if value is None or value == []:
                continue
            data[key] = list(value) if attr == "depends" else value
        return data


@dataclass
class BuildOptions:
    """Per-invocation overrides, never persisted"""

    # Metadata overrides
    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    maintainer: Optional[str] = None
    architecture: Optional[str] = None

    # Locations
    build_dir: Optional[str] = None
    output_dir: Optional[str] = None
    build_suffix: Optional[str] = None

    # Invocation flags
    configuration: Optional[str] = None
    run_build: bool = False
    verbose: bool = False
    skip_cleanup: bool = False
    project_type: Optional[str] = None
    packager: Optional[str] = None

    def get_override(self, field_name: str) -> Optional[str]:
        """Get a metadata override by field name"""
        return getattr(self, field_name, None)
