# nipkg_builder/core/validation_engine.py
"""Validation engine for package metadata"""

from dataclasses import dataclass, field
from typing import List

from ..constants import VERSION_PATTERN, PATH_SEPARATOR_PATTERN
from ..models.metadata import PackageMetadata


@dataclass
class ValidationResult:
    """Validation result container"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)

    def merge(self, other: 'ValidationResult') -> None:
        """Merge another result into this one"""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.is_valid:
            self.is_valid = False


class ValidationEngine:
    """Execute metadata validation operations"""

    def validate_filename_component(self, label: str, value: str) -> ValidationResult:
        """
        Validate a value that becomes part of the package filename

        Args:
            label: Field label used in messages
            value: Value to validate

        Returns:
            ValidationResult
        """
        result = ValidationResult()

        if not value or not value.strip():
            result.add_error(f"Package {label} cannot be empty")
            return result

        if PATH_SEPARATOR_PATTERN.search(value):
            result.add_error(
                f"Package {label} '{value}' must not contain path separators"
            )

        if value in ('.', '..'):
            result.add_error(f"Package {label} '{value}' is not a valid file name")

        return result

    def validate_version(self, version: str) -> ValidationResult:
        """
        Validate version string

        Versions outside MAJOR.MINOR.PATCH[.BUILD] (NI style) are accepted
        with a warning.

        Args:
            version: Version string to validate

        Returns:
            ValidationResult
        """
        result = self.validate_filename_component("version", version)
        if not result.is_valid:
            return result

        if not VERSION_PATTERN.match(version):
            result.add_warning(
                f"Version '{version}' is not in MAJOR.MINOR.PATCH[.BUILD][-PRERELEASE][+META] format"
            )

        return result

    def validate_metadata(self, metadata: PackageMetadata) -> ValidationResult:
        """
        Validate resolved package metadata

        Args:
            metadata: Metadata to validate

        Returns:
            ValidationResult
        """
        result = ValidationResult()
        result.merge(self.validate_filename_component("name", metadata.name))
        result.merge(self.validate_version(metadata.version))
        result.merge(self.validate_filename_component("architecture", metadata.architecture))

        for dep in metadata.depends:
            if not dep or not dep.strip():
                result.add_error("Dependency names cannot be empty")
                break

        return result
