# nipkg_builder/core/control_file.py
"""Control file rendering

The control file always has the same nine lines in the same order. Optional
fields that are not set are written as ``# Field:`` placeholders instead of
being dropped, so tools that read it by position keep working.
"""

from collections import OrderedDict
from typing import Dict, List, Optional

from ..constants import CONTROL_PLUGIN
from ..models.metadata import PackageMetadata

CONTROL_FIELD_ORDER = (
    "Architecture",
    "Depends",
    "Description",
    "DisplayName",
    "Maintainer",
    "Package",
    "Plugin",
    "UserVisible",
    "Version",
)


def _single_line(value: str) -> str:
    """Fold embedded line breaks into spaces"""
    return " ".join(part.strip() for part in str(value).splitlines() if part.strip())


def format_depends(depends: List[str]) -> Optional[str]:
    """Join dependency names, or None when there are none"""
    names = [d.strip() for d in depends if d and d.strip()]
    return ", ".join(names) if names else None


def format_user_visible(user_visible: Optional[bool]) -> Optional[str]:
    if user_visible is None:
        return None
    return "true" if user_visible else "false"


def control_values(metadata: PackageMetadata) -> Dict[str, Optional[str]]:
    """
    Map every control field to its value, None for unset optional fields

    Args:
        metadata: Resolved package metadata

    Returns:
        Ordered mapping over CONTROL_FIELD_ORDER
    """
    values = OrderedDict()
    values["Architecture"] = metadata.architecture
    values["Depends"] = format_depends(metadata.depends)
    values["Description"] = metadata.description or ""
    values["DisplayName"] = metadata.display_name
    values["Maintainer"] = metadata.maintainer or ""
    values["Package"] = metadata.name
    values["Plugin"] = CONTROL_PLUGIN
    values["UserVisible"] = format_user_visible(metadata.user_visible)
    values["Version"] = metadata.version

    for key, value in values.items():
        if value is not None:
            values[key] = _single_line(value)

    return values


def control_fields(metadata: PackageMetadata) -> Dict[str, str]:
    """
    Get only the control fields that carry a value

    Used when a packaging delegate writes its own control file.
    """
    return OrderedDict(
        (key, value) for key, value in control_values(metadata).items()
        if value is not None
    )


def generate_control_file(metadata: PackageMetadata) -> str:
    """
    Render the control file text

    Args:
        metadata: Resolved package metadata

    Returns:
        Nine newline-terminated lines
    """
    lines = []
    for key, value in control_values(metadata).items():
        if value is None:
            lines.append(f"# {key}:")
        else:
            lines.append(f"{key}: {value}".rstrip())

    return "\n".join(lines) + "\n"
