"""nipkg-builder - Package Angular and Node.js build output as .nipkg files.

Stages the application's build output, writes the control file and wraps
both in the Debian-style ar container that NI Package Manager installs.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.builder import NipkgBuilder, build

# Data models
from .models import PackageMetadata, NipkgConfig, BuildOptions, BuildResult

# Exceptions
from .api.exceptions import (
    NipkgBuilderError,
    ConfigError,
    ProjectTypeError,
    ValidationError,
    BuildCommandError,
    PackagingError,
    ArchiveError,
)

# Utility functions
from .core.control_file import generate_control_file
from .core.archive import verify_package

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "NipkgBuilder",

    # Core API functions
    "build",

    # Data models
    "PackageMetadata",
    "NipkgConfig",
    "BuildOptions",
    "BuildResult",

    # Exceptions
    "NipkgBuilderError",
    "ConfigError",
    "ProjectTypeError",
    "ValidationError",
    "BuildCommandError",
    "PackagingError",
    "ArchiveError",

    # Utility functions
    "generate_control_file",
    "verify_package",
]
