"""Global constants for nipkg-builder"""

from enum import Enum
import re

APP_NAME = "nipkg-builder"
LOG_FORMAT = "%(message)s"

# Input files
DEFAULT_CONFIG_FILE = "nipkg.config.json"
PACKAGE_JSON_FILE = "package.json"
ANGULAR_JSON_FILE = "angular.json"

# Directory structure
DEFAULT_OUTPUT_DIR = "dist"
NIPKG_SUBDIR = "nipkg"
STAGING_DIR_NAME = "file-package"
CONTROL_SUBDIR = "control"
DATA_SUBDIR = "data"
PAYLOAD_DIR_NAME = "ApplicationFiles_64"
CONTROL_FILE_NAME = "control"

# Package file naming
PACKAGE_EXTENSION = ".nipkg"
DEB_EXTENSION = ".deb"
CLEANUP_EXTENSIONS = (PACKAGE_EXTENSION, DEB_EXTENSION)
PACKAGE_FILE_PATTERN = "{name}_{version}_{architecture}"
PACKAGE_FILE_PATTERN_WITH_SUFFIX = "{name}_{version}_{suffix}_{architecture}"

# Metadata defaults
DEFAULT_VERSION = "1.0.0"
DEFAULT_ARCHITECTURE = "all"
ANGULAR_INIT_ARCHITECTURE = "windows_x64"
DEFAULT_MAINTAINER = "user_name <user@example.com>"
DEFAULT_DESCRIPTION = ""
CONTROL_PLUGIN = "file"

# Build commands
DEFAULT_NODE_BUILD_COMMAND = "npm run build"
DEFAULT_ANGULAR_BUILD_COMMAND = "ng build"

# Debian archive layout
AR_MAGIC = b"!<arch>\n"
AR_HEADER_END = b"`\n"
AR_HEADER_SIZE = 60
AR_PAD_BYTE = b"\n"
AR_DEFAULT_UID = 0
AR_DEFAULT_GID = 0
AR_DEFAULT_MODE = 0o100644
DEBIAN_BINARY_MEMBER = "debian-binary"
CONTROL_MEMBER = "control.tar.gz"
DATA_MEMBER = "data.tar.gz"
DEBIAN_BINARY_CONTENT = b"2.0\n"
PACKAGE_MEMBER_ORDER = (DEBIAN_BINARY_MEMBER, CONTROL_MEMBER, DATA_MEMBER)

# Tar normalization
TAR_OWNER_NAME = "root"
TAR_DIR_MODE = 0o755
TAR_FILE_MODE = 0o644
TAR_EXEC_MODE = 0o755

# Copy chunk size
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

# Environment variables
ENV_SOURCE_DATE_EPOCH = "SOURCE_DATE_EPOCH"
ENV_LOG_LEVEL = "NIPKG_BUILDER_LOG_LEVEL"


class ProjectKind(Enum):
    AUTO = "auto"
    NODE = "node"
    ANGULAR = "angular"


class PackagerKind(Enum):
    DIRECT = "direct"
    DPKG_DEB = "dpkg-deb"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "NB001"
    PROJECT_TYPE_ERROR = "NB002"
    VALIDATION_FAILED = "NB003"
    BUILD_COMMAND_FAILED = "NB004"
    PACKAGING_FAILED = "NB005"
    ARCHIVE_INVALID = "NB006"


# Validation patterns
VERSION_PATTERN = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?:\.(?P<revision>\d+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"$"
)
PATH_SEPARATOR_PATTERN = re.compile(r"[/\\]")

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "ℹ"
EMOJI_ROCKET = "🚀"
EMOJI_BUILD = "🔨"
EMOJI_TRASH = "🗑"

# Messages templates
MSG_PACKAGE_REMOVED = f"{EMOJI_TRASH} Removed existing package: {{name}}"

# Remediation snippets
BUILD_DIR_REMEDIATION = (
    "buildDir is required in nipkg.config.json.\n"
    "Please add the build output directory path, for example:\n"
    '  "buildDir": "dist"\n'
    '  or "buildDir": "build"\n\n'
    "This should point to your application's build output directory."
)
