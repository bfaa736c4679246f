"""Exception definitions for nipkg-builder API"""

from ..constants import ErrorCode


class NipkgBuilderError(Exception):
    """Base exception for nipkg-builder"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(NipkgBuilderError):
    """Configuration error"""

    def __init__(self, message: str, error_code: str = ErrorCode.CONFIG_ERROR):
        super().__init__(message, error_code)


class ProjectTypeError(ConfigError):
    """Project directory does not match the requested project type"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PROJECT_TYPE_ERROR)


class ValidationError(NipkgBuilderError):
    """Validation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VALIDATION_FAILED)


class BuildCommandError(NipkgBuilderError):
    """Application build command failed"""

    def __init__(self, message: str, returncode: int = None):
        super().__init__(message, ErrorCode.BUILD_COMMAND_FAILED)
        self.returncode = returncode


class PackagingError(NipkgBuilderError):
    """Packaging operation error"""

    def __init__(self, message: str, error_code: str = ErrorCode.PACKAGING_FAILED):
        super().__init__(message, error_code)


class ArchiveError(PackagingError):
    """Malformed package container"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.ARCHIVE_INVALID)
