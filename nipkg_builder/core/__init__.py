"""Core packaging components"""

from .path_resolver import PathResolver
from .validation_engine import ValidationEngine, ValidationResult
from .command_runner import CommandRunner, CommandResult, SubprocessRunner
from .control_file import generate_control_file, control_fields
from .metadata_resolver import MetadataResolver
from .project_types import (
    ProjectType,
    NodeProjectType,
    AngularProjectType,
    get_project_type,
)
from .staging_builder import StagingBuilder, StagingLayout

__all__ = [
    'PathResolver',
    'ValidationEngine',
    'ValidationResult',
    'CommandRunner',
    'CommandResult',
    'SubprocessRunner',
    'generate_control_file',
    'control_fields',
    'MetadataResolver',
    'ProjectType',
    'NodeProjectType',
    'AngularProjectType',
    'get_project_type',
    'StagingBuilder',
    'StagingLayout',
]
