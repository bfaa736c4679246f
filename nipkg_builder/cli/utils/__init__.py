"""CLI utility functions"""

from .output import (
    console,
    error_console,
    format_build_result,
    print_error,
    print_warning,
    print_info,
    print_notice,
    print_success,
)

__all__ = [
    'console',
    'error_console',
    'format_build_result',
    'print_error',
    'print_warning',
    'print_info',
    'print_notice',
    'print_success',
]
