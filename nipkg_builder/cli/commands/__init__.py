"""CLI commands"""

from . import build, init

__all__ = ['build', 'init']
