"""Command line interface for nipkg-builder"""

from .main import cli, main

__all__ = ['cli', 'main']
