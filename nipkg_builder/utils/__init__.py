"""Utility functions for nipkg-builder"""

from .file_utils import (
    format_size,
    read_json_object,
    safe_remove,
    ensure_parent_dir,
    remove_files_by_extension,
    walk_tree,
    copy_file_async,
    copy_tree_async,
)

__all__ = [
    "format_size",
    "read_json_object",
    "safe_remove",
    "ensure_parent_dir",
    "remove_files_by_extension",
    "walk_tree",
    "copy_file_async",
    "copy_tree_async",
]
