"""File operation utilities"""

import json
import os
import shutil
from pathlib import Path
from typing import Optional, Dict, List, Callable, Any, Iterable, Iterator, Tuple

import aiofiles

from ..constants import DEFAULT_CHUNK_SIZE


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"


def read_json_object(file_path: Path) -> Optional[Dict[str, Any]]:
    """
    Read a JSON object from an optional input file

    Missing, unreadable or malformed files, and files whose top-level
    value is not an object, all yield None.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed dictionary or None
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError):
        return None

    return data if isinstance(data, dict) else None


def safe_remove(path: Path) -> bool:
    """
    Remove file or directory if it exists

    Args:
        path: Path to remove

    Returns:
        True if something was removed
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def ensure_parent_dir(file_path: Path) -> Path:
    """
    Ensure parent directory exists

    Args:
        file_path: File path

    Returns:
        Parent directory path
    """
    parent = file_path.parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def remove_files_by_extension(directory: Path,
                              extensions: Iterable[str]) -> List[str]:
    """
    Remove top-level files in directory that end with one of the extensions

    Subdirectories and files with other extensions are left alone.

    Args:
        directory: Directory to clean
        extensions: File extensions including the dot

    Returns:
        Sorted names of removed files
    """
    if not directory.is_dir():
        return []

    extensions = tuple(extensions)
    removed = []

    for entry in sorted(directory.iterdir()):
        if entry.is_file() and entry.name.endswith(extensions):
            entry.unlink()
            removed.append(entry.name)

    return removed


async def copy_file_async(src: Path,
                          dst: Path,
                          chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Copy a single file, overwriting the destination

    Args:
        src: Source file
        dst: Destination file
        chunk_size: Copy chunk size

    Returns:
        Number of bytes copied
    """
    ensure_parent_dir(dst)
    bytes_copied = 0

    async with aiofiles.open(src, 'rb') as fsrc:
        async with aiofiles.open(dst, 'wb') as fdst:
            while True:
                chunk = await fsrc.read(chunk_size)
                if not chunk:
                    break

                await fdst.write(chunk)
                bytes_copied += len(chunk)

    # Keep the executable bit of scripts
    shutil.copymode(src, dst)

    return bytes_copied


def walk_tree(directory: Path,
              exclude: Optional[Path] = None) -> Iterator[Tuple[Path, List[str], List[str]]]:
    """
    Walk a tree top-down following symlinks, entering each directory once

    A directory whose real path was already visited (a symlink back to an
    ancestor, or a second link to the same directory) is pruned, so
    symlink cycles terminate.

    Args:
        directory: Tree root
        exclude: Directory to prune from the walk

    Yields:
        (root, sorted subdirectory names, sorted file names)
    """
    visited = {os.path.realpath(directory)}
    excluded = os.path.realpath(exclude) if exclude else None

    for root, dirs, files in os.walk(directory, followlinks=True):
        kept = []
        for name in sorted(dirs):
            real = os.path.realpath(os.path.join(root, name))
            if real == excluded or real in visited:
                continue
            visited.add(real)
            kept.append(name)
        dirs[:] = kept

        yield Path(root), dirs, sorted(files)


async def copy_tree_async(src_dir: Path,
                          dst_dir: Path,
                          callback: Optional[Callable[[Path, int], None]] = None,
                          exclude: Optional[Path] = None) -> int:
    """
    Recursively copy a directory tree, one file at a time

    Existing files with the same relative path are overwritten. Symlinks
    are followed, as the build output is copied by content.

    Args:
        src_dir: Source directory
        dst_dir: Destination directory
        callback: Called with (relative_path, size) after each file
        exclude: Directory inside src_dir to skip entirely

    Returns:
        Number of files copied
    """
    dst_dir.mkdir(parents=True, exist_ok=True)
    file_count = 0

    for root_path, _, files in walk_tree(src_dir, exclude=exclude):
        rel_root = root_path.relative_to(src_dir)
        target_root = dst_dir / rel_root
        target_root.mkdir(parents=True, exist_ok=True)

        for name in files:
            size = await copy_file_async(root_path / name, target_root / name)
            file_count += 1

            if callback:
                callback(rel_root / name, size)

    return file_count
