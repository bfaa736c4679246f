# nipkg_builder/core/archive/tar_builder.py
"""Reproducible gzip tar members"""

import gzip
import io
import stat
import tarfile
from pathlib import Path
from typing import BinaryIO, List

from ...constants import (
    TAR_OWNER_NAME,
    TAR_DIR_MODE,
    TAR_FILE_MODE,
    TAR_EXEC_MODE,
)
from ...utils.file_utils import walk_tree


def _normalize(info: tarfile.TarInfo, mtime: int) -> tarfile.TarInfo:
    """Strip host-specific ownership, modes and timestamps"""
    info.uid = 0
    info.gid = 0
    info.uname = TAR_OWNER_NAME
    info.gname = TAR_OWNER_NAME
    info.mtime = mtime

    if info.isdir():
        info.mode = TAR_DIR_MODE
    elif info.mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
        info.mode = TAR_EXEC_MODE
    else:
        info.mode = TAR_FILE_MODE

    return info


def collect_entries(directory: Path) -> List[Path]:
    """
    List a tree in archive order

    Directories come before their contents, siblings are sorted by name.
    Symlinks are followed, each real directory at most once.
    """
    entries = []
    for root_path, dirs, files in walk_tree(directory):
        for name in dirs:
            entries.append(root_path / name)
        for name in files:
            entries.append(root_path / name)

    return sorted(entries, key=lambda p: p.relative_to(directory).parts)


def write_tar_gz(directory: Path, mtime: int, fileobj: BinaryIO) -> None:
    """
    Write a gzip-compressed tar of a directory tree to a stream

    Entries are named './<relative path>' below a leading './' entry. Equal
    input trees and mtime produce byte-identical output.

    Args:
        directory: Tree to archive
        mtime: Timestamp for every entry and the gzip header
        fileobj: Writable binary stream
    """
    directory = Path(directory)
    mtime = int(mtime)

    with gzip.GzipFile(fileobj=fileobj, mode='wb', mtime=mtime, filename='') as gz:
        with tarfile.open(fileobj=gz, mode='w', format=tarfile.GNU_FORMAT) as tar:
            root_info = tar.gettarinfo(str(directory), arcname='.')
            tar.addfile(_normalize(root_info, mtime))

            for path in collect_entries(directory):
                arcname = './' + path.relative_to(directory).as_posix()
                info = tar.gettarinfo(str(path.resolve()), arcname=arcname)
                info = _normalize(info, mtime)

                if info.isreg():
                    with open(path, 'rb') as f:
                        tar.addfile(info, f)
                else:
                    tar.addfile(info)


def build_tar_gz(directory: Path, mtime: int) -> bytes:
    """Build the archive written by write_tar_gz in memory"""
    buffer = io.BytesIO()
    write_tar_gz(directory, mtime, buffer)
    return buffer.getvalue()
