"""Debian-style package container assembly"""

from .ar_writer import ArMember, ArWriter, build_ar_bytes, read_ar_members
from .tar_builder import build_tar_gz, write_tar_gz
from .delegates import PackagingDelegate, DpkgDebDelegate
from .assembler import (
    ArchiveAssembler,
    DirectAssembler,
    DelegatedAssembler,
    get_assembler,
    verify_package,
    resolve_mtime,
)

__all__ = [
    'ArMember',
    'ArWriter',
    'build_ar_bytes',
    'read_ar_members',
    'build_tar_gz',
    'write_tar_gz',
    'PackagingDelegate',
    'DpkgDebDelegate',
    'ArchiveAssembler',
    'DirectAssembler',
    'DelegatedAssembler',
    'get_assembler',
    'verify_package',
    'resolve_mtime',
]
