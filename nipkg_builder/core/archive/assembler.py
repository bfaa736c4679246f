# nipkg_builder/core/archive/assembler.py
"""Package assembly strategies"""

import asyncio
import logging
import os
import tempfile
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, List, Union

from .ar_writer import ArWriter, read_ar_members, ArMember
from .delegates import PackagingDelegate, DpkgDebDelegate
from .tar_builder import build_tar_gz, write_tar_gz
from ..command_runner import CommandRunner
from ..control_file import control_fields
from ..staging_builder import StagingLayout
from ...api.exceptions import ArchiveError, PackagingError, ConfigError
from ...constants import (
    DEB_EXTENSION,
    DEBIAN_BINARY_MEMBER,
    DEBIAN_BINARY_CONTENT,
    CONTROL_MEMBER,
    DATA_MEMBER,
    PACKAGE_MEMBER_ORDER,
    ENV_SOURCE_DATE_EPOCH,
    PackagerKind,
)
from ...models.metadata import PackageMetadata
from ...utils.file_utils import safe_remove


def resolve_mtime() -> int:
    """SOURCE_DATE_EPOCH when set and numeric, otherwise the current time"""
    value = os.environ.get(ENV_SOURCE_DATE_EPOCH, "").strip()
    if value:
        try:
            return int(value)
        except ValueError:
            logging.getLogger(__name__).warning(
                f"Ignoring non-numeric {ENV_SOURCE_DATE_EPOCH}={value!r}"
            )
    return int(time.time())


class ArchiveAssembler(ABC):
    """Turns a staging tree into a .deb file"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def assemble(self,
                       staging: StagingLayout,
                       metadata: PackageMetadata,
                       target_dir: Path,
                       file_stem: str) -> Path:
        """
        Assemble the package

        Args:
            staging: Prepared staging tree
            metadata: Resolved metadata
            target_dir: Output directory
            file_stem: File name without extension

        Returns:
            Path to {target_dir}/{file_stem}.deb
        """
        pass

    @staticmethod
    def _check_staging(staging: StagingLayout) -> None:
        if not staging.control_file.is_file():
            raise PackagingError(f"Staging control file missing: {staging.control_file}")
        if not staging.data_dir.is_dir():
            raise PackagingError(f"Staging data directory missing: {staging.data_dir}")


class DirectAssembler(ArchiveAssembler):
    """Writes the ar container and both tar members in-process"""

    def __init__(self, mtime: Optional[int] = None):
        super().__init__()
        self.mtime = mtime

    async def assemble(self,
                       staging: StagingLayout,
                       metadata: PackageMetadata,
                       target_dir: Path,
                       file_stem: str) -> Path:
        self._check_staging(staging)

        mtime = self.mtime if self.mtime is not None else resolve_mtime()
        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / f"{file_stem}{DEB_EXTENSION}"

        loop = asyncio.get_running_loop()
        size = await loop.run_in_executor(None, self._write_package, staging, target, mtime)

        self.logger.info(f"Wrote {target.name} ({size} bytes)")
        return target

    def _write_package(self, staging: StagingLayout, target: Path, mtime: int) -> int:
        """Stream the three members into target, returning the file size"""
        self.logger.debug(f"Archiving {staging.control_dir}")
        control_tar = build_tar_gz(staging.control_dir, mtime)

        # Payload tar is spooled to a temporary file
        with tempfile.TemporaryFile() as data_tar:
            self.logger.debug(f"Archiving {staging.data_dir}")
            write_tar_gz(staging.data_dir, mtime, data_tar)
            data_size = data_tar.tell()
            data_tar.seek(0)

            try:
                with open(target, 'wb') as f:
                    writer = ArWriter(f, mtime=mtime)
                    writer.add(DEBIAN_BINARY_MEMBER, DEBIAN_BINARY_CONTENT)
                    writer.add(CONTROL_MEMBER, control_tar)
                    writer.add_stream(DATA_MEMBER, data_tar, data_size)
                    return f.tell()
            except Exception:
                safe_remove(target)
                raise


class DelegatedAssembler(ArchiveAssembler):
    """Hands the staged tree to an external PackagingDelegate"""

    def __init__(self, delegate: PackagingDelegate):
        super().__init__()
        self.delegate = delegate

    async def assemble(self,
                       staging: StagingLayout,
                       metadata: PackageMetadata,
                       target_dir: Path,
                       file_stem: str) -> Path:
        self._check_staging(staging)

        try:
            return self.delegate.package(
                control_fields(metadata),
                staging.data_dir,
                Path(target_dir),
                f"{file_stem}{DEB_EXTENSION}"
            )
        except (PackagingError, OSError):
            raise
        except Exception as e:
            raise PackagingError(f"Packaging delegate failed: {e}") from e


def get_assembler(packager: Optional[str] = None,
                  runner: Optional[CommandRunner] = None,
                  delegate: Optional[PackagingDelegate] = None,
                  verbose: bool = False) -> ArchiveAssembler:
    """
    Create the assembler for a packager name

    Args:
        packager: 'direct' (default) or 'dpkg-deb'
        runner: Command runner handed to the dpkg-deb delegate
        delegate: Explicit delegate, implies delegated assembly
        verbose: Stream delegate output

    Returns:
        ArchiveAssembler
    """
    if delegate is not None:
        return DelegatedAssembler(delegate)

    try:
        kind = PackagerKind(packager or PackagerKind.DIRECT.value)
    except ValueError:
        raise ConfigError(
            f"Unknown packager: {packager}. "
            f"Expected one of: {', '.join(k.value for k in PackagerKind)}"
        )

    if kind == PackagerKind.DPKG_DEB:
        return DelegatedAssembler(DpkgDebDelegate(runner, verbose=verbose))
    return DirectAssembler()


def verify_package(path: Union[str, Path]) -> List[ArMember]:
    """
    Check a package container

    Verifies the ar magic, that declared member sizes match the data and
    that the members appear in Debian order.

    Args:
        path: Package file

    Returns:
        Parsed members

    Raises:
        ArchiveError: If the container is malformed
    """
    with open(path, 'rb') as f:
        data = f.read()

    members = read_ar_members(data)
    names = tuple(m.name for m in members)
    if names != PACKAGE_MEMBER_ORDER:
        raise ArchiveError(
            f"Unexpected package members {list(names)}, "
            f"expected {list(PACKAGE_MEMBER_ORDER)}"
        )

    return members
