# nipkg_builder/core/archive/delegates.py
"""External packaging tools"""

import logging
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict

from ..command_runner import CommandRunner, SubprocessRunner
from ...api.exceptions import PackagingError


class PackagingDelegate(ABC):
    """Builds a Debian-style package with an outside tool"""

    @abstractmethod
    def package(self,
                control_fields: Dict[str, str],
                source_dir: Path,
                target_dir: Path,
                target_file_name: str) -> Path:
        """
        Package source_dir as the data payload

        Args:
            control_fields: Ordered control fields with values
            source_dir: Directory whose contents become the installed files
            target_dir: Directory to write the package into
            target_file_name: Package file name

        Returns:
            Path of the produced package

        Raises:
            PackagingError: If the tool fails or produces nothing
        """
        pass


class DpkgDebDelegate(PackagingDelegate):
    """Delegate that shells out to dpkg-deb"""

    executable = "dpkg-deb"

    def __init__(self, runner: CommandRunner = None, verbose: bool = False):
        self.runner = runner or SubprocessRunner()
        self.verbose = verbose
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def render_control(control_fields: Dict[str, str]) -> str:
        lines = [f"{key}: {value}".rstrip() for key, value in control_fields.items()]
        return "\n".join(lines) + "\n"

    def package(self,
                control_fields: Dict[str, str],
                source_dir: Path,
                target_dir: Path,
                target_file_name: str) -> Path:
        source_dir = Path(source_dir)
        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / target_file_name

        with tempfile.TemporaryDirectory(prefix="nipkg-") as tmp:
            root = Path(tmp) / "root"
            shutil.copytree(source_dir, root)

            debian_dir = root / "DEBIAN"
            debian_dir.mkdir()
            (debian_dir / "control").write_text(
                self.render_control(control_fields), encoding='utf-8'
            )

            command = [
                self.executable,
                "--root-owner-group",
                "-Zgzip",
                "--build",
                str(root),
                str(target),
            ]
            self.logger.info(f"Packaging with {self.executable}")
            result = self.runner.run(command, stream_output=self.verbose)

        if not result.succeeded:
            raise PackagingError(f"{self.executable} failed: {result.error_message}")

        if not target.is_file():
            raise PackagingError(
                f"{self.executable} reported success but produced no package at {target}"
            )

        return target
