# nipkg_builder/core/staging_builder.py
"""Staging area construction"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable

import aiofiles

from ..api.exceptions import ConfigError
from ..constants import (
    STAGING_DIR_NAME,
    CONTROL_SUBDIR,
    DATA_SUBDIR,
    PAYLOAD_DIR_NAME,
    CONTROL_FILE_NAME,
)
from ..utils.file_utils import safe_remove, copy_tree_async


@dataclass
class StagingLayout:
    """Locations inside a staging tree"""
    root: Path

    @property
    def control_dir(self) -> Path:
        return self.root / CONTROL_SUBDIR

    @property
    def control_file(self) -> Path:
        return self.control_dir / CONTROL_FILE_NAME

    @property
    def data_dir(self) -> Path:
        return self.root / DATA_SUBDIR

    @property
    def payload_dir(self) -> Path:
        return self.data_dir / PAYLOAD_DIR_NAME

    def is_complete(self) -> bool:
        """Check that both archive subtrees are present"""
        return self.control_file.is_file() and self.data_dir.is_dir()


class StagingBuilder:
    """Creates the control/data tree that gets archived"""

    def __init__(self,
                 skip_cleanup: bool = False,
                 progress_callback: Optional[Callable[[Path, int], None]] = None):
        """
        Initialize staging builder

        Args:
            skip_cleanup: Keep an existing staging tree instead of recreating it
            progress_callback: Called with (relative_path, size) per copied file
        """
        self.skip_cleanup = skip_cleanup
        self.progress_callback = progress_callback
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def layout_for(output_root: Path) -> StagingLayout:
        return StagingLayout(Path(output_root) / STAGING_DIR_NAME)

    def _check_build_output(self, build_output_dir: Path) -> None:
        if not build_output_dir.exists():
            raise ConfigError(
                f"Build directory not found: {build_output_dir}\n"
                "Run your build command first or use --build flag.\n"
                "If the location is wrong, set it in nipkg.config.json, for example:\n"
                '  "buildDir": "dist"'
            )
        if not build_output_dir.is_dir():
            raise ConfigError(
                f"Build directory is not a directory: {build_output_dir}\n"
                "buildDir must point to a directory, for example:\n"
                '  "buildDir": "dist"'
            )

    async def prepare(self,
                      output_root: Path,
                      build_output_dir: Path,
                      control_text: Optional[str] = None) -> StagingLayout:
        """
        Build a fresh staging tree

        Args:
            output_root: Directory that holds the staging tree
            build_output_dir: Application build output to copy
            control_text: Control file contents to write

        Returns:
            StagingLayout of the staged tree

        Raises:
            ConfigError: If build output directory is missing
        """
        build_output_dir = Path(build_output_dir)
        self._check_build_output(build_output_dir)

        output_root = Path(output_root)
        output_root.mkdir(parents=True, exist_ok=True)

        layout = self.layout_for(output_root)

        if not self.skip_cleanup and safe_remove(layout.root):
            self.logger.debug(f"Removed previous staging tree {layout.root}")

        layout.control_dir.mkdir(parents=True, exist_ok=True)
        layout.payload_dir.mkdir(parents=True, exist_ok=True)

        if control_text is not None:
            await self.write_control_file(layout, control_text)

        self.logger.info(f"Copying build files from {build_output_dir}")
        file_count = await copy_tree_async(
            build_output_dir,
            layout.payload_dir,
            callback=self.progress_callback,
            # output may live inside the build directory (buildDir "dist")
            exclude=output_root
        )
        self.logger.info(f"Copied {file_count} build files")

        return layout

    async def write_control_file(self, layout: StagingLayout, control_text: str) -> Path:
        """Write the control file into the staging tree"""
        layout.control_dir.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(layout.control_file, 'w', encoding='utf-8', newline='\n') as f:
            await f.write(control_text)
        return layout.control_file

    def cleanup(self, layout: StagingLayout) -> None:
        """Remove the staging tree unless cleanup is suppressed"""
        if self.skip_cleanup:
            return
        safe_remove(layout.root)
