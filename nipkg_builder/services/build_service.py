# nipkg_builder/services/build_service.py
"""Build pipeline implementation"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from .config_service import ConfigService
from ..api.exceptions import BuildCommandError, NipkgBuilderError
from ..core import (
    PathResolver,
    CommandRunner,
    SubprocessRunner,
    MetadataResolver,
    StagingBuilder,
    generate_control_file,
    get_project_type,
)
from ..core.archive import PackagingDelegate, get_assembler, verify_package
from ..constants import (
    CLEANUP_EXTENSIONS,
    PACKAGE_EXTENSION,
    PACKAGE_FILE_PATTERN,
    PACKAGE_FILE_PATTERN_WITH_SUFFIX,
)
from ..models import BuildOptions, BuildResult, NipkgConfig, PackageMetadata
from ..utils.file_utils import format_size, remove_files_by_extension


def package_file_stem(metadata: PackageMetadata, suffix: Optional[str] = None) -> str:
    """
    Build the package file name without extension

    Args:
        metadata: Resolved metadata
        suffix: Optional build suffix placed before the architecture

    Returns:
        '{name}_{version}[_{suffix}]_{architecture}'
    """
    if suffix:
        return PACKAGE_FILE_PATTERN_WITH_SUFFIX.format(
            name=metadata.name,
            version=metadata.version,
            suffix=suffix,
            architecture=metadata.architecture,
        )
    return PACKAGE_FILE_PATTERN.format(
        name=metadata.name,
        version=metadata.version,
        architecture=metadata.architecture,
    )


class BuildService:
    """Runs the full build-to-package pipeline"""

    def __init__(self,
                 path_resolver: PathResolver,
                 runner: Optional[CommandRunner] = None,
                 delegate: Optional[PackagingDelegate] = None):
        """
        Initialize build service

        Args:
            path_resolver: Path resolver instance
            runner: Runs the build command and the dpkg-deb delegate
            delegate: Packaging delegate, forces delegated assembly when set
        """
        self.path_resolver = path_resolver
        self.runner = runner or SubprocessRunner()
        self.delegate = delegate
        self.config_service = ConfigService(path_resolver)
        self.logger = logging.getLogger(self.__class__.__name__)

    async def build(self,
                    options: Optional[BuildOptions] = None,
                    config: Optional[NipkgConfig] = None,
                    config_path: Optional[Union[str, Path]] = None) -> BuildResult:
        """
        Execute the build pipeline

        Args:
            options: Runtime options and overrides
            config: Preloaded configuration (loaded from disk when None)
            config_path: Configuration file to load

        Returns:
            BuildResult, failed results carry error and error_code
        """
        start_time = time.time()
        options = options or BuildOptions()
        result = BuildResult(success=False)

        try:
            # 1. Configuration
            if config is None:
                config, notices = self.config_service.load(config_path)
                result.notices.extend(notices)

            # 2. Project type
            project_type = get_project_type(
                self.path_resolver,
                options.project_type or config.project_type
            )
            project_type.validate()
            self.logger.info(f"Project type: {project_type.kind.value}")

            # 3. Application build
            if options.run_build:
                self._run_build_command(project_type.build_command(config, options.configuration),
                                        options.verbose)

            # 4. Metadata
            resolver = MetadataResolver(
                config,
                options,
                manifest_path=self.path_resolver.get_package_json_path(),
                project_root=self.path_resolver.project_root
            )
            try:
                metadata = resolver.resolve_all()
            finally:
                result.notices.extend(resolver.notices)
                result.warnings.extend(resolver.warnings)
            result.metadata = metadata

            control_text = generate_control_file(metadata)
            result.control_text = control_text

            nipkg_dir = self.path_resolver.get_nipkg_dir(options.output_dir or config.output_dir)
            build_output = project_type.locate_build_output(config, options.build_dir)

            # 5. Previous packages
            if not options.skip_cleanup:
                removed = remove_files_by_extension(nipkg_dir, CLEANUP_EXTENSIONS)
                for name in removed:
                    self.logger.info(f"Removed existing package: {name}")
                result.removed_packages.extend(removed)

            # 6. Staging
            staging_builder = StagingBuilder(
                skip_cleanup=options.skip_cleanup,
                progress_callback=self._log_staged_file if options.verbose else None
            )
            layout = await staging_builder.prepare(nipkg_dir, build_output, control_text)

            # 7. Assembly
            assembler = get_assembler(
                options.packager or config.packager,
                runner=self.runner,
                delegate=self.delegate,
                verbose=options.verbose
            )
            file_stem = package_file_stem(metadata, options.build_suffix or config.build_suffix)
            deb_path = await assembler.assemble(layout, metadata, nipkg_dir, file_stem)

            staging_builder.cleanup(layout)

            # 8. Rename and verify
            package_path = deb_path.with_suffix(PACKAGE_EXTENSION)
            deb_path.replace(package_path)
            verify_package(package_path)

            result.success = True
            result.package_path = package_path
            self.logger.info(f"Created {package_path}")

        except NipkgBuilderError as e:
            result.error = str(e)
            result.error_code = e.error_code
        except Exception as e:
            self.logger.debug("Build failed", exc_info=True)
            result.error = str(e)

        result.duration = time.time() - start_time
        return result

    def _log_staged_file(self, relative_path: Path, size: int) -> None:
        self.logger.info(f"Staged {relative_path.as_posix()} ({format_size(size)})")

    def _run_build_command(self, command: str, verbose: bool = False) -> None:
        """
        Run the application build

        Raises:
            BuildCommandError: If the command exits non-zero
        """
        self.logger.info(f"Running build command: {command}")
        command_result = self.runner.run(
            command,
            cwd=self.path_resolver.project_root,
            stream_output=verbose
        )

        if not command_result.succeeded:
            raise BuildCommandError(command_result.error_message,
                                    returncode=command_result.returncode)
