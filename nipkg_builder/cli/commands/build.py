"""Build command for producing .nipkg packages"""

import logging

import click

from ..utils.output import (
    format_build_result,
    print_error,
    print_info,
    print_notice,
    print_warning,
)
from ...api.builder import NipkgBuilder
from ...constants import (
    EMOJI_ROCKET,
    EMOJI_BUILD,
    MSG_PACKAGE_REMOVED,
    ProjectKind,
    PackagerKind,
)


@click.command()
@click.option('--configuration', '-c', help='Angular build configuration (e.g. production)')
@click.option('--build', '-b', 'run_build', is_flag=True, help='Run the build command before packaging')
@click.option('--verbose', '-v', is_flag=True, help='Show build command output, staged files and control file')
@click.option('--skip-cleanup', is_flag=True,
              help='Keep previous packages and the staging directory')
@click.option('--build-suffix', help='Extra file name segment placed before the architecture')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Configuration file (default: nipkg.config.json)')
@click.option('--build-dir', help='Build output directory')
@click.option('--name', help='Package name')
@click.option('--version', 'version', help='Package version')
@click.option('--description', help='Package description')
@click.option('--maintainer', help='Package maintainer ("Name <email>")')
@click.option('--architecture', help='Package architecture')
@click.option('--output-dir', help='Output directory (default: dist)')
@click.option('--project-type', type=click.Choice([k.value for k in ProjectKind]),
              help='Project type (default: auto)')
@click.option('--packager', type=click.Choice([k.value for k in PackagerKind]),
              help='Archive writer (default: direct)')
@click.pass_context
def build(ctx, configuration, run_build, verbose, skip_cleanup, build_suffix, config_path,
          build_dir, name, version, description, maintainer, architecture, output_dir,
          project_type, packager):
    """Build a .nipkg package from the application's build output

    Examples:
        nipkg-builder build
        nipkg-builder build --build -c production
        nipkg-builder build --version 2.0.0 --build-suffix nightly
    """
    obj = ctx.obj
    quiet = obj.quiet if obj else False
    builder = NipkgBuilder(obj.project_root if obj else None)

    if verbose and not quiet and logging.getLogger().level > logging.INFO:
        logging.getLogger().setLevel(logging.INFO)

    if not quiet:
        print_info(f"{EMOJI_ROCKET} Starting nipkg build process...")
        if run_build:
            print_info(f"{EMOJI_BUILD} Building application...")

    result = builder.build(
        config_path=config_path,
        name=name,
        version=version,
        description=description,
        maintainer=maintainer,
        architecture=architecture,
        build_dir=build_dir,
        output_dir=output_dir,
        build_suffix=build_suffix,
        configuration=configuration,
        run_build=run_build,
        verbose=verbose,
        skip_cleanup=skip_cleanup,
        project_type=project_type,
        packager=packager,
    )

    if not quiet:
        for notice in result.notices:
            print_notice(notice)
        for removed in result.removed_packages:
            print_notice(MSG_PACKAGE_REMOVED.format(name=removed))
        for warning in result.warnings:
            print_warning(warning)

    if result.success:
        if not quiet:
            format_build_result(result, show_control=verbose)
    else:
        if quiet:
            print_error(result.error)
        else:
            format_build_result(result)

    ctx.exit(result.exit_code)
