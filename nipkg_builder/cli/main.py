# nipkg_builder/cli/main.py
"""Main CLI entry point for nipkg-builder"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT, ENV_LOG_LEVEL

from .commands import build, init

console = Console(stderr=True)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = getattr(logging, os.environ.get(ENV_LOG_LEVEL, "WARNING").upper(), logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiofiles").setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self, project_root: Optional[Path] = None):
        self.project_root = project_root
        self.debug: bool = False
        self.quiet: bool = False


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('--project-root', type=click.Path(file_okay=False, path_type=Path),
              help='Project directory (default: current directory)')
@click.pass_context
def cli(ctx, debug, quiet, project_root):
    """nipkg-builder - Package web applications for NI Package Manager

    Copies an Angular or Node.js build output into a staging tree and
    wraps it, together with a generated control file, into a .nipkg.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        logging.disable(logging.NOTSET)
        setup_logging(debug=debug)

    ctx.obj = Context(project_root)
    ctx.obj.debug = debug
    ctx.obj.quiet = quiet


# Register commands
cli.add_command(build.build)
cli.add_command(init.init)


def main():
    """Main entry point for the CLI application"""
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
