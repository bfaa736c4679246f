"""Initialize command for creating nipkg.config.json"""

import click

from ..utils.output import console, print_error, print_success, print_notice
from ...api.builder import NipkgBuilder
from ...api.exceptions import NipkgBuilderError
from ...constants import DEFAULT_CONFIG_FILE, EMOJI_WARNING


@click.command()
@click.pass_context
def init(ctx):
    """Create a default nipkg.config.json in the project

    Defaults are taken from package.json and, for Angular workspaces,
    angular.json. An existing configuration is never overwritten.

    Examples:
        nipkg-builder init
    """
    obj = ctx.obj
    builder = NipkgBuilder(obj.project_root if obj else None)

    try:
        config_path = builder.init()
    except NipkgBuilderError as e:
        print_error("Failed to create configuration", e)
        ctx.exit(1)
    except OSError as e:
        print_error(f"Failed to write {DEFAULT_CONFIG_FILE}", e)
        ctx.exit(1)

    if config_path is None:
        console.print(f"{EMOJI_WARNING} {DEFAULT_CONFIG_FILE} already exists")
        ctx.exit(0)

    print_success(f"Created {config_path.name}")
    print_notice("Review the generated values before building")
