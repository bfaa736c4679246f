# nipkg_builder/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING, EMOJI_INFO
from ...models import BuildResult
from ...utils.file_utils import format_size

console = Console()
error_console = Console(stderr=True)


def format_build_result(result: BuildResult, show_control: bool = False) -> None:
    """Format and display build result"""
    if result.success:
        lines = [
            f"[green]{EMOJI_SUCCESS}[/green] Package created successfully!",
            "",
            f"[bold]Package:[/bold] {result.metadata.name}",
            f"[bold]Version:[/bold] {result.metadata.version}",
            f"[bold]Architecture:[/bold] {result.metadata.architecture}",
            f"[bold]File:[/bold] {result.package_path}",
        ]

        if result.package_size is not None:
            lines.append(f"[bold]Size:[/bold] {format_size(result.package_size)}")

        lines.append(f"[bold]Duration:[/bold] {result.duration:.2f}s")

        console.print(Panel(
            "\n".join(lines),
            title="Build Result",
            border_style="green"
        ))

        if show_control and result.control_text:
            console.print(Panel(
                result.control_text.rstrip("\n"),
                title="control",
                border_style="dim"
            ))

    else:
        error_console.print(Panel(
            f"[red]{EMOJI_ERROR} Build failed:[/red] {result.error}",
            title="Build Error" + (f" ({result.error_code})" if result.error_code else ""),
            border_style="red"
        ))


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message to stderr"""
    if error:
        error_console.print(f"[red]{EMOJI_ERROR} Error:[/red] {message}: {str(error)}")
    else:
        error_console.print(f"[red]{EMOJI_ERROR} Error:[/red] {message}")


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]{EMOJI_WARNING} Warning:[/yellow] {message}")


def print_info(message: str) -> None:
    """Print info message"""
    console.print(f"[blue]{EMOJI_INFO}[/blue] {message}")


def print_notice(message: str) -> None:
    """Print a non-fatal notice about a fallback or side effect"""
    console.print(f"[dim]{message}[/dim]")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]{EMOJI_SUCCESS}[/green] {message}")
