"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable, Sequence
import functools
from typing import ParamSpec, TypeVar

from rich.console import Console
from rich.table import Table
import typer

from tunemerge.config import get_logger
from tunemerge.domain.entities import MergeResult, MergeStatus, PlaylistSummary

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

_STATUS_STYLES = {
    MergeStatus.SUCCEEDED: "bold green",
    MergeStatus.NO_OP: "yellow",
    MergeStatus.FAILED: "bold red",
    MergeStatus.MISSING_SELECTION: "bold red",
}


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    Logs unexpected errors with Loguru, shows a short message with Rich and
    converts them to ``typer.Exit(code=1)``.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def display_merge_result(result: MergeResult) -> None:
    """Print the single user-facing message for a merge result."""
    style = _STATUS_STYLES[result.status]
    console.print(
        f"[{style}]{result.message}[/{style}]", highlight=False, soft_wrap=True
    )
    if result.status is MergeStatus.SUCCEEDED:
        console.print(f"[dim]{result.tracks_added} tracks added[/dim]")


def display_playlists(playlists: Sequence[PlaylistSummary]) -> None:
    """Show the user's playlists in a table."""
    if not playlists:
        console.print("[yellow]No playlists found[/yellow]")
        return

    table = Table(title="Your Playlists")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Tracks", justify="right")

    for playlist in playlists:
        table.add_row(playlist.id, playlist.name, str(playlist.track_total))

    console.print(table)
