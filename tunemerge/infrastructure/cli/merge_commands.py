"""Playlist merge commands for the tunemerge CLI."""

import asyncio
from typing import Annotated

import typer

from tunemerge.application.use_cases import run_playlist_merge
from tunemerge.config import get_logger, settings
from tunemerge.domain.entities import MergeStatus
from tunemerge.domain.errors import FetchFailedError
from tunemerge.infrastructure.cli.ui import (
    command_error_handler,
    console,
    display_merge_result,
    display_playlists,
)
from tunemerge.infrastructure.connectors.spotify import SpotifyConnector

logger = get_logger(__name__)

TokenOption = Annotated[
    str | None,
    typer.Option(
        "--token",
        "-t",
        help="Spotify access token (defaults to SPOTIFY_ACCESS_TOKEN)",
        show_default=False,
    ),
]


def register_merge_commands(app: typer.Typer) -> None:
    """Register playlist merge commands with the Typer app."""
    app.command(
        name="merge",
        help="Add tracks missing from TARGET that exist in SOURCE",
        rich_help_panel="🎵 Playlists",
    )(merge)
    app.command(
        name="playlists",
        help="List your Spotify playlists",
        rich_help_panel="🎵 Playlists",
    )(playlists)


def _resolve_token(token: str | None) -> str:
    resolved = token or settings.credentials.spotify_access_token
    if not resolved:
        console.print(
            "[bold red]No Spotify access token.[/bold red] "
            "Pass --token or set SPOTIFY_ACCESS_TOKEN."
        )
        raise typer.Exit(code=1)
    return resolved


@command_error_handler
def merge(
    source: Annotated[str, typer.Argument(help="Playlist providing the tracks")],
    target: Annotated[str, typer.Argument(help="Playlist receiving missing tracks")],
    token: TokenOption = None,
) -> None:
    """Merge every track of SOURCE that TARGET lacks into TARGET."""
    connector = SpotifyConnector(access_token=_resolve_token(token))

    with console.status("[bold green]Merging playlists..."):
        result = asyncio.run(
            run_playlist_merge(source, target, connector=connector)
        )

    display_merge_result(result)
    if result.status in (MergeStatus.FAILED, MergeStatus.MISSING_SELECTION):
        raise typer.Exit(code=1)


@command_error_handler
def playlists(token: TokenOption = None) -> None:
    """List the signed-in user's playlists."""
    connector = SpotifyConnector(access_token=_resolve_token(token))

    try:
        items = asyncio.run(connector.get_user_playlists())
    except FetchFailedError as e:
        logger.error("Listing playlists failed", error=str(e))
        console.print("[bold red]Uh oh, something went wrong. Please try again.[/bold red]")
        raise typer.Exit(code=1) from e

    display_playlists(items)
