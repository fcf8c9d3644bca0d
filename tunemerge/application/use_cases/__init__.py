"""Application use cases - orchestrate business operations."""

from .merge_playlists import (
    MergePlaylistsCommand,
    MergePlaylistsUseCase,
    run_playlist_merge,
)

__all__ = [
    "MergePlaylistsCommand",
    "MergePlaylistsUseCase",
    "run_playlist_merge",
]
