"""Domain interfaces for remote playlist access.

These protocols define the contracts the application layer depends on without
importing infrastructure implementations, following the dependency inversion
principle.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tunemerge.domain.entities import PlaylistSummary, TrackPage, WriteOutcome


@runtime_checkable
class PlaylistConnectorProtocol(Protocol):
    """Interface for a music service connector that can read and append playlists."""

    async def get_tracks_page(self, playlist_id: str, offset: int = 0) -> "TrackPage":
        """Fetch one page (at most 100 items) of a playlist's tracks.

        Args:
            playlist_id: Service-specific playlist ID
            offset: Zero-based index of the first item to return

        Returns:
            TrackPage with the page items and the playlist's total size

        Raises:
            FetchFailedError: If the request failed for any remote reason
        """
        ...

    async def add_tracks(
        self, playlist_id: str, uris: "Sequence[str]", chunk_index: int = 0
    ) -> "WriteOutcome":
        """Append at most 100 uris to a playlist in a single request.

        Returns:
            WriteOutcome; remote failures are reported as an unsuccessful
            outcome rather than raised
        """
        ...

    async def get_user_playlists(self) -> list["PlaylistSummary"]:
        """List the signed-in user's playlists."""
        ...
