"""Playlist-related domain entities."""

from attrs import define


@define(frozen=True, slots=True)
class PlaylistSummary:
    """A playlist as listed for the signed-in user.

    Fetched once per session and used to resolve a playlist's shareable link
    without another API call.
    """

    id: str
    name: str
    external_url: str | None = None
    owner_id: str | None = None
    track_total: int = 0
