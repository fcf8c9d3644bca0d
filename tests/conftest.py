import pytest

from tests.fixtures.connectors import FakePlaylistConnector, make_uris
from tunemerge.domain.entities import PlaylistSummary, Track, TrackCollection


@pytest.fixture
def fake_connector():
    """Empty in-memory connector; tests add playlists as needed."""
    return FakePlaylistConnector()


@pytest.fixture
def user_playlists():
    """Listing of the signed-in user's playlists."""
    return [
        PlaylistSummary(
            id="source",
            name="Road Trip",
            external_url="https://open.spotify.com/playlist/source",
            track_total=3,
        ),
        PlaylistSummary(
            id="target",
            name="Favourites",
            external_url="https://open.spotify.com/playlist/target",
            track_total=1,
        ),
    ]


@pytest.fixture
def collection_factory():
    """Build a TrackCollection from uris, ``None`` marking unavailable tracks."""

    def _build(playlist_id: str, uris: list[str | None]) -> TrackCollection:
        return TrackCollection(
            playlist_id=playlist_id,
            total=len(uris),
            tracks=[None if uri is None else Track(uri=uri) for uri in uris],
        )

    return _build


@pytest.fixture
def uris():
    """Factory for distinct track uris."""
    return make_uris
