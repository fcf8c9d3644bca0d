"""Tests for the Spotify connector with spotipy mocked out."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests
import spotipy

from tunemerge.domain.errors import FetchFailedError
from tunemerge.infrastructure.connectors.spotify import (
    SpotifyConnector,
    convert_spotify_playlist_summary,
    convert_spotify_track_item,
    convert_spotify_tracks_page,
)


def _item(uri):
    return {"track": {"uri": uri, "name": uri.rsplit(":", 1)[-1]}}


@pytest.fixture
def spotify_client():
    with patch("tunemerge.infrastructure.connectors.spotify.spotipy.Spotify") as mock_cls:
        client = MagicMock()
        mock_cls.return_value = client
        yield client


@pytest.fixture
def connector(spotify_client):
    return SpotifyConnector(access_token="test-token")


class TestConversions:
    def test_track_item(self):
        track = convert_spotify_track_item(_item("spotify:track:1"))

        assert track is not None
        assert track.uri == "spotify:track:1"

    @pytest.mark.parametrize(
        "item",
        [None, {"track": None}, {"track": {"name": "no uri"}}, {"track": {"uri": ""}}],
    )
    def test_unavailable_items_become_none(self, item):
        assert convert_spotify_track_item(item) is None

    def test_page_keeps_null_placeholders(self):
        response = {"items": [_item("spotify:track:1"), {"track": None}], "total": 120}

        page = convert_spotify_tracks_page(response, offset=100)

        assert page.offset == 100
        assert page.total == 120
        assert page.skipped_count == 1

    def test_page_without_total(self):
        page = convert_spotify_tracks_page({"items": [_item("spotify:track:1")]}, 0)

        assert page.total == 1

    def test_playlist_summary(self):
        summary = convert_spotify_playlist_summary({
            "id": "37i9dQZF1DX",
            "name": "Mix",
            "external_urls": {"spotify": "https://open.spotify.com/playlist/37i9dQZF1DX"},
            "owner": {"id": "user1"},
            "tracks": {"total": 42},
        })

        assert summary.external_url == "https://open.spotify.com/playlist/37i9dQZF1DX"
        assert summary.owner_id == "user1"
        assert summary.track_total == 42


class TestSpotifyConnector:
    """Test request shaping and error mapping."""

    def test_client_uses_token_without_retries(self):
        with patch(
            "tunemerge.infrastructure.connectors.spotify.spotipy.Spotify"
        ) as mock_cls:
            SpotifyConnector(access_token="abc")

        kwargs = mock_cls.call_args.kwargs
        assert kwargs["auth"] == "abc"
        assert kwargs["retries"] == 0
        assert kwargs["status_retries"] == 0

    async def test_get_tracks_page_requests_one_page(self, connector, spotify_client):
        spotify_client.playlist_items.return_value = {
            "items": [_item("spotify:track:1")],
            "total": 201,
        }

        page = await connector.get_tracks_page("p1", offset=200)

        args, kwargs = spotify_client.playlist_items.call_args
        assert args == ("p1",)
        assert kwargs["offset"] == 200
        assert kwargs["limit"] == 100
        assert page.total == 201
        assert [t.uri for t in page.items] == ["spotify:track:1"]

    async def test_get_tracks_page_maps_http_error(self, connector, spotify_client):
        spotify_client.playlist_items.side_effect = spotipy.SpotifyException(
            401, -1, "The access token expired"
        )

        with pytest.raises(FetchFailedError) as exc_info:
            await connector.get_tracks_page("p1", offset=100)

        assert exc_info.value.status_code == 401
        assert exc_info.value.offset == 100

    async def test_get_tracks_page_maps_transport_error(self, connector, spotify_client):
        spotify_client.playlist_items.side_effect = requests.ConnectionError("down")

        with pytest.raises(FetchFailedError) as exc_info:
            await connector.get_tracks_page("p1")

        assert exc_info.value.status_code is None

    async def test_get_tracks_page_rejects_malformed_response(
        self, connector, spotify_client
    ):
        spotify_client.playlist_items.return_value = {"error": "nope"}

        with pytest.raises(FetchFailedError):
            await connector.get_tracks_page("p1")

    async def test_negative_offset_rejected(self, connector):
        with pytest.raises(ValueError):
            await connector.get_tracks_page("p1", offset=-1)

    async def test_add_tracks_success(self, connector, spotify_client):
        uris = ["spotify:track:1", "spotify:track:2"]

        outcome = await connector.add_tracks("p1", uris, chunk_index=3)

        spotify_client.playlist_add_items.assert_called_once_with("p1", uris)
        assert outcome.succeeded
        assert outcome.status_code == 201
        assert outcome.chunk_index == 3
        assert outcome.uris_count == 2

    async def test_add_tracks_failure_is_an_outcome(self, connector, spotify_client):
        spotify_client.playlist_add_items.side_effect = spotipy.SpotifyException(
            403, -1, "Forbidden"
        )

        outcome = await connector.add_tracks("p1", ["spotify:track:1"])

        assert outcome.succeeded is False
        assert outcome.status_code == 403
        assert outcome.error

    async def test_add_tracks_rejects_oversized_chunk(self, connector, spotify_client):
        uris = [f"spotify:track:{i}" for i in range(101)]

        with pytest.raises(ValueError):
            await connector.add_tracks("p1", uris)

        spotify_client.playlist_add_items.assert_not_called()

    async def test_cancellation_propagates(self, connector, spotify_client):
        async def cancelled(*args, **kwargs):
            raise asyncio.CancelledError

        with patch.object(SpotifyConnector, "_call", side_effect=cancelled):
            with pytest.raises(asyncio.CancelledError):
                await connector.get_tracks_page("p1")

    async def test_get_user_playlists_follows_next(self, connector, spotify_client):
        first = {
            "items": [{"id": "a", "name": "A"}],
            "next": "https://api.spotify.com/v1/me/playlists?offset=1",
        }
        second = {"items": [{"id": "b", "name": "B"}], "next": None}
        spotify_client.current_user_playlists.return_value = first
        spotify_client.next.return_value = second

        playlists = await connector.get_user_playlists()

        assert [p.id for p in playlists] == ["a", "b"]
        spotify_client.next.assert_called_once_with(first)

    async def test_get_user_playlists_failure(self, connector, spotify_client):
        spotify_client.current_user_playlists.side_effect = spotipy.SpotifyException(
            401, -1, "Unauthorized"
        )

        with pytest.raises(FetchFailedError) as exc_info:
            await connector.get_user_playlists()

        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize(
        "response",
        [
            None,
            {"error": "nope"},
            {"items": None},
            {"items": [{"name": "no id"}], "next": None},
        ],
    )
    async def test_get_user_playlists_rejects_malformed_listing(
        self, connector, spotify_client, response
    ):
        spotify_client.current_user_playlists.return_value = response

        with pytest.raises(FetchFailedError) as exc_info:
            await connector.get_user_playlists()

        assert exc_info.value.playlist_id == "me"
        assert "invalid response" in str(exc_info.value)

    async def test_get_user_playlists_rejects_malformed_next_page(
        self, connector, spotify_client
    ):
        spotify_client.current_user_playlists.return_value = {
            "items": [{"id": "a", "name": "A"}],
            "next": "https://api.spotify.com/v1/me/playlists?offset=1",
        }
        spotify_client.next.return_value = None

        with pytest.raises(FetchFailedError) as exc_info:
            await connector.get_user_playlists()

        assert exc_info.value.offset == 1

    async def test_get_user_playlists_skips_null_entries(self, connector, spotify_client):
        spotify_client.current_user_playlists.return_value = {
            "items": [None, {"id": "a", "name": "A"}],
            "next": None,
        }

        playlists = await connector.get_user_playlists()

        assert [p.id for p in playlists] == ["a"]
