"""Spotify service connector with domain model conversion.

This module provides a connector for the Spotify Web API using the spotipy
library (https://spotipy.readthedocs.io/). It authenticates with a bearer token
supplied by the caller and converts Spotify responses into domain models.

Key components:
- SpotifyConnector: token-authenticated client with the three calls a merge needs
- Conversion utilities: Transform Spotify API responses to domain models

The module supports:
- Fetching one page (up to 100 items) of a playlist's tracks at an offset
- Appending up to 100 track uris to a playlist in one request
- Listing the signed-in user's playlists with their shareable links
"""

import asyncio
from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

from attrs import define, field
import requests
import spotipy

from tunemerge.config import get_config, get_logger, resilient_operation
from tunemerge.domain.entities import PlaylistSummary, Track, TrackPage, WriteOutcome
from tunemerge.domain.errors import FetchFailedError
from tunemerge.domain.workflows.playlist_operations import CHUNK_SIZE, PAGE_SIZE

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="spotify")

# Errors raised by spotipy for a failed request
TRANSPORT_ERRORS = (spotipy.SpotifyException, requests.RequestException)


@define(slots=True)
class SpotifyConnector:
    """Thin wrapper around spotipy with domain model conversion.

    The access token is read-only and shared by every concurrent request made
    through this connector. Blocking spotipy calls run in worker threads; an
    ``asyncio.Semaphore`` bounds how many are in flight at once.
    """

    access_token: str = field(repr=False)
    client: spotipy.Spotify = field(init=False, repr=False)
    _semaphore: asyncio.Semaphore = field(init=False, repr=False)

    def __attrs_post_init__(self) -> None:
        """Initialize Spotify client with the bearer token."""
        logger.debug("Initializing Spotify connector")
        retries = get_config("SPOTIFY_API_RETRY_COUNT", 0)
        self.client = spotipy.Spotify(
            auth=self.access_token,
            requests_timeout=get_config("SPOTIFY_API_REQUEST_TIMEOUT", 10.0),
            retries=retries,
            status_retries=retries,
        )
        self._semaphore = asyncio.Semaphore(get_config("SPOTIFY_API_CONCURRENCY", 10))

    async def _call(self, func, *args, **kwargs) -> Any:
        async with self._semaphore:
            return await asyncio.to_thread(func, *args, **kwargs)

    @resilient_operation("spotify_get_tracks_page")
    async def get_tracks_page(self, playlist_id: str, offset: int = 0) -> TrackPage:
        """Fetch up to 100 playlist items starting at ``offset``.

        Args:
            playlist_id: Spotify playlist ID
            offset: Zero-based index of the first item

        Returns:
            TrackPage with converted items and the playlist's total size

        Raises:
            FetchFailedError: If the request failed or the response was malformed
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")

        logger.debug(f"Fetching tracks of {playlist_id}", offset=offset)
        try:
            response = await self._call(
                self.client.playlist_items,
                playlist_id,
                offset=offset,
                limit=PAGE_SIZE,
                market=get_config("SPOTIFY_MARKET"),
                additional_types=("track",),
            )
        except asyncio.CancelledError:
            logger.debug("HTTP request aborted", playlist_id=playlist_id, offset=offset)
            raise
        except TRANSPORT_ERRORS as e:
            raise FetchFailedError(
                playlist_id, offset, status_code=_status_of(e), reason=str(e)
            ) from e

        if not isinstance(response, dict) or "items" not in response:
            raise FetchFailedError(playlist_id, offset, reason="invalid response")

        return convert_spotify_tracks_page(response, offset)

    @resilient_operation("spotify_add_tracks")
    async def add_tracks(
        self, playlist_id: str, uris: Sequence[str], chunk_index: int = 0
    ) -> WriteOutcome:
        """Append uris to a playlist in a single request.

        Args:
            playlist_id: Spotify playlist ID
            uris: At most 100 track uris
            chunk_index: Position of this chunk within the whole write

        Returns:
            WriteOutcome; a failed request yields ``succeeded=False`` with the
            HTTP status when one is known
        """
        if len(uris) > CHUNK_SIZE:
            raise ValueError(
                f"Spotify accepts at most {CHUNK_SIZE} uris per request, got {len(uris)}"
            )

        logger.debug(
            f"Adding {len(uris)} tracks to {playlist_id}", chunk_index=chunk_index
        )
        try:
            await self._call(self.client.playlist_add_items, playlist_id, list(uris))
        except asyncio.CancelledError:
            logger.debug("HTTP request aborted", playlist_id=playlist_id, chunk_index=chunk_index)
            raise
        except TRANSPORT_ERRORS as e:
            status = _status_of(e)
            logger.warning(
                f"Adding tracks to {playlist_id} failed",
                chunk_index=chunk_index,
                status_code=status,
                error=str(e),
            )
            return WriteOutcome(
                chunk_index=chunk_index,
                uris_count=len(uris),
                succeeded=False,
                status_code=status,
                error=str(e),
            )

        # spotipy raises for every non-2xx response; Spotify answers 201 Created
        return WriteOutcome(
            chunk_index=chunk_index,
            uris_count=len(uris),
            succeeded=True,
            status_code=HTTPStatus.CREATED.value,
        )

    @resilient_operation("spotify_get_user_playlists")
    async def get_user_playlists(self) -> list[PlaylistSummary]:
        """List every playlist of the signed-in user.

        Raises:
            FetchFailedError: If any listing page failed or was malformed
        """
        limit = get_config("SPOTIFY_PLAYLISTS_PAGE_LIMIT", 50)
        offset = 0
        items: list[dict[str, Any]] = []
        try:
            response = await self._call(
                self.client.current_user_playlists, limit=limit, offset=offset
            )
            items.extend(_listing_items(response, offset))

            # Paginate until we get all playlists
            while response.get("next"):
                offset += len(response["items"])
                response = await self._call(self.client.next, response)
                items.extend(_listing_items(response, offset))
        except TRANSPORT_ERRORS as e:
            raise FetchFailedError(
                "me", offset, status_code=_status_of(e), reason=str(e)
            ) from e

        playlists = [convert_spotify_playlist_summary(item) for item in items]
        logger.info(f"Retrieved {len(playlists)} playlists for current user")
        return playlists


def _listing_items(response: Any, offset: int) -> list[dict[str, Any]]:
    """Playlist objects of one listing page; null entries are dropped."""
    if not isinstance(response, dict) or not isinstance(response.get("items"), list):
        raise FetchFailedError("me", offset, reason="invalid response")
    items = [item for item in response["items"] if item]
    if not all(isinstance(item, dict) and item.get("id") for item in items):
        raise FetchFailedError("me", offset, reason="invalid response")
    return items


def _status_of(error: Exception) -> int | None:
    """HTTP status carried by a spotipy or requests error, if any."""
    if isinstance(error, spotipy.SpotifyException):
        return error.http_status
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None)


def convert_spotify_track_item(item: dict[str, Any] | None) -> Track | None:
    """Convert one playlist item to a Track, or None if it is unavailable."""
    if not item:
        return None
    track = item.get("track")
    if not track or not track.get("uri"):
        return None
    return Track(uri=track["uri"])


def convert_spotify_tracks_page(response: dict[str, Any], offset: int) -> TrackPage:
    """Convert a playlist items response to a TrackPage."""
    items = [convert_spotify_track_item(item) for item in response.get("items") or []]
    total = response.get("total")
    if total is None:
        total = offset + len(items)
    return TrackPage(offset=offset, total=total, items=items)


def convert_spotify_playlist_summary(spotify_playlist: dict[str, Any]) -> PlaylistSummary:
    """Convert a simplified Spotify playlist object to PlaylistSummary."""
    return PlaylistSummary(
        id=spotify_playlist["id"],
        name=spotify_playlist.get("name") or "",
        external_url=(spotify_playlist.get("external_urls") or {}).get("spotify"),
        owner_id=(spotify_playlist.get("owner") or {}).get("id"),
        track_total=(spotify_playlist.get("tracks") or {}).get("total", 0),
    )
