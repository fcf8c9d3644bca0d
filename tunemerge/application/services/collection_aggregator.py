"""Materialize a complete playlist track collection across paginated requests."""

from attrs import define

from tunemerge.application.utilities.concurrency import gather_in_order
from tunemerge.config import get_logger
from tunemerge.domain.entities import TrackCollection
from tunemerge.domain.repositories import PlaylistConnectorProtocol
from tunemerge.domain.workflows.playlist_operations import PAGE_SIZE, page_offsets

logger = get_logger(__name__)


@define(slots=True)
class CollectionAggregator:
    """Fetch every page of a playlist and concatenate them in offset order.

    The first page at offset 0 decides the strategy:
    - ``total <= 100``: the first page is the whole collection
    - otherwise: all pages, including offset 0 again, are fetched concurrently

    Any failed page fails the whole aggregation; a partial collection would
    corrupt the delta between playlists.
    """

    connector: PlaylistConnectorProtocol

    async def fetch_all(self, playlist_id: str) -> TrackCollection:
        """Fetch all tracks of a playlist.

        Args:
            playlist_id: Service-specific playlist ID

        Returns:
            TrackCollection in playlist order, null placeholders included

        Raises:
            FetchFailedError: If any page request failed
        """
        first_page = await self.connector.get_tracks_page(playlist_id, offset=0)

        if first_page.total <= PAGE_SIZE:
            logger.debug(
                "Playlist fits in a single page",
                playlist_id=playlist_id,
                total=first_page.total,
            )
            return TrackCollection.from_pages(playlist_id, [first_page])

        offsets = page_offsets(first_page.total)
        logger.debug(
            f"Fetching {len(offsets)} pages concurrently",
            playlist_id=playlist_id,
            total=first_page.total,
        )

        pages = await gather_in_order(
            self.connector.get_tracks_page(playlist_id, offset=offset)
            for offset in offsets
        )

        collection = TrackCollection.from_pages(playlist_id, pages)
        logger.info(
            f"Fetched {len(collection)} tracks from playlist {playlist_id}",
            pages=len(pages),
            skipped=collection.skipped_count,
        )
        return collection
