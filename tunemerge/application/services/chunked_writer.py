"""Append an arbitrarily long list of uris to a playlist in API-sized chunks."""

from collections.abc import Sequence

from attrs import define

from tunemerge.application.utilities.concurrency import gather_in_order
from tunemerge.config import get_logger
from tunemerge.domain.entities import WriteSummary
from tunemerge.domain.repositories import PlaylistConnectorProtocol
from tunemerge.domain.workflows.playlist_operations import CHUNK_SIZE, chunk_uris

logger = get_logger(__name__)


@define(slots=True)
class ChunkedWriter:
    """Write uris in chunks of at most 100, all chunks concurrently.

    The overall result succeeds only if every chunk succeeded. Chunks that
    succeeded before another failed stay applied; there is no rollback.
    """

    connector: PlaylistConnectorProtocol

    async def write_all(self, playlist_id: str, uris: Sequence[str]) -> WriteSummary:
        """Append ``uris`` to ``playlist_id``.

        Args:
            playlist_id: Target playlist ID
            uris: Track uris to append, in order

        Returns:
            WriteSummary with one outcome per chunk in chunk order
        """
        if not uris:
            return WriteSummary(playlist_id=playlist_id)

        if len(uris) <= CHUNK_SIZE:
            outcome = await self.connector.add_tracks(playlist_id, list(uris))
            return WriteSummary(playlist_id=playlist_id, outcomes=(outcome,))

        chunks = chunk_uris(uris, CHUNK_SIZE)
        logger.info(
            f"Adding {len(uris)} tracks in {len(chunks)} chunks",
            playlist_id=playlist_id,
        )

        outcomes = await gather_in_order(
            self.connector.add_tracks(playlist_id, chunk, chunk_index=index)
            for index, chunk in enumerate(chunks)
        )
        summary = WriteSummary(playlist_id=playlist_id, outcomes=outcomes)

        if not summary.succeeded:
            logger.warning(
                "Some chunks failed; successful chunks remain applied",
                playlist_id=playlist_id,
                failed_chunks=summary.failed_chunks,
                tracks_written=summary.tracks_written,
            )
        return summary
