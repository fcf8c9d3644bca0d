"""MergePlaylists use case: append tracks missing from a target playlist.

Orchestrates the merge pipeline for a single user action:
1. Validate that both playlists were selected
2. Fetch source and target track collections concurrently
3. Compute the uris present in the source but absent from the target
4. Append them to the target in chunks of at most 100
5. Return one immutable MergeResult describing the terminal state

Remote failures never escape as exceptions; they become a FAILED result.
Nothing is kept between invocations.
"""

from collections.abc import Sequence
from datetime import UTC, datetime

from attrs import define, evolve, field

from tunemerge.application.services import ChunkedWriter, CollectionAggregator
from tunemerge.application.utilities.concurrency import gather_in_order
from tunemerge.config import get_logger
from tunemerge.domain.entities import (
    MergeResult,
    MergeStage,
    MergeStatus,
    PlaylistSummary,
)
from tunemerge.domain.errors import (
    FetchFailedError,
    MissingSelectionError,
    WriteFailedError,
)
from tunemerge.domain.repositories import PlaylistConnectorProtocol
from tunemerge.domain.workflows.playlist_operations import (
    compute_delta,
    resolve_playlist_link,
)

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class MergePlaylistsCommand:
    """Merge request carrying both playlist selections.

    ``playlists`` is the user's playlist listing fetched at session start; it
    is only used to look up the target's shareable link.
    """

    source_playlist_id: str | None
    target_playlist_id: str | None
    playlists: tuple[PlaylistSummary, ...] = field(factory=tuple, converter=tuple)
    timestamp: datetime = field(factory=lambda: datetime.now(UTC))

    @property
    def missing_selection(self) -> list[str]:
        """Sides whose playlist id is absent, empty or blank."""
        return [
            name
            for name, value in (
                ("source", self.source_playlist_id),
                ("target", self.target_playlist_id),
            )
            if not value or not value.strip()
        ]

    def validate_selection(self) -> tuple[str, str]:
        """Return ``(source, target)`` or raise MissingSelectionError."""
        missing = self.missing_selection
        if missing:
            raise MissingSelectionError(missing)
        return str(self.source_playlist_id), str(self.target_playlist_id)


@define(slots=True)
class MergePlaylistsUseCase:
    """Use case merging every track of a source playlist missing from a target.

    The connector is shared read-only by all concurrent requests of one merge.
    """

    connector: PlaylistConnectorProtocol
    aggregator: CollectionAggregator = field(init=False)
    writer: ChunkedWriter = field(init=False)

    def __attrs_post_init__(self) -> None:
        self.aggregator = CollectionAggregator(self.connector)
        self.writer = ChunkedWriter(self.connector)

    async def execute(self, command: MergePlaylistsCommand) -> MergeResult:
        """Run one merge to a terminal result.

        Args:
            command: Merge request with both playlist selections

        Returns:
            MergeResult with status SUCCEEDED, NO_OP, FAILED or MISSING_SELECTION
        """
        start_time = datetime.now(UTC)

        try:
            source_id, target_id = command.validate_selection()
        except MissingSelectionError as e:
            logger.info(
                "Merge requested without both playlists",
                missing=e.missing,
                stage=MergeStage.IDLE.value,
            )
            return MergeResult(
                status=MergeStatus.MISSING_SELECTION,
                source_playlist_id=command.source_playlist_id,
                target_playlist_id=command.target_playlist_id,
                reason=str(e),
            )

        def result(status: MergeStatus, **kwargs) -> MergeResult:
            elapsed = int((datetime.now(UTC) - start_time).total_seconds() * 1000)
            return MergeResult(
                status=status,
                source_playlist_id=source_id,
                target_playlist_id=target_id,
                execution_time_ms=elapsed,
                **kwargs,
            )

        with logger.contextualize(source_playlist_id=source_id, target_playlist_id=target_id):
            logger.info("Starting playlist merge", stage=MergeStage.FETCHING.value)

            try:
                source, target = await gather_in_order([
                    self.aggregator.fetch_all(source_id),
                    self.aggregator.fetch_all(target_id),
                ])
            except FetchFailedError as e:
                logger.error("Merge failed while fetching playlists", error=str(e), **e.details)
                return result(MergeStatus.FAILED, reason="fetch_failed")

            logger.debug("Computing missing tracks", stage=MergeStage.DIFFING.value)
            delta = compute_delta(reference=target, candidates=source)

            if not delta:
                logger.info("Target already contains every source track")
                return result(MergeStatus.NO_OP)

            logger.info(
                f"Adding {len(delta)} missing tracks", stage=MergeStage.WRITING.value
            )
            summary = await self.writer.write_all(target_id, delta)

            try:
                summary.raise_for_failure()
            except WriteFailedError as e:
                logger.error("Merge failed while adding tracks", error=str(e), **e.details)
                return result(
                    MergeStatus.FAILED,
                    reason="write_failed",
                    tracks_added=summary.tracks_written,
                    chunk_outcomes=summary.outcomes,
                )

            link = resolve_playlist_link(command.playlists, target_id)
            merge_result = result(
                MergeStatus.SUCCEEDED,
                tracks_added=summary.tracks_written,
                chunk_outcomes=summary.outcomes,
                link=link,
            )
            logger.info(
                "Playlist merge completed",
                tracks_added=merge_result.tracks_added,
                execution_time_ms=merge_result.execution_time_ms,
            )
            return merge_result


async def run_playlist_merge(
    source_playlist_id: str | None,
    target_playlist_id: str | None,
    *,
    connector: PlaylistConnectorProtocol,
    playlists: Sequence[PlaylistSummary] | None = None,
) -> MergeResult:
    """Convenience entry point for a single merge.

    When ``playlists`` is not supplied the user's listing is fetched once so
    the target's link can be resolved on success. A failed listing only costs
    the link, not the merge. An incomplete selection makes no request at all.
    """
    command = MergePlaylistsCommand(
        source_playlist_id=source_playlist_id,
        target_playlist_id=target_playlist_id,
        playlists=tuple(playlists or ()),
    )

    if playlists is None and not command.missing_selection:
        try:
            listing = await connector.get_user_playlists()
        except FetchFailedError as e:
            logger.warning("Could not list user playlists; link will be unavailable", error=str(e))
        else:
            command = evolve(command, playlists=tuple(listing))

    return await MergePlaylistsUseCase(connector).execute(command)
