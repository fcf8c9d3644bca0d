"""Operation-related domain entities.

Outcomes of add-tracks writes and the terminal result of a merge.
"""

from enum import Enum

from attrs import define, field

from tunemerge.domain.errors import WriteFailedError


@define(frozen=True, slots=True)
class WriteOutcome:
    """Outcome of one add-tracks request covering a single chunk."""

    chunk_index: int
    uris_count: int
    succeeded: bool
    status_code: int | None = None
    error: str | None = None


@define(frozen=True, slots=True)
class WriteSummary:
    """Outcomes of all chunks written for one merge, in chunk order."""

    playlist_id: str
    outcomes: tuple[WriteOutcome, ...] = field(factory=tuple, converter=tuple)

    @property
    def succeeded(self) -> bool:
        """True only if every chunk succeeded."""
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def failed_chunks(self) -> list[int]:
        return [o.chunk_index for o in self.outcomes if not o.succeeded]

    @property
    def tracks_written(self) -> int:
        return sum(o.uris_count for o in self.outcomes if o.succeeded)

    def raise_for_failure(self) -> None:
        """Raise WriteFailedError if any chunk failed."""
        if not self.succeeded:
            raise WriteFailedError(self.playlist_id, self.failed_chunks)


class MergeStatus(Enum):
    """Terminal states of a merge."""

    SUCCEEDED = "succeeded"
    NO_OP = "no_op"
    FAILED = "failed"
    MISSING_SELECTION = "missing_selection"


class MergeStage(Enum):
    """Progress stages a merge moves through before reaching a terminal state."""

    IDLE = "idle"
    FETCHING = "fetching"
    DIFFING = "diffing"
    WRITING = "writing"


MERGE_MESSAGES: dict[MergeStatus, str] = {
    MergeStatus.SUCCEEDED: "Success! View your newly updated playlist here: {link}",
    MergeStatus.NO_OP: (
        "All songs from the source playlist are already in the target playlist!"
    ),
    MergeStatus.FAILED: "Uh oh, something went wrong. Please try again.",
    MergeStatus.MISSING_SELECTION: "Please choose 2 playlists.",
}


@define(frozen=True, slots=True)
class MergeResult:
    """Immutable terminal result of one merge invocation.

    ``chunk_outcomes`` is kept for logging; the user-facing ``message`` never
    reports partial progress.
    """

    status: MergeStatus
    source_playlist_id: str | None = None
    target_playlist_id: str | None = None
    tracks_added: int = 0
    chunk_outcomes: tuple[WriteOutcome, ...] = field(factory=tuple, converter=tuple)
    link: str | None = None
    reason: str | None = None
    execution_time_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status is MergeStatus.SUCCEEDED

    @property
    def message(self) -> str:
        """The single user-facing message for this terminal state."""
        template = MERGE_MESSAGES[self.status]
        if self.status is MergeStatus.SUCCEEDED:
            return template.format(link=self.link or "(link unavailable)")
        return template
