"""Domain exceptions for playlist merging.

Exception Hierarchy:
    TuneMergeError (base)
        MissingSelectionError - source or target playlist not chosen
        FetchFailedError - a page request for a playlist's tracks failed
        WriteFailedError - one or more add-tracks chunks failed
"""

from typing import Any


class TuneMergeError(Exception):
    """Base exception for all tunemerge errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context for logging (playlist ids, offsets, ...).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class MissingSelectionError(TuneMergeError):
    """Raised when a merge is requested without both playlists selected.

    Detected before any network call is made.
    """

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Missing playlist selection: {', '.join(missing)}",
            details={"missing": missing},
        )
        self.missing = missing


class FetchFailedError(TuneMergeError):
    """Raised when one page of a playlist's tracks could not be retrieved.

    Carries the offset of the failed page. The whole aggregation for that
    playlist fails with it; no partial collection is ever returned.
    """

    def __init__(
        self,
        playlist_id: str,
        offset: int,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        message = f"Failed to fetch tracks of playlist {playlist_id} at offset {offset}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            details={
                "playlist_id": playlist_id,
                "offset": offset,
                "status_code": status_code,
            },
        )
        self.playlist_id = playlist_id
        self.offset = offset
        self.status_code = status_code


class WriteFailedError(TuneMergeError):
    """Raised when at least one chunk of an add-tracks operation failed.

    Chunks that succeeded stay written; nothing is rolled back.
    """

    def __init__(self, playlist_id: str, failed_chunks: list[int]) -> None:
        super().__init__(
            f"Failed to add tracks to playlist {playlist_id} "
            f"({len(failed_chunks)} chunk(s) failed)",
            details={"playlist_id": playlist_id, "failed_chunks": failed_chunks},
        )
        self.playlist_id = playlist_id
        self.failed_chunks = failed_chunks
