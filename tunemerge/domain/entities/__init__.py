"""Core domain entities representing playlist merge concepts."""

from .operations import (
    MERGE_MESSAGES,
    MergeResult,
    MergeStage,
    MergeStatus,
    WriteOutcome,
    WriteSummary,
)
from .playlist import PlaylistSummary
from .track import Track, TrackCollection, TrackPage

__all__ = [
    # Track entities
    "Track",
    "TrackCollection",
    "TrackPage",
    # Playlist entities
    "PlaylistSummary",
    # Operation entities
    "MERGE_MESSAGES",
    "MergeResult",
    "MergeStage",
    "MergeStatus",
    "WriteOutcome",
    "WriteSummary",
]
