"""Domain entity tests: tracks, pages, collections and merge results."""

import attrs
import pytest

from tunemerge.domain.entities import (
    MergeResult,
    MergeStatus,
    Track,
    TrackCollection,
    TrackPage,
    WriteOutcome,
    WriteSummary,
)
from tunemerge.domain.errors import (
    FetchFailedError,
    MissingSelectionError,
    WriteFailedError,
)


class TestTrack:
    def test_uri_is_identity(self):
        assert Track(uri="spotify:track:1") == Track(uri="spotify:track:1")

    def test_carries_only_the_uri(self):
        assert list(attrs.fields_dict(Track)) == ["uri"]

    def test_empty_uri_rejected(self):
        with pytest.raises(ValueError):
            Track(uri="")

    def test_is_immutable(self):
        track = Track(uri="spotify:track:1")

        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            track.uri = "spotify:track:2"  # type: ignore[misc]


class TestTrackPage:
    def test_counts_unavailable_items(self):
        page = TrackPage(
            offset=0, total=3, items=[Track(uri="spotify:track:1"), None, None]
        )

        assert page.skipped_count == 2
        assert isinstance(page.items, tuple)

    def test_negative_offset_rejected(self):
        with pytest.raises(ValueError):
            TrackPage(offset=-100, total=0)


class TestTrackCollection:
    """Test assembly of pages into one ordered collection."""

    def test_from_pages_concatenates_in_given_order(self):
        first = TrackPage(offset=0, total=3, items=[Track(uri="a"), Track(uri="b")])
        second = TrackPage(offset=100, total=3, items=[None, Track(uri="c")])

        collection = TrackCollection.from_pages("p1", [first, second])

        assert collection.playlist_id == "p1"
        assert collection.uris == ["a", "b", "c"]
        assert collection.skipped_count == 1
        assert len(collection) == 3
        assert collection.total == 3

    def test_duplicates_are_preserved(self):
        page = TrackPage(offset=0, total=3, items=[Track(uri="a")] * 3)

        assert TrackCollection.from_pages("p", [page]).uris == ["a", "a", "a"]

    def test_no_pages_gives_empty_collection(self):
        collection = TrackCollection.from_pages("p", [])

        assert len(collection) == 0
        assert collection.total == 0


class TestWriteSummary:
    def test_succeeds_only_when_every_chunk_succeeds(self):
        ok = WriteOutcome(chunk_index=0, uris_count=100, succeeded=True, status_code=201)
        failed = WriteOutcome(chunk_index=1, uris_count=50, succeeded=False, status_code=403)

        assert WriteSummary("p", (ok,)).succeeded is True
        assert WriteSummary("p", (ok, failed)).succeeded is False

    def test_empty_summary_succeeds(self):
        assert WriteSummary("p").succeeded is True

    def test_raise_for_failure_reports_failed_chunks(self):
        summary = WriteSummary(
            "p",
            (
                WriteOutcome(chunk_index=0, uris_count=100, succeeded=True),
                WriteOutcome(chunk_index=1, uris_count=100, succeeded=False),
                WriteOutcome(chunk_index=2, uris_count=10, succeeded=False),
            ),
        )

        with pytest.raises(WriteFailedError) as exc_info:
            summary.raise_for_failure()

        assert exc_info.value.failed_chunks == [1, 2]
        assert summary.tracks_written == 100


class TestMergeResult:
    """Each terminal state maps to exactly one user-facing message."""

    def test_success_message_contains_link(self):
        result = MergeResult(
            status=MergeStatus.SUCCEEDED, link="https://open.spotify.com/playlist/x"
        )

        assert result.succeeded
        assert "https://open.spotify.com/playlist/x" in result.message

    @pytest.mark.parametrize(
        ("status", "fragment"),
        [
            (MergeStatus.NO_OP, "already in the target playlist"),
            (MergeStatus.FAILED, "something went wrong"),
            (MergeStatus.MISSING_SELECTION, "choose 2 playlists"),
        ],
    )
    def test_other_messages(self, status, fragment):
        result = MergeResult(status=status)

        assert fragment in result.message
        assert not result.succeeded

    def test_failure_message_hides_partial_progress(self):
        result = MergeResult(
            status=MergeStatus.FAILED,
            tracks_added=100,
            chunk_outcomes=[WriteOutcome(chunk_index=1, uris_count=50, succeeded=False)],
        )

        assert "100" not in result.message


class TestErrors:
    def test_fetch_failed_carries_offset(self):
        error = FetchFailedError("p1", 200, status_code=401)

        assert error.offset == 200
        assert error.details["status_code"] == 401
        assert "offset 200" in str(error)

    def test_missing_selection_lists_missing_sides(self):
        error = MissingSelectionError(["source"])

        assert error.missing == ["source"]
        assert "source" in str(error)
