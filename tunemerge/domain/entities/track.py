"""Track-related domain entities.

Pure track representations with zero external dependencies beyond attrs.
"""

from attrs import define, field, validators


@define(frozen=True, slots=True)
class Track:
    """Minimal projection of a playlist track.

    Identity is the ``uri``. The same uri may appear several times in one
    playlist; each occurrence is a separate Track.
    """

    uri: str = field(validator=validators.instance_of(str))

    @uri.validator
    def _check_uri(self, attribute, value):
        if not value:
            raise ValueError("Track uri must not be empty")


@define(frozen=True, slots=True)
class TrackPage:
    """One page of a paginated playlist tracks listing.

    ``None`` items stand for tracks the catalog no longer serves; they are
    placeholders and never an error.
    """

    offset: int = field(validator=validators.ge(0))
    total: int = field(validator=validators.ge(0))
    items: tuple[Track | None, ...] = field(factory=tuple, converter=tuple)

    @property
    def skipped_count(self) -> int:
        """Number of unavailable (null) entries on this page."""
        return sum(1 for item in self.items if item is None)


@define(frozen=True, slots=True)
class TrackCollection:
    """All tracks of one playlist in playlist order.

    Null placeholders are retained so callers can account for them; use
    ``present_tracks`` or ``uris`` for the usable entries.
    """

    playlist_id: str
    total: int = 0
    tracks: tuple[Track | None, ...] = field(factory=tuple, converter=tuple)

    @classmethod
    def from_pages(cls, playlist_id: str, pages: list[TrackPage]) -> "TrackCollection":
        """Concatenate pages in the order given.

        Callers pass pages in ascending offset order. ``total`` is taken from
        the last page, which reflects the most recent size the service reported.
        """
        tracks: list[Track | None] = []
        for page in pages:
            tracks.extend(page.items)
        total = pages[-1].total if pages else 0
        return cls(playlist_id=playlist_id, total=total, tracks=tracks)

    @property
    def present_tracks(self) -> list[Track]:
        """Tracks that are still available, in order."""
        return [track for track in self.tracks if track is not None]

    @property
    def uris(self) -> list[str]:
        """Uris of available tracks, in order, duplicates preserved."""
        return [track.uri for track in self.tracks if track is not None]

    @property
    def skipped_count(self) -> int:
        """Number of unavailable entries in the collection."""
        return sum(1 for track in self.tracks if track is None)

    def __len__(self) -> int:
        return len(self.present_tracks)
