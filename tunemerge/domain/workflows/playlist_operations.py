"""Pure domain logic for playlist merge operations.

These functions contain only business logic with no external dependencies,
making them easy to unit test without mocking.
"""

from collections.abc import Iterable, Sequence

from tunemerge.domain.entities import PlaylistSummary, TrackCollection

# Spotify returns at most this many playlist items per request
PAGE_SIZE = 100

# Spotify accepts at most this many uris per add-tracks request
CHUNK_SIZE = 100


def page_offsets(total: int, page_size: int = PAGE_SIZE) -> list[int]:
    """Offsets to request so that a playlist of ``total`` items is fully covered.

    Always yields ``total // page_size + 1`` pages: one page more than strictly
    needed when ``total`` is a multiple of ``page_size``. The spare page covers
    tracks added between the first page and the remaining requests.

    Args:
        total: Collection size reported by the first page
        page_size: Items per page

    Returns:
        Ascending offsets starting at 0
    """
    if total < 0:
        raise ValueError(f"total must be non-negative, got {total}")
    num_pages = total // page_size + 1
    return [i * page_size for i in range(num_pages)]


def compute_delta(
    *,
    reference: TrackCollection,
    candidates: TrackCollection,
) -> tuple[str, ...]:
    """Uris present in ``candidates`` but absent from ``reference``.

    Args:
        reference: Collection treated as already complete (the merge target)
        candidates: Collection scanned for missing tracks (the merge source)

    Returns:
        Missing uris in first-occurrence order within ``candidates``. A uri
        repeated in ``candidates`` is emitted once per occurrence. Null
        entries on either side are ignored.
    """
    present = set(reference.uris)
    return tuple(uri for uri in candidates.uris if uri not in present)


def chunk_uris(uris: Sequence[str], size: int = CHUNK_SIZE) -> list[list[str]]:
    """Split uris into contiguous chunks of at most ``size`` items.

    Chunk ``i`` covers ``uris[i * size : (i + 1) * size]``.
    """
    if size < 1 or size > CHUNK_SIZE:
        raise ValueError(f"Chunk size must be between 1 and {CHUNK_SIZE}, got {size}")
    return [list(uris[i : i + size]) for i in range(0, len(uris), size)]


def resolve_playlist_link(
    playlists: Iterable[PlaylistSummary], playlist_id: str
) -> str | None:
    """Shareable link of ``playlist_id`` from an already-fetched listing."""
    for playlist in playlists:
        if playlist.id == playlist_id:
            return playlist.external_url
    return None
