"""Application services composing the merge pipeline."""

from .chunked_writer import ChunkedWriter
from .collection_aggregator import CollectionAggregator

__all__ = ["ChunkedWriter", "CollectionAggregator"]
