"""Domain interfaces for remote playlist access."""

from .interfaces import PlaylistConnectorProtocol

__all__ = ["PlaylistConnectorProtocol"]
