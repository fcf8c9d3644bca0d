"""Music service connectors."""

from .spotify import SpotifyConnector

__all__ = ["SpotifyConnector"]
