"""Application utilities shared by merge services."""

from .concurrency import gather_in_order

__all__ = ["gather_in_order"]
