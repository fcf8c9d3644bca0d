"""Command line interface for tunemerge."""
