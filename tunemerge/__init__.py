"""Merge missing tracks from one Spotify playlist into another."""
