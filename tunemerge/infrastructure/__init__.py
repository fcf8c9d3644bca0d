"""Infrastructure adapters: Spotify connector and CLI."""
