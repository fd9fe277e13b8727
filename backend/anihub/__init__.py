"""AniHub backend package."""
