"""HTTP layer for tmdb2boxd."""
