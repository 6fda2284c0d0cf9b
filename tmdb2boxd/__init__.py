"""
tmdb2boxd - TMDB to Letterboxd lookup proxy.

Resolves a TMDB movie id to the matching Letterboxd film by scraping the
Letterboxd redirect page, and caches the result for a week.
"""

__version__ = "0.1.0"
