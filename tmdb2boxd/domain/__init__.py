"""
Domain package for tmdb2boxd.

Contains the record shape returned to callers and stored in the cache. The
domain layer is independent of HTTP, cache backends and the scraped site.
"""
