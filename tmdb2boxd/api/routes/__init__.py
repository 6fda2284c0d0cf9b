"""API routers."""

from tmdb2boxd.api.routes.tmdb import tmdb_router

__all__ = ["tmdb_router"]
