"""
Services package for tmdb2boxd.

Service classes orchestrate the lookup workflow, coordinating the cache
backend and the Letterboxd adaptor.
"""

from tmdb2boxd.services.lookup_service import LookupService

__all__ = ["LookupService"]
