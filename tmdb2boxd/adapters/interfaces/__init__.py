"""
Interfaces package for tmdb2boxd.

Abstract base interfaces standardizing access to the cache and to external
sites.
"""

from .external_api import ExternalAPIAdaptorInterface
from .cache import CacheStrategy

__all__ = [
    'ExternalAPIAdaptorInterface',
    'CacheStrategy',
]
