"""Caching implementations for tmdb2boxd."""

from tmdb2boxd.infrastructure.cache.redis_cache import RedisCache
from tmdb2boxd.infrastructure.cache.memory_cache import MemoryCache
from tmdb2boxd.infrastructure.cache.factory import create_cache

__all__ = ["RedisCache", "MemoryCache", "create_cache"]
