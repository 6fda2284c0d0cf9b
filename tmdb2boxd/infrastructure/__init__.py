"""Infrastructure layer for tmdb2boxd."""

from tmdb2boxd.infrastructure.cache import RedisCache, MemoryCache, create_cache
