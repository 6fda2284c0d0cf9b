import logging

from tmdb2boxd.adapters.interfaces.cache import CacheStrategy
from tmdb2boxd.core.config import Settings
from tmdb2boxd.infrastructure.cache.memory_cache import MemoryCache
from tmdb2boxd.infrastructure.cache.redis_cache import RedisCache

logger = logging.getLogger(__name__)


def create_cache(settings: Settings) -> CacheStrategy:
    """
    Create the cache backend selected by ``CACHE_BACKEND``.

    Args:
        settings: Application settings

    Returns:
        A MemoryCache or RedisCache instance
    """
    if settings.CACHE_BACKEND == "redis":
        logger.info("Using Redis cache backend")
        return RedisCache(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            password=settings.REDIS_PASSWORD,
            db=settings.REDIS_DB,
            prefix=settings.REDIS_PREFIX,
            default_ttl=settings.CACHE_TTL,
        )

    logger.info("Using in-memory cache backend")
    return MemoryCache(
        default_ttl=settings.CACHE_TTL,
        cleanup_interval=settings.MEMORY_CACHE_CLEANUP_INTERVAL,
    )
