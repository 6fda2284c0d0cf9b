from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from tmdb2boxd.core.exceptions import CacheError
from tmdb2boxd.core.logging import get_logger
from tmdb2boxd.adapters.interfaces.cache import CacheStrategy

logger = get_logger(__name__)


class RedisCache(CacheStrategy):
    """Redis-based implementation of the CacheStrategy interface."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        prefix: str = "",
        default_ttl: int = 3600,
        client: Optional[Redis] = None,
        **kwargs: Any
    ):
        """
        Initialize the Redis cache.

        The connection is opened lazily on the first command.

        Args:
            host: Redis host
            port: Redis port
            password: Redis password
            db: Redis database number
            prefix: Key prefix for namespacing; empty keeps keys unchanged
            default_ttl: Default TTL in seconds
            client: Pre-built client, mainly for tests
            **kwargs: Additional Redis connection options
        """
        self.prefix = prefix
        self.default_ttl = default_ttl

        if client is not None:
            self.client = client
        else:
            connection_kwargs = {
                "host": host,
                "port": port,
                "db": db,
                "decode_responses": True,
                **kwargs
            }
            if password:
                connection_kwargs["password"] = password
            self.client = Redis(**connection_kwargs)

        logger.info(f"Redis cache configured for {host}:{port}/{db}")

    def _build_key(self, key: str) -> str:
        """
        Build a prefixed cache key.

        Args:
            key: Original key

        Returns:
            Prefixed key
        """
        if self.prefix:
            return f"{self.prefix}:{key}"
        return key

    async def get(self, key: str) -> Optional[str]:
        """
        Get item from cache.

        Raises:
            CacheError: If there is a Redis error
        """
        prefixed_key = self._build_key(key)

        try:
            value = await self.client.get(prefixed_key)
        except RedisError as e:
            logger.error(f"Redis error getting key {prefixed_key}: {str(e)}")
            raise CacheError(f"Redis error getting key {key}: {str(e)}", e)

        if value is None:
            logger.debug(f"Cache miss for key: {prefixed_key}")
            return None

        logger.debug(f"Cache hit for key: {prefixed_key}")
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Set item in cache with TTL.

        Raises:
            CacheError: If there is a Redis error
        """
        prefixed_key = self._build_key(key)
        effective_ttl = ttl if ttl is not None else self.default_ttl

        try:
            if effective_ttl > 0:
                result = await self.client.setex(prefixed_key, effective_ttl, value)
            else:
                result = await self.client.set(prefixed_key, value)
        except RedisError as e:
            logger.error(f"Redis error setting key {prefixed_key}: {str(e)}")
            raise CacheError(f"Redis error setting key {key}: {str(e)}", e)

        logger.debug(f"Set cache key {prefixed_key} with TTL {effective_ttl}s")
        return bool(result)

    async def delete(self, key: str) -> bool:
        """
        Remove item from cache.

        Raises:
            CacheError: If there is a Redis error
        """
        prefixed_key = self._build_key(key)

        try:
            result = await self.client.delete(prefixed_key)
        except RedisError as e:
            logger.error(f"Redis error deleting key {prefixed_key}: {str(e)}")
            raise CacheError(f"Redis error deleting key {key}: {str(e)}", e)

        deleted = result > 0
        logger.debug(f"Deleted cache key {prefixed_key}: {deleted}")
        return deleted

    async def exists(self, key: str) -> bool:
        """
        Check if key exists in cache.

        Raises:
            CacheError: If there is a Redis error
        """
        prefixed_key = self._build_key(key)

        try:
            result = await self.client.exists(prefixed_key)
        except RedisError as e:
            logger.error(f"Redis error checking key {prefixed_key}: {str(e)}")
            raise CacheError(f"Redis error checking key {key}: {str(e)}", e)

        return result > 0

    async def close(self) -> None:
        await self.client.aclose()
