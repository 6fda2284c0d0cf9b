from abc import ABC, abstractmethod
from typing import Any, Optional
import json
import logging

logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Abstract base interface for caching strategies.

    Defines the key/value contract the lookup service relies on. Values are
    JSON strings; expiry is given per write in seconds.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Retrieves a cached item by key.

        Args:
            key: The key of the item to retrieve

        Returns:
            Optional[str]: The cached value if found and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Stores an item in the cache.

        Args:
            key: The key to store the value under
            value: The serialized value to store
            ttl: Optional time-to-live in seconds

        Returns:
            bool: True if successfully cached, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Removes an item from the cache.

        Args:
            key: The key of the item to remove

        Returns:
            bool: True if the key was present and removed
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Checks if a key exists in the cache.

        Args:
            key: The key to check

        Returns:
            bool: True if the key exists and has not expired
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None

    async def get_json(self, key: str) -> Optional[Any]:
        """
        Retrieves a cached item and decodes it as JSON.

        Returns:
            The decoded value, or None if missing or not valid JSON
        """
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding undecodable cache value for key: {key}")
            return None

    async def put_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Serializes a value as JSON and stores it."""
        return await self.set(key, json.dumps(value), ttl)
