import time
import threading
from typing import Dict, Optional

from tmdb2boxd.core.logging import get_logger
from tmdb2boxd.adapters.interfaces.cache import CacheStrategy

logger = get_logger(__name__)


class CacheItem:
    """Class representing a cached item with expiration."""

    def __init__(self, value: str, expires_at: Optional[float] = None):
        """
        Initialize a cache item.

        Args:
            value: Cached value
            expires_at: Expiration timestamp
        """
        self.value = value
        self.expires_at = expires_at

    def is_expired(self) -> bool:
        """
        Check if the item has expired.

        Returns:
            True if expired
        """
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at


class MemoryCache(CacheStrategy):
    """In-memory implementation of the CacheStrategy interface."""

    def __init__(self, default_ttl: int = 300, cleanup_interval: int = 60):
        """
        Initialize the in-memory cache.

        Args:
            default_ttl: Default TTL in seconds
            cleanup_interval: Interval for expired items cleanup in seconds;
                0 disables the cleanup thread
        """
        self.default_ttl = default_ttl
        self.cleanup_interval = cleanup_interval

        self._cache: Dict[str, CacheItem] = {}
        self._lock = threading.RLock()

        if cleanup_interval > 0:
            self._start_cleanup_thread()

        logger.info("In-memory cache initialized")

    def _start_cleanup_thread(self):
        """Start a background thread to clean up expired items."""
        def cleanup_task():
            while True:
                time.sleep(self.cleanup_interval)
                try:
                    self._cleanup_expired()
                except Exception as e:
                    logger.error(f"Error in cache cleanup thread: {str(e)}")

        cleanup_thread = threading.Thread(target=cleanup_task, daemon=True)
        cleanup_thread.start()
        logger.debug(f"Started cache cleanup thread with interval {self.cleanup_interval}s")

    def _cleanup_expired(self) -> int:
        """Clean up expired cache items."""
        with self._lock:
            keys_to_delete = [key for key, item in self._cache.items() if item.is_expired()]

            for key in keys_to_delete:
                del self._cache[key]

            if keys_to_delete:
                logger.debug(f"Cleaned up {len(keys_to_delete)} expired cache items")
            return len(keys_to_delete)

    async def get(self, key: str) -> Optional[str]:
        """
        Get item from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found or expired
        """
        with self._lock:
            item = self._cache.get(key)

            if item is None:
                logger.debug(f"Cache miss for key: {key}")
                return None

            if item.is_expired():
                del self._cache[key]
                logger.debug(f"Cache miss (expired) for key: {key}")
                return None

            logger.debug(f"Cache hit for key: {key}")
            return item.value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Set item in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: TTL in seconds

        Returns:
            True if successful
        """
        effective_ttl = ttl if ttl is not None else self.default_ttl

        expires_at = None
        if effective_ttl > 0:
            expires_at = time.time() + effective_ttl

        with self._lock:
            self._cache[key] = CacheItem(value=value, expires_at=expires_at)

        logger.debug(f"Set cache key {key} with TTL {effective_ttl}s")
        return True

    async def delete(self, key: str) -> bool:
        """
        Remove item from cache.

        Args:
            key: Cache key

        Returns:
            True if key was found and deleted
        """
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                logger.debug(f"Deleted cache key: {key}")
                return True

            logger.debug(f"Key not found for deletion: {key}")
            return False

    async def exists(self, key: str) -> bool:
        """
        Check if key exists in cache.

        Args:
            key: Cache key

        Returns:
            True if key exists and has not expired
        """
        with self._lock:
            item = self._cache.get(key)
            if item is None:
                return False

            if item.is_expired():
                del self._cache[key]
                return False

            return True

    def ttl(self, key: str) -> Optional[float]:
        """Seconds until the key expires, or None if missing or without expiry."""
        with self._lock:
            item = self._cache.get(key)
            if item is None or item.expires_at is None:
                return None
            return item.expires_at - time.time()
