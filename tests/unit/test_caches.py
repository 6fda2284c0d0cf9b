"""Unit tests for the cache backends."""
import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tmdb2boxd.core.config import Settings
from tmdb2boxd.core.exceptions import CacheError
from tmdb2boxd.infrastructure.cache import MemoryCache, RedisCache, create_cache


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_set_then_get(self):
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.set("tmdb_1", '{"a": 1}', 60))
        assert asyncio.run(cache.get("tmdb_1")) == '{"a": 1}'

    def test_missing_key(self):
        cache = MemoryCache(cleanup_interval=0)
        assert asyncio.run(cache.get("tmdb_1")) is None
        assert asyncio.run(cache.exists("tmdb_1")) is False

    def test_expired_item_is_a_miss(self):
        """Items past their expiry are dropped on read."""
        cache = MemoryCache(cleanup_interval=0)
        with patch("tmdb2boxd.infrastructure.cache.memory_cache.time.time", return_value=1000.0):
            asyncio.run(cache.set("tmdb_1", "x", 10))
        with patch("tmdb2boxd.infrastructure.cache.memory_cache.time.time", return_value=1011.0):
            assert asyncio.run(cache.get("tmdb_1")) is None
        assert asyncio.run(cache.exists("tmdb_1")) is False

    def test_ttl_reports_remaining_seconds(self):
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.set("tmdb_1", "x", 604800))
        assert 604790 < cache.ttl("tmdb_1") <= 604800

    def test_default_ttl_used(self):
        cache = MemoryCache(default_ttl=30, cleanup_interval=0)
        asyncio.run(cache.set("k", "v"))
        assert 0 < cache.ttl("k") <= 30

    def test_delete(self):
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.set("k", "v"))
        assert asyncio.run(cache.delete("k")) is True
        assert asyncio.run(cache.delete("k")) is False

    def test_cleanup_removes_expired(self):
        cache = MemoryCache(cleanup_interval=0)
        with patch("tmdb2boxd.infrastructure.cache.memory_cache.time.time", return_value=1000.0):
            asyncio.run(cache.set("old", "x", 1))
            asyncio.run(cache.set("new", "y", 100))
        with patch("tmdb2boxd.infrastructure.cache.memory_cache.time.time", return_value=1050.0):
            assert cache._cleanup_expired() == 1
            assert asyncio.run(cache.exists("new")) is True
        assert "old" not in cache._cache

    def test_get_json(self):
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.put_json("k", {"title": "Inception"}))
        assert asyncio.run(cache.get_json("k")) == {"title": "Inception"}

    def test_get_json_with_corrupt_value(self):
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.set("k", "{broken"))
        assert asyncio.run(cache.get_json("k")) is None


class TestRedisCache:
    """Tests for RedisCache against a mocked client."""

    def test_get_uses_unprefixed_key_by_default(self):
        client = AsyncMock()
        client.get.return_value = '{"a": 1}'
        cache = RedisCache(client=client)

        assert asyncio.run(cache.get("tmdb_27205")) == '{"a": 1}'
        client.get.assert_awaited_once_with("tmdb_27205")

    def test_prefix_applied(self):
        client = AsyncMock()
        client.get.return_value = None
        cache = RedisCache(client=client, prefix="tmdb2boxd")

        assert asyncio.run(cache.get("tmdb_1")) is None
        client.get.assert_awaited_once_with("tmdb2boxd:tmdb_1")

    def test_bytes_are_decoded(self):
        client = AsyncMock()
        client.get.return_value = b'{"a": 1}'
        cache = RedisCache(client=client)
        assert asyncio.run(cache.get("k")) == '{"a": 1}'

    def test_set_uses_setex(self):
        client = AsyncMock()
        client.setex.return_value = True
        cache = RedisCache(client=client)

        assert asyncio.run(cache.set("tmdb_1", json.dumps({"a": 1}), 604800)) is True
        client.setex.assert_awaited_once_with("tmdb_1", 604800, '{"a": 1}')

    def test_redis_error_wrapped(self):
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("connection refused")
        cache = RedisCache(client=client)

        with pytest.raises(CacheError):
            asyncio.run(cache.get("k"))

    def test_delete_and_exists(self):
        client = AsyncMock()
        client.delete.return_value = 1
        client.exists.return_value = 0
        cache = RedisCache(client=client)

        assert asyncio.run(cache.delete("k")) is True
        assert asyncio.run(cache.exists("k")) is False


class TestCreateCache:
    """Tests for backend selection."""

    def test_memory_backend(self):
        cache = create_cache(Settings(CACHE_BACKEND="memory", MEMORY_CACHE_CLEANUP_INTERVAL=0))
        assert isinstance(cache, MemoryCache)
        assert cache.default_ttl == 604800

    def test_redis_backend(self):
        cache = create_cache(Settings(CACHE_BACKEND="redis", REDIS_HOST="cache.internal"))
        assert isinstance(cache, RedisCache)
        assert cache.default_ttl == 604800

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            Settings(CACHE_BACKEND="memcached")
