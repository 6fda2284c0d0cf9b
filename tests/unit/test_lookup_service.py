"""Unit tests for the read-through lookup service."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from tmdb2boxd.core.exceptions import IntegrationException
from tmdb2boxd.domain.models.record import ResolvedRecord
from tmdb2boxd.infrastructure.cache.memory_cache import MemoryCache
from tmdb2boxd.services.lookup_service import LookupService

INCEPTION = ResolvedRecord(
    letterboxd_id="1G1Jz",
    title="Inception",
    description="A thief who steals secrets.",
    url="https://letterboxd.com/film/inception/",
    tmdb_id="27205",
)


def make_adaptor(result=None, error=None):
    adaptor = MagicMock()
    adaptor.fetch_and_normalize = AsyncMock(return_value=result, side_effect=error)
    return adaptor


class TestLookupService:
    """Tests for LookupService.resolve."""

    def test_cache_hit_skips_fetch(self):
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.set("tmdb_27205", INCEPTION.to_json(), 60))
        adaptor = make_adaptor()

        record = asyncio.run(LookupService(cache, adaptor).resolve("27205"))

        assert record == INCEPTION
        adaptor.fetch_and_normalize.assert_not_awaited()

    def test_miss_fetches_and_caches_for_a_week(self):
        cache = MemoryCache(cleanup_interval=0)
        adaptor = make_adaptor(result=INCEPTION)

        record = asyncio.run(LookupService(cache, adaptor).resolve("27205"))

        assert record == INCEPTION
        adaptor.fetch_and_normalize.assert_awaited_once_with("27205")
        assert ResolvedRecord.from_json(asyncio.run(cache.get("tmdb_27205"))) == INCEPTION
        assert 604790 < cache.ttl("tmdb_27205") <= 604800

    def test_not_found_is_not_cached(self):
        cache = MemoryCache(cleanup_interval=0)
        adaptor = make_adaptor(result=None)

        assert asyncio.run(LookupService(cache, adaptor).resolve("1")) is None
        assert asyncio.run(cache.exists("tmdb_1")) is False

    def test_malformed_cache_entry_treated_as_miss(self):
        """A cached value without the record shape triggers a fresh scrape."""
        cache = MemoryCache(cleanup_interval=0)
        asyncio.run(cache.set("tmdb_27205", '{"title": "Inception"}', 60))
        adaptor = make_adaptor(result=INCEPTION)

        assert asyncio.run(LookupService(cache, adaptor).resolve("27205")) == INCEPTION
        adaptor.fetch_and_normalize.assert_awaited_once()

    def test_integration_errors_propagate(self):
        cache = MemoryCache(cleanup_interval=0)
        adaptor = make_adaptor(error=IntegrationException(detail="Failed to reach Letterboxd"))

        with pytest.raises(IntegrationException):
            asyncio.run(LookupService(cache, adaptor).resolve("27205"))
        assert asyncio.run(cache.exists("tmdb_27205")) is False

    def test_custom_key_prefix(self):
        service = LookupService(MemoryCache(cleanup_interval=0), make_adaptor(), key_prefix="movie:")
        assert service.cache_key("27205") == "movie:27205"
