import logging
from typing import Optional

from tmdb2boxd.adapters.interfaces.cache import CacheStrategy
from tmdb2boxd.adapters.interfaces.external_api import ExternalAPIAdaptorInterface
from tmdb2boxd.domain.models.record import ResolvedRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL = 604800  # 7 days


class LookupService:
    """Resolves TMDB ids to Letterboxd records through a read-through cache."""

    def __init__(
        self,
        cache: CacheStrategy,
        adaptor: ExternalAPIAdaptorInterface,
        ttl: int = DEFAULT_TTL,
        key_prefix: str = "tmdb_",
    ):
        """Initialize with the cache backend and the site adaptor."""
        self.cache = cache
        self.adaptor = adaptor
        self.ttl = ttl
        self.key_prefix = key_prefix

    def cache_key(self, tmdb_id: str) -> str:
        return f"{self.key_prefix}{tmdb_id}"

    async def get_cached(self, tmdb_id: str) -> Optional[ResolvedRecord]:
        """Returns the cached record, or None on a miss or an unreadable entry."""
        key = self.cache_key(tmdb_id)
        data = await self.cache.get_json(key)
        if data is None:
            return None

        try:
            return ResolvedRecord.from_dict(data)
        except ValueError as e:
            logger.warning(f"Ignoring malformed cache entry {key}: {str(e)}")
            return None

    async def resolve(self, tmdb_id: str) -> Optional[ResolvedRecord]:
        """
        Resolves a TMDB id.

        Only a complete record is written to the cache, so a miss is retried
        on the next request.

        Raises:
            IntegrationException: If Letterboxd cannot be reached
            CacheError: If the cache backend fails
        """
        record = await self.get_cached(tmdb_id)
        if record is not None:
            logger.debug(f"Serving TMDB id {tmdb_id} from cache")
            return record

        logger.info(f"Cache miss for TMDB id {tmdb_id}, fetching from Letterboxd")
        record = await self.adaptor.fetch_and_normalize(tmdb_id)
        if record is None:
            return None

        await self.cache.set(self.cache_key(tmdb_id), record.to_json(), self.ttl)
        logger.info(f"Resolved TMDB id {tmdb_id} to Letterboxd film {record.letterboxd_id}")
        return record
