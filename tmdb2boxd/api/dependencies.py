from fastapi import Depends, Request
import httpx

from tmdb2boxd.adapters.implementations.letterboxd import LetterboxdAdaptor
from tmdb2boxd.adapters.interfaces.cache import CacheStrategy
from tmdb2boxd.core.config import Settings
from tmdb2boxd.services.lookup_service import LookupService


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_cache_service(request: Request) -> CacheStrategy:
    """
    Dependency for providing the cache backend.

    The backend is created once per application and handed to each request,
    so handlers never reach for a module-level instance.
    """
    return request.app.state.cache


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Dependency for providing the shared outbound HTTP client."""
    return request.app.state.http_client


def get_letterboxd_adaptor(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> LetterboxdAdaptor:
    """
    Dependency for providing the Letterboxd adaptor.

    Returns:
        LetterboxdAdaptor configured with browser-like request headers
    """
    return LetterboxdAdaptor(
        http_client=http_client,
        base_url=settings.LETTERBOXD_BASE_URL,
        headers={
            "User-Agent": settings.USER_AGENT,
            "Accept": settings.ACCEPT,
            "Accept-Language": settings.ACCEPT_LANGUAGE,
        },
        timeout=settings.FETCH_TIMEOUT,
    )


def get_lookup_service(
    cache: CacheStrategy = Depends(get_cache_service),
    adaptor: LetterboxdAdaptor = Depends(get_letterboxd_adaptor),
    settings: Settings = Depends(get_app_settings),
) -> LookupService:
    """Dependency for providing the read-through lookup service."""
    return LookupService(
        cache=cache,
        adaptor=adaptor,
        ttl=settings.CACHE_TTL,
        key_prefix=settings.CACHE_KEY_PREFIX,
    )
