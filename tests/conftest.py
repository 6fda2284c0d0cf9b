"""Shared fixtures: an in-memory cache and a fake Letterboxd."""
import httpx
import pytest
from fastapi.testclient import TestClient

from tmdb2boxd.core.config import Settings
from tmdb2boxd.infrastructure.cache.memory_cache import MemoryCache
from tmdb2boxd.main import create_application

INCEPTION_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta property="og:title" content="Inception" />
<meta property="og:description" content="A thief who steals secrets." />
<meta property="og:url" content="https://letterboxd.com/film/inception/" />
<link rel="shortlink" href="https://boxd.it/1G1Jz" />
</head>
<body><h1>Inception</h1></body>
</html>
"""


class FakeLetterboxd:
    """Serves canned pages per TMDB id and counts requests."""

    def __init__(self):
        self.pages = {}
        self.calls = []

    def add_film(self, tmdb_id, slug, html, status_code=200):
        self.pages[tmdb_id] = (slug, html, status_code)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path

        if path.startswith("/tmdb/"):
            tmdb_id = path[len("/tmdb/"):]
            if tmdb_id not in self.pages:
                return httpx.Response(404, text="<html>Not found</html>")
            slug, _, _ = self.pages[tmdb_id]
            return httpx.Response(302, headers={"Location": f"https://letterboxd.com/film/{slug}/"})

        if path.startswith("/film/"):
            slug = path.strip("/").split("/")[-1]
            for page_slug, html, status_code in self.pages.values():
                if page_slug == slug:
                    return httpx.Response(status_code, text=html)

        return httpx.Response(404, text="<html>Not found</html>")


@pytest.fixture
def settings():
    return Settings(
        CACHE_BACKEND="memory",
        MEMORY_CACHE_CLEANUP_INTERVAL=0,
        ENABLE_STRUCTURED_LOGGING=False,
    )


@pytest.fixture
def cache():
    return MemoryCache(default_ttl=60, cleanup_interval=0)


@pytest.fixture
def letterboxd():
    fake = FakeLetterboxd()
    fake.add_film("27205", "inception", INCEPTION_PAGE)
    return fake


@pytest.fixture
def http_client(letterboxd):
    return httpx.AsyncClient(transport=httpx.MockTransport(letterboxd.handler))


@pytest.fixture
def client(settings, cache, http_client):
    app = create_application(settings=settings, cache=cache, http_client=http_client)
    with TestClient(app) as test_client:
        yield test_client
