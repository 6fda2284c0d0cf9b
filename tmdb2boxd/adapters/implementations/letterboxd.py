"""
Letterboxd adaptor.

Letterboxd has no public API for TMDB lookups, but ``/tmdb/{id}`` redirects
to the film page. The film is identified from the page's Open Graph meta
tags and its ``boxd.it`` short link.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from tmdb2boxd.adapters.interfaces.external_api import ExternalAPIAdaptorInterface
from tmdb2boxd.core.exceptions import IntegrationException
from tmdb2boxd.core.logging import get_logger
from tmdb2boxd.domain.models.record import ResolvedRecord

logger = get_logger(__name__)

SHORT_LINK_RE = re.compile(r'boxd\.it/([a-zA-Z0-9]+)')
OG_TITLE_RE = re.compile(r'<meta\s+property="og:title"\s+content="([^"]+)"')
OG_DESCRIPTION_RE = re.compile(r'<meta\s+property="og:description"\s+content="([^"]+)"')
OG_URL_RE = re.compile(r'<meta\s+property="og:url"\s+content="([^"]+)"')

# Applied in order, so "&amp;lt;" becomes "<"
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
    ("&apos;", "'"),
)


def decode_html(text: str) -> str:
    """Decode the handful of entities Letterboxd emits in meta content."""
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _first_group(pattern: re.Pattern, html: str) -> Optional[str]:
    match = pattern.search(html)
    return match.group(1) if match else None


@dataclass
class FetchedPage:
    """Raw page returned by Letterboxd after following redirects."""

    html: str
    final_url: str


def extract_record(html: str, final_url: str, tmdb_id: str) -> Optional[ResolvedRecord]:
    """
    Extract a record from a Letterboxd film page.

    Args:
        html: Page body
        final_url: URL the request ended on after redirects
        tmdb_id: TMDB id the page was requested for

    Returns:
        The record, or None if the short link or title is missing
    """
    letterboxd_id = _first_group(SHORT_LINK_RE, html)

    title = _first_group(OG_TITLE_RE, html)
    if title is not None:
        title = decode_html(title)

    description = _first_group(OG_DESCRIPTION_RE, html)
    if description is not None:
        description = decode_html(description)

    url = _first_group(OG_URL_RE, html) or final_url

    if not letterboxd_id or not title:
        return None

    return ResolvedRecord(
        letterboxd_id=letterboxd_id,
        title=title,
        description=description or "",
        url=url,
        tmdb_id=tmdb_id,
    )


class LetterboxdAdaptor(ExternalAPIAdaptorInterface[FetchedPage, ResolvedRecord]):
    """Resolves TMDB ids through Letterboxd's TMDB redirect pages."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = "https://letterboxd.com",
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the adaptor.

        Args:
            http_client: Shared async HTTP client
            base_url: Letterboxd base URL
            headers: Request headers sent with every fetch
            timeout: Per-request timeout in seconds; None keeps the client's
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout

    def build_url(self, tmdb_id: str) -> str:
        return f"{self.base_url}/tmdb/{tmdb_id}"

    async def fetch(self, resource_id: str, **kwargs) -> Optional[FetchedPage]:
        """
        Fetch the Letterboxd page for a TMDB id.

        Returns:
            The page, or None if Letterboxd answered with a non-success status

        Raises:
            IntegrationException: On transport errors (connect, timeout, redirects)
        """
        url = self.build_url(resource_id)
        request_kwargs: Dict[str, Any] = {
            "headers": self.headers,
            "follow_redirects": True,
        }
        if self.timeout is not None:
            request_kwargs["timeout"] = self.timeout

        try:
            response = await self.http_client.get(url, **request_kwargs)
        except httpx.RequestError as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise IntegrationException(
                detail="Failed to reach Letterboxd",
                code="letterboxd_unreachable",
                context={"tmdbId": resource_id},
                original_exception=e,
            )

        if not response.is_success:
            logger.info(f"Letterboxd returned {response.status_code} for TMDB id {resource_id}")
            return None

        return FetchedPage(html=response.text, final_url=str(response.url))

    def normalize(self, data: FetchedPage, resource_id: str) -> Optional[ResolvedRecord]:
        record = extract_record(data.html, data.final_url, resource_id)
        if record is None:
            logger.info(f"Letterboxd page for TMDB id {resource_id} lacks a short link or title")
        return record
