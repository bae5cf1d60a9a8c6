"""HTTP Fetcher — shared httpx client wrapped behind the Fetcher protocol.

Invariants:
    - One AsyncClient per process, built in the lifespan and closed on shutdown
    - Transport errors and HTTP status >= 400 both raise FetchError
    - Only absolute URLs reach this layer (resolution happens in the caller)

Design Decisions:
    - Builder function centralizes timeout, headers and redirect policy so
      every fetch behaves the same
    - Status >= 400 treated as a fault: an error page is never a favicon
      or a manifest
"""

import logging

import httpx

from app.config import Settings
from app.core.errors import FetchError

logger = logging.getLogger(__name__)


def build_async_client(settings: Settings) -> httpx.AsyncClient:
    """Create the process-wide AsyncClient from settings."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        max_redirects=settings.http_max_redirects,
        headers={
            "User-Agent": settings.http_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
    )


class HttpFetcher:
    """Fetches absolute URLs as text or bytes."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def fetch_text(self, url: str) -> str:
        response = await self._get(url)
        return response.text

    async def fetch_bytes(self, url: str) -> bytes:
        response = await self._get(url)
        return response.content

    async def _get(self, url: str) -> httpx.Response:
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Fetch failed: {e!r}", extra={"url": url})
            raise FetchError(url, type(e).__name__) from e
        if response.status_code >= 400:
            raise FetchError(
                url, f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response
