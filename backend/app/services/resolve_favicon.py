"""Resolution Orchestrator — cache-aside favicon lookup for a normalized target.

Invariants:
    - Cache lookup by hostname happens first; a hit is returned verbatim
    - On miss, discovery runs exactly once and only its first result is used
    - Discovery empty or faulted → FaviconNotFoundError, nothing is cached
    - The returned icon URL is always absolute
    - Cache faults never fail a request: read fault = miss, write fault = logged

Design Decisions:
    - ResolutionOutcome records cache_hit / cache_written instead of raising on
      write failure: callers see the write result without it gating the response
    - No locking or in-flight coalescing: concurrent misses for one hostname
      both discover and write the same value
    - Fetchers handed to discovery are bound to the page origin, so discovery
      may pass relative references ("/", "/manifest.json")
"""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from pydantic import ValidationError

from app.core.domain_types import (
    FAVICON_CACHE_TTL_SECONDS, Hostname, PageOrigin, ResolutionTarget,
)
from app.core.errors import DatabaseError, FaviconNotFoundError
from app.core.repository_protocols import (
    BytesFetch, CacheStore, Discover, Fetcher, TextFetch,
)
from app.core.resolve_urls import absolutize_icon_url, resolve_reference
from app.infrastructure.favicon_discovery import parse_favicon
from app.schemas.favicon import IconDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionOutcome:
    """Successful resolution. cache_written is None on a hit (no write attempted)."""
    icon: IconDescriptor
    cache_hit: bool
    cache_written: bool | None = None


def bind_fetchers(
    fetcher: Fetcher, page_origin: PageOrigin,
) -> tuple[TextFetch, BytesFetch]:
    """Fetch functions that resolve each reference against page_origin first."""

    async def text_fetch(reference: str) -> str:
        return await fetcher.fetch_text(resolve_reference(reference, page_origin))

    async def bytes_fetch(reference: str) -> bytes:
        return await fetcher.fetch_bytes(resolve_reference(reference, page_origin))

    return text_fetch, bytes_fetch


async def first_icon(icons: AsyncIterator[IconDescriptor]) -> IconDescriptor | None:
    """First item of a lazy icon sequence; the sequence is closed afterwards."""
    try:
        async for icon in icons:
            return icon
        return None
    finally:
        aclose = getattr(icons, "aclose", None)
        if aclose is not None:
            await aclose()


def absolutize_icon(icon: IconDescriptor, page_origin: PageOrigin) -> IconDescriptor:
    url = absolutize_icon_url(icon.url, page_origin)
    if url == icon.url:
        return icon
    return icon.model_copy(update={"url": url})


class FaviconResolver:
    """Cache-aside orchestration around favicon discovery."""

    def __init__(
        self,
        cache: CacheStore,
        fetcher: Fetcher,
        discover: Discover = parse_favicon,
        ttl_seconds: int = FAVICON_CACHE_TTL_SECONDS,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.discover = discover
        self.ttl_seconds = ttl_seconds

    async def resolve(self, target: ResolutionTarget) -> ResolutionOutcome:
        cached = await self._read_cache(target.hostname)
        if cached is not None:
            logger.info(
                "Got cached favicon",
                extra={"hostname": target.hostname, "cache_hit": True},
            )
            return ResolutionOutcome(icon=cached, cache_hit=True)

        icon = await self._discover(target)
        icon = absolutize_icon(icon, target.page_origin)
        written = await self._write_cache(target.hostname, icon)
        return ResolutionOutcome(icon=icon, cache_hit=False, cache_written=written)

    async def _read_cache(self, hostname: Hostname) -> IconDescriptor | None:
        try:
            value = await self.cache.get(hostname)
        except (DatabaseError, OSError) as e:
            logger.warning(
                f"Cache read failed, treating as miss: {e}",
                extra={"cache_key": hostname},
            )
            return None
        if value is None:
            return None
        try:
            return IconDescriptor.model_validate(value)
        except ValidationError:
            logger.warning(
                "Cached value is not an icon, treating as miss",
                extra={"cache_key": hostname},
            )
            return None

    async def _discover(self, target: ResolutionTarget) -> IconDescriptor:
        text_fetch, bytes_fetch = bind_fetchers(self.fetcher, target.page_origin)
        try:
            icon = await first_icon(
                self.discover(target.hostname, text_fetch, bytes_fetch),
            )
        except Exception as e:
            logger.info(
                f"Favicon discovery failed: {e}",
                extra={"hostname": target.hostname, "page_origin": target.page_origin},
            )
            raise FaviconNotFoundError(target.hostname) from e
        if icon is None:
            logger.info(
                "Favicon discovery found nothing",
                extra={"hostname": target.hostname, "page_origin": target.page_origin},
            )
            raise FaviconNotFoundError(target.hostname)
        return icon

    async def _write_cache(self, hostname: Hostname, icon: IconDescriptor) -> bool:
        logger.info(
            "Caching favicon",
            extra={"hostname": hostname, "url": icon.url, "ttl_seconds": self.ttl_seconds},
        )
        try:
            await self.cache.set(hostname, icon.to_json(), self.ttl_seconds)
        except (DatabaseError, OSError) as e:
            logger.warning(
                f"Cache write failed, result not cached: {e}",
                extra={"cache_key": hostname},
            )
            return False
        return True
