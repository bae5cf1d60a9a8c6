"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Cache values are plain JSON-able dicts: the store never knows about IconDescriptor
    - Discovery returns an async iterator: lazily produced, consumer takes the first item
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

from app.core.domain_types import Hostname

if TYPE_CHECKING:
    from app.schemas.favicon import IconDescriptor


TextFetch = Callable[[str], Awaitable[str]]
BytesFetch = Callable[[str], Awaitable[bytes]]


class CacheStore(Protocol):
    """Contract for the key-value cache — implemented by shell."""
    async def get(self, key: str) -> dict | None: ...
    async def set(
        self, key: str, value: dict, ttl_seconds: int | None = None,
    ) -> None: ...


class Fetcher(Protocol):
    """Contract for network fetches of absolute URLs — implemented by shell."""
    async def fetch_text(self, url: str) -> str: ...
    async def fetch_bytes(self, url: str) -> bytes: ...


class Discover(Protocol):
    """Contract for favicon discovery — yields candidate icons lazily."""
    def __call__(
        self, hostname: Hostname, text_fetch: TextFetch, bytes_fetch: BytesFetch,
    ) -> AsyncIterator["IconDescriptor"]: ...
