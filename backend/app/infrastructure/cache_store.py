"""SQL Cache Store — CacheStore protocol implemented over the cache_entries table.

Invariants:
    - get() never returns an expired value
    - set() overwrites any previous value for the key and restarts its TTL
    - set() without a TTL uses the store default (24h unless configured)
    - Failures surface as DatabaseError (mapped by DatabaseSessionManager)

Design Decisions:
    - session.merge() as upsert: portable across PostgreSQL and SQLite; a lost
      race between two writers of the same key only costs one failed write
    - Expiry compared in SQL so the database clock and index do the work
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from app.core.domain_types import DEFAULT_CACHE_TTL_SECONDS
from app.infrastructure.database import DatabaseSessionManager
from app.models.cache_entry import CacheEntry

logger = logging.getLogger(__name__)


class SqlCacheStore:
    """Key/value cache with per-entry TTL, stored in the application database."""

    def __init__(
        self, db_manager: DatabaseSessionManager,
        default_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ):
        self._db = db_manager
        self.default_ttl_seconds = default_ttl_seconds

    async def get(self, key: str) -> dict | None:
        now = datetime.now(timezone.utc)
        async with self._db.session() as db:
            result = await db.execute(
                select(CacheEntry.value)
                .where(CacheEntry.key == key)
                .where(CacheEntry.expires_at > now),
            )
            return result.scalar_one_or_none()

    async def set(
        self, key: str, value: dict, ttl_seconds: int | None = None,
    ) -> None:
        if ttl_seconds is None:
            ttl_seconds = self.default_ttl_seconds
        now = datetime.now(timezone.utc)
        logger.info(
            "Attempting to cache",
            extra={"cache_key": key, "ttl_seconds": ttl_seconds},
        )
        async with self._db.session() as db:
            await db.merge(CacheEntry(
                key=key,
                value=value,
                expires_at=now + timedelta(seconds=ttl_seconds),
                created_at=now,
            ))
            await db.commit()
