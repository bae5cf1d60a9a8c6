"""SQL Cache Store — get/set contract over an in-memory SQLite database.

Invariants:
    - Missing and expired keys read as None
    - set() overwrites and restarts the TTL
    - Default TTL comes from the store, explicit TTL wins
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from app.core.errors import DatabaseError
from app.infrastructure.cache_store import SqlCacheStore
from app.models.cache_entry import CacheEntry


@pytest.fixture
def store(test_db_manager):
    return SqlCacheStore(test_db_manager)


async def _expires_at(db_manager, key):
    async with db_manager.session() as db:
        result = await db.execute(
            select(CacheEntry.expires_at).where(CacheEntry.key == key),
        )
        value = result.scalar_one()
    return value.replace(tzinfo=value.tzinfo or timezone.utc)


async def test_missing_key_returns_none(store):
    assert await store.get("example.com") is None


async def test_set_then_get_round_trips_json(store):
    value = {"url": "https://example.com/icon.png", "size": {"width": 32, "height": 32}}

    await store.set("example.com", value, ttl_seconds=60)

    assert await store.get("example.com") == value


async def test_set_overwrites_previous_value(store):
    await store.set("example.com", {"url": "https://example.com/old.png"}, ttl_seconds=60)
    await store.set("example.com", {"url": "https://example.com/new.png"}, ttl_seconds=60)

    assert await store.get("example.com") == {"url": "https://example.com/new.png"}


async def test_expired_entry_reads_as_none(store):
    await store.set("example.com", {"url": "https://example.com/icon.png"}, ttl_seconds=-1)

    assert await store.get("example.com") is None


async def test_expired_entry_can_be_rewritten(store):
    await store.set("example.com", {"url": "https://example.com/old.png"}, ttl_seconds=-1)
    await store.set("example.com", {"url": "https://example.com/new.png"}, ttl_seconds=60)

    assert await store.get("example.com") == {"url": "https://example.com/new.png"}


async def test_keys_are_independent(store):
    await store.set("a.example.com", {"url": "https://a.example.com/i.png"}, ttl_seconds=60)

    assert await store.get("b.example.com") is None


async def test_default_ttl_is_24_hours(store, test_db_manager):
    before = datetime.now(timezone.utc)
    await store.set("example.com", {"url": "https://example.com/icon.png"})

    expires_at = await _expires_at(test_db_manager, "example.com")

    assert timedelta(hours=23, minutes=59) < expires_at - before <= timedelta(hours=24, seconds=5)


async def test_explicit_ttl_overrides_default(test_db_manager):
    store = SqlCacheStore(test_db_manager, default_ttl_seconds=10)
    before = datetime.now(timezone.utc)

    await store.set("example.com", {"url": "https://example.com/icon.png"}, ttl_seconds=30 * 86400)

    expires_at = await _expires_at(test_db_manager, "example.com")
    assert expires_at - before > timedelta(days=29)


async def test_missing_table_raises_database_error(test_engine, test_db_manager):
    async with test_engine.begin() as conn:
        await conn.run_sync(CacheEntry.__table__.drop)
    store = SqlCacheStore(test_db_manager)

    with pytest.raises(DatabaseError):
        await store.get("example.com")

    async with test_engine.begin() as conn:
        await conn.run_sync(CacheEntry.__table__.create)
