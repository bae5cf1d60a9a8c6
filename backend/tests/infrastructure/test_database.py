"""Database Session Manager — schema creation, health check, singleton lifecycle."""

from sqlalchemy import inspect

import app.infrastructure.database as database
from app.infrastructure.database import DatabaseSessionManager


async def test_health_check_true_for_live_engine(test_db_manager):
    assert await test_db_manager.health_check() is True


async def test_create_schema_creates_cache_table():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()

    async with manager.engine.connect() as conn:
        tables = await conn.run_sync(lambda c: inspect(c).get_table_names())

    assert "cache_entries" in tables
    await manager.dispose()


async def test_init_and_close_db(monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)

    manager = database.init_db("sqlite+aiosqlite:///:memory:", pool_size=5)
    assert database.db_manager is manager

    await database.close_db()
    assert database.db_manager is None
