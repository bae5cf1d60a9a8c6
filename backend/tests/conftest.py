"""Root conftest — shared test configuration.

Invariants:
    - Tests never talk to a real PostgreSQL or the network
    - test_db_manager is a fresh in-memory SQLite database with all tables created
"""

import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from app.infrastructure.database import DatabaseSessionManager  # noqa: E402


@pytest.fixture
async def test_db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def test_engine(test_db_manager):
    return test_db_manager.engine
