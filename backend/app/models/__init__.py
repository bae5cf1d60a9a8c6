"""ORM Models — SQLAlchemy declarative models for persisted state.

Invariants:
    - All models inherit from Base (db/base.py)
    - The cache table is the only persisted state; everything else is per-request

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all() or alembic autogenerate runs
"""

from app.models.cache_entry import CacheEntry  # noqa: F401
