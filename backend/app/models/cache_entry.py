"""CacheEntry ORM — key/value rows backing the favicon cache.

Invariants:
    - key is the primary key (one live value per hostname)
    - A row is live only while expires_at is in the future
    - value is the JSON form of an IconDescriptor; the table never interprets it

Design Decisions:
    - Expiry checked at read time, not swept: an expired row is simply
      overwritten by the next write for the same key
    - JSON column: same column type on PostgreSQL and SQLite
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class CacheEntry(Base):
    """One cached value with its expiry."""
    __tablename__ = "cache_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
