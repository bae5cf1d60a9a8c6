"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols (CacheStore, Fetcher, Discover)
    - All external failures mapped to core/ error types

Design Decisions:
    - Thin wrappers over raw clients (SQLAlchemy, httpx): one place for timeouts
      and error mapping
"""
