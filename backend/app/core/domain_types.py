"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Hostname is the cache key; PageOrigin is the base for every relative reference
    - ResolutionTarget is derived once per request and never mutated
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

Hostname = NewType("Hostname", str)       # e.g. "sub.example.com"
PageOrigin = NewType("PageOrigin", str)   # e.g. "https://sub.example.com:8443"


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_CACHE_TTL_SECONDS = 60 * 60 * 24          # 24 hours
FAVICON_CACHE_TTL_SECONDS = 60 * 60 * 24 * 30     # 30 days

DEFAULT_PORTS = {"http": 80, "https": 443}


# ─── Enums ───────────────────────────────────────────────────────

class QueryField(str, Enum):
    """The two mutually exclusive query parameters of the lookup endpoint."""
    DOMAIN = "domain"
    URL = "url"


# ─── Derived Request ─────────────────────────────────────────────

@dataclass(frozen=True)
class ResolutionTarget:
    """Normalized lookup input: who to ask for an icon, and where relative links point."""
    hostname: Hostname
    page_origin: PageOrigin
