"""Domain Types — verifies value types, constants, and the resolution target.

Tests:
    - NewType wrappers are plain strings at runtime
    - TTL constants: 24h default, 30 days for favicons
    - ResolutionTarget is immutable
"""

import dataclasses

import pytest

from app.core.domain_types import (
    DEFAULT_CACHE_TTL_SECONDS,
    FAVICON_CACHE_TTL_SECONDS,
    Hostname,
    PageOrigin,
    QueryField,
    ResolutionTarget,
)


def test_value_types_wrap_str():
    assert Hostname("example.com") == "example.com"
    assert PageOrigin("https://example.com") == "https://example.com"


def test_ttl_constants():
    assert DEFAULT_CACHE_TTL_SECONDS == 86_400
    assert FAVICON_CACHE_TTL_SECONDS == 2_592_000


def test_query_field_has_two_variants():
    assert {f.value for f in QueryField} == {"domain", "url"}


def test_resolution_target_is_frozen():
    target = ResolutionTarget(Hostname("example.com"), PageOrigin("https://example.com"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        target.hostname = Hostname("other.com")
