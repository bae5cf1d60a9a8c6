"""Favicon Discovery — lazy candidate generation from markup, manifest, and /favicon.ico.

Tests cover:
    - <link rel> icons yielded in document order with type and size
    - Only the sources a consumer needs are fetched
    - Manifest icons resolved against the manifest href
    - /favicon.ico fallback, and an empty sequence when nothing exists
    - Home page failure propagates
"""

import json

import pytest

from app.core.errors import FetchError
from app.infrastructure.favicon_discovery import (
    link_icons, manifest_icons, parse_favicon, parse_sizes,
)
from app.schemas.favicon import IconSize

HOME = """
<html><head>
  <link rel="stylesheet" href="/style.css">
  <link rel="icon" type="image/png" sizes="16x16 32x32" href="/icon-32.png">
  <link rel="apple-touch-icon" sizes="180x180" href="apple.png">
  <link rel="manifest" href="/static/site.webmanifest">
</head><body></body></html>
"""

MANIFEST = json.dumps({
    "name": "Example",
    "icons": [
        {"src": "icons/192.png", "sizes": "192x192", "type": "image/png"},
        {"src": "https://cdn.example.com/512.png", "sizes": "512x512"},
        {"sizes": "64x64"},
    ],
})


class FakeSite:
    """Text/bytes fetch functions over canned paths, recording each request."""

    def __init__(self, texts=None, blobs=None):
        self.texts = texts or {}
        self.blobs = blobs or {}
        self.requested = []

    async def text_fetch(self, reference):
        self.requested.append(reference)
        if reference not in self.texts:
            raise FetchError(reference, "HTTP 404", status_code=404)
        return self.texts[reference]

    async def bytes_fetch(self, reference):
        self.requested.append(reference)
        if reference not in self.blobs:
            raise FetchError(reference, "HTTP 404", status_code=404)
        return self.blobs[reference]

    def discover(self):
        return parse_favicon("example.com", self.text_fetch, self.bytes_fetch)


async def _collect(icons):
    return [icon async for icon in icons]


# ─── full sequence ───────────────────────────────────────────────

async def test_yields_links_then_manifest_then_favicon_ico():
    site = FakeSite(
        texts={"/": HOME, "/static/site.webmanifest": MANIFEST},
        blobs={"/favicon.ico": b"\x00\x00\x01\x00"},
    )

    icons = await _collect(site.discover())

    assert [i.url for i in icons] == [
        "/icon-32.png",
        "apple.png",
        "/static/icons/192.png",
        "https://cdn.example.com/512.png",
        "/favicon.ico",
    ]
    assert icons[0].type == "image/png"
    assert icons[0].size == IconSize(width=32, height=32)
    assert icons[0].reference == '<link rel="icon">'
    assert icons[2].reference == "/static/site.webmanifest"
    assert icons[4].type == "image/x-icon"


async def test_first_candidate_fetches_only_home_page():
    site = FakeSite(
        texts={"/": HOME, "/static/site.webmanifest": MANIFEST},
        blobs={"/favicon.ico": b"\x00"},
    )
    icons = site.discover()

    first = await icons.__anext__()
    await icons.aclose()

    assert first.url == "/icon-32.png"
    assert site.requested == ["/"]


async def test_manifest_failure_falls_back_to_favicon_ico():
    site = FakeSite(
        texts={"/": '<link rel="manifest" href="/manifest.json">'},
        blobs={"/favicon.ico": b"\x00"},
    )

    icons = await _collect(site.discover())

    assert [i.url for i in icons] == ["/favicon.ico"]
    assert site.requested == ["/", "/manifest.json", "/favicon.ico"]


async def test_nothing_found_yields_empty_sequence():
    site = FakeSite(texts={"/": "<html><head><title>x</title></head></html>"})

    assert await _collect(site.discover()) == []


async def test_home_page_failure_propagates():
    site = FakeSite()

    with pytest.raises(FetchError):
        await _collect(site.discover())


# ─── link_icons ──────────────────────────────────────────────────

def test_link_icons_matches_rel_case_insensitively():
    html = '<link rel="Shortcut Icon" href="/favicon.ico"><link rel="icon" href="  ">'
    icons = link_icons(html)
    assert [i.url for i in icons] == ["/favicon.ico"]
    assert icons[0].reference == '<link rel="shortcut icon">'


def test_link_icons_ignores_non_icon_links():
    html = '<link rel="stylesheet" href="/a.css"><link rel="preload" href="/b.png">'
    assert link_icons(html) == []


# ─── manifest_icons ──────────────────────────────────────────────

def test_manifest_icons_invalid_json_is_empty():
    assert manifest_icons("{not json", "/manifest.json") == []


def test_manifest_icons_without_icons_list_is_empty():
    assert manifest_icons(json.dumps({"icons": "nope"}), "/manifest.json") == []


# ─── parse_sizes ─────────────────────────────────────────────────

@pytest.mark.parametrize("sizes, expected", [
    ("16x16 32x32", IconSize(width=32, height=32)),
    ("180X180", IconSize(width=180, height=180)),
    ("any", "any"),
    ("bogus", None),
    ("\u00b2x\u00b2", None),
    ("\u0663x\u0663 48x48", IconSize(width=48, height=48)),
    ("", None),
    (None, None),
])
def test_parse_sizes(sizes, expected):
    assert parse_sizes(sizes) == expected


async def test_non_ascii_digit_sizes_do_not_abort_discovery():
    home = '<html><head><link rel="icon" href="/a.png" sizes="²x²"></head></html>'
    site = FakeSite(texts={"/": home}, blobs={"/favicon.ico": b"\x00"})

    icons = await _collect(site.discover())

    assert [icon.url for icon in icons] == ["/a.png", "/favicon.ico"]
    assert icons[0].size is None
