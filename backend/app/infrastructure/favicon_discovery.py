"""Favicon Discovery — lazily yields icon candidates for a site.

Invariants:
    - Async generator: each source is fetched only if the consumer asks for
      more candidates than the previous sources produced
    - Yielded URLs are exactly as found in markup (possibly relative); the
      caller makes them absolute
    - A failed home page fetch propagates (the site is unreachable); failed
      manifest or /favicon.ico fetches just end that source

Design Decisions:
    - Source order: <link rel> icons, then web app manifest icons, then the
      conventional /favicon.ico; the first candidate is usually what callers want
    - Manifest icon src resolved against the manifest href, so a manifest in a
      subdirectory still yields an origin-relative path
    - BeautifulSoup html.parser: no native parser dependency
"""

import json
import logging
import re
from collections.abc import AsyncIterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from pydantic import ValidationError

from app.core.domain_types import Hostname
from app.core.errors import FetchError
from app.core.repository_protocols import BytesFetch, TextFetch
from app.schemas.favicon import IconDescriptor, IconSize

logger = logging.getLogger(__name__)

ICON_RELS = frozenset({
    "icon",
    "shortcut icon",
    "apple-touch-icon",
    "apple-touch-icon-precomposed",
    "mask-icon",
    "fluid-icon",
})

FALLBACK_ICON_PATH = "/favicon.ico"

_SIZE_RE = re.compile(r"(\d+)x(\d+)", re.ASCII)


def parse_sizes(sizes: str | None) -> IconSize | str | None:
    """Largest WxH from a sizes attribute, "any", or None when unparseable."""
    if not sizes or not isinstance(sizes, str):
        return None
    best: IconSize | None = None
    for token in sizes.lower().split():
        if token == "any":
            return "any"
        match = _SIZE_RE.fullmatch(token)
        if match is None:
            continue
        candidate = IconSize(width=int(match[1]), height=int(match[2]))
        if best is None or candidate.width * candidate.height > best.width * best.height:
            best = candidate
    return best


def link_icons(html: str) -> list[IconDescriptor]:
    """Icons declared by <link rel=...> tags, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    icons = []
    for link in soup.find_all("link", href=True):
        rel = " ".join(link.get("rel") or []).lower()
        href = link["href"].strip()
        if rel not in ICON_RELS or not href:
            continue
        icons.append(IconDescriptor(
            url=href,
            reference=f'<link rel="{rel}">',
            type=link.get("type"),
            size=parse_sizes(link.get("sizes")),
        ))
    return icons


def manifest_href(html: str) -> str | None:
    soup = BeautifulSoup(html, "html.parser")
    link = soup.find("link", rel="manifest", href=True)
    if link is None:
        return None
    return link["href"].strip() or None


def manifest_icons(manifest_text: str, href: str) -> list[IconDescriptor]:
    """Icons listed in a web app manifest, src resolved against the manifest."""
    try:
        data = json.loads(manifest_text)
    except ValueError:
        logger.debug(f"Manifest at {href} is not valid JSON")
        return []
    if not isinstance(data, dict) or not isinstance(data.get("icons"), list):
        return []

    icons = []
    for entry in data["icons"]:
        if not isinstance(entry, dict):
            continue
        src = entry.get("src")
        if not isinstance(src, str) or not src.strip():
            continue
        try:
            icons.append(IconDescriptor(
                url=urljoin(href, src.strip()),
                reference=href,
                type=entry.get("type") if isinstance(entry.get("type"), str) else None,
                size=parse_sizes(entry.get("sizes")),
            ))
        except ValidationError:
            continue
    return icons


async def parse_favicon(
    hostname: Hostname, text_fetch: TextFetch, bytes_fetch: BytesFetch,
) -> AsyncIterator[IconDescriptor]:
    """Yield icon candidates for hostname, cheapest sources first."""
    html = await text_fetch("/")
    for icon in link_icons(html):
        yield icon

    href = manifest_href(html)
    if href:
        try:
            manifest_text = await text_fetch(href)
        except FetchError as e:
            logger.debug(f"Manifest fetch failed: {e.message}", extra={"hostname": hostname})
        else:
            for icon in manifest_icons(manifest_text, href):
                yield icon

    try:
        await bytes_fetch(FALLBACK_ICON_PATH)
    except FetchError as e:
        logger.debug(f"No {FALLBACK_ICON_PATH}: {e.message}", extra={"hostname": hostname})
        return
    yield IconDescriptor(
        url=FALLBACK_ICON_PATH,
        reference=FALLBACK_ICON_PATH,
        type="image/x-icon",
    )
