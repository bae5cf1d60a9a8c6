"""URL Resolution — pure helpers for origins, hostnames, and relative references.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - A PageOrigin never carries a path, query, fragment, or default port
    - resolve_reference follows RFC 3986: relative, protocol-relative, and
      absolute references all resolve against the origin root

Design Decisions:
    - urllib.parse.urljoin over hand-rolled joining: it already implements
      dot-segment removal and scheme-relative references
    - Origin always gets a trailing "/" before joining so bare names like
      "icon.png" land at the root instead of being glued to the host
"""

import re
from urllib.parse import urljoin

from app.core.domain_types import DEFAULT_PORTS, Hostname, PageOrigin

# One DNS label: 1-63 alphanumerics/hyphens, no leading or trailing hyphen.
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
HOSTNAME_MAX_LENGTH = 253

_HOSTNAME_RE = re.compile(rf"{_LABEL}(?:\.{_LABEL})*", re.ASCII)
_ABSOLUTE_HTTP_RE = re.compile(r"^https?://", re.IGNORECASE)


def is_valid_hostname(value: str) -> bool:
    """True when value is a bare DNS hostname (no scheme, port, or path)."""
    return (
        0 < len(value) <= HOSTNAME_MAX_LENGTH
        and _HOSTNAME_RE.fullmatch(value) is not None
    )


def origin_for_domain(hostname: Hostname) -> PageOrigin:
    """Bare domains are assumed to be served over https."""
    return PageOrigin(f"https://{hostname}")


def origin_of(scheme: str, host: str, port: int | None) -> PageOrigin:
    """Build scheme://host[:port], dropping the port when it is the scheme default."""
    scheme = scheme.lower()
    if port is None or DEFAULT_PORTS.get(scheme) == port:
        return PageOrigin(f"{scheme}://{host}")
    return PageOrigin(f"{scheme}://{host}:{port}")


def resolve_reference(reference: str, page_origin: PageOrigin) -> str:
    """Resolve a possibly-relative reference against the page origin."""
    return urljoin(f"{page_origin}/", reference)


def is_absolute_http_url(url: str) -> bool:
    return _ABSOLUTE_HTTP_RE.match(url) is not None


def absolutize_icon_url(url: str, page_origin: PageOrigin) -> str:
    """Leave http(s) URLs untouched, resolve everything else against the origin."""
    if is_absolute_http_url(url):
        return url
    return resolve_reference(url, page_origin)
