"""Request Normalizer — validates the raw query and derives the resolution target.

Invariants:
    - Exactly one of "domain" / "url" must be present; anything else is rejected
    - Failures raise InvalidQueryError naming the field and echoing the raw value
    - PURE: no cache, no network, no logging; rejection happens before any IO

Design Decisions:
    - Pydantic models validate each variant; the normalizer only matches on
      the parsed variant (ADR: tagged union over optional fields)
    - Both parameters present is rejected as an invalid domain rather than
      silently preferring one
    - Domain input is used verbatim as the cache key; URL input uses the host
      as parsed (lower-cased, IDNA-encoded) by the URL validator
"""

from collections.abc import Mapping

from pydantic import ValidationError

from app.core.domain_types import Hostname, QueryField, ResolutionTarget
from app.core.errors import InvalidQueryError
from app.core.resolve_urls import origin_for_domain, origin_of
from app.schemas.favicon import DomainQuery, GrabQuery, UrlQuery


def parse_query(params: Mapping[str, str]) -> GrabQuery:
    """Pick the query variant and validate it."""
    has_domain = QueryField.DOMAIN.value in params
    has_url = QueryField.URL.value in params

    if has_domain and has_url:
        raise InvalidQueryError(
            QueryField.DOMAIN.value, params[QueryField.DOMAIN.value],
        )
    if has_domain:
        raw = params[QueryField.DOMAIN.value]
        try:
            return DomainQuery(domain=raw)
        except ValidationError:
            raise InvalidQueryError(QueryField.DOMAIN.value, raw)

    raw = params.get(QueryField.URL.value, "")
    try:
        return UrlQuery(url=raw)
    except ValidationError:
        raise InvalidQueryError(QueryField.URL.value, raw)


def to_target(query: GrabQuery) -> ResolutionTarget:
    """Derive (hostname, page_origin) from a validated query."""
    match query:
        case DomainQuery(domain=domain):
            hostname = Hostname(domain)
            return ResolutionTarget(hostname, origin_for_domain(hostname))
        case UrlQuery(url=url):
            return ResolutionTarget(
                Hostname(url.host),
                origin_of(url.scheme, url.host, url.port),
            )
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


def normalize(params: Mapping[str, str]) -> ResolutionTarget:
    """Validate raw query params and derive the resolution target."""
    return to_target(parse_query(params))
