"""Favicon Schemas — Pydantic models for the lookup query and the icon descriptor.

Invariants:
    - DomainQuery.domain: 1-253 chars, DNS label grammar, no scheme, no path
    - UrlQuery.url: absolute http(s) URL with a host
    - IconDescriptor.url is non-empty; every other field is passthrough metadata

Design Decisions:
    - Two query models instead of one model with optional fields: the
      normalizer matches on the variant, never on which attribute is None
    - IconDescriptor allows extra fields: discovery metadata the service does
      not understand still round-trips through the cache untouched
    - Hostname grammar lives in core/resolve_urls.is_valid_hostname, applied
      here through a field_validator so there is one definition of a valid domain
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from app.core.resolve_urls import HOSTNAME_MAX_LENGTH, is_valid_hostname


class DomainQuery(BaseModel):
    """Lookup by bare hostname, e.g. ?domain=example.com."""
    domain: str = Field(min_length=1, max_length=HOSTNAME_MAX_LENGTH)

    @field_validator("domain")
    @classmethod
    def check_hostname(cls, v: str) -> str:
        if not is_valid_hostname(v):
            raise ValueError("domain must be a bare DNS hostname")
        return v


class UrlQuery(BaseModel):
    """Lookup by page URL, e.g. ?url=https://example.com/some/page."""
    url: HttpUrl


GrabQuery = DomainQuery | UrlQuery


class IconSize(BaseModel):
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class IconDescriptor(BaseModel):
    """A discovered icon, returned to clients and stored in the cache."""
    model_config = ConfigDict(extra="allow")

    url: str = Field(min_length=1)
    reference: str | None = None
    type: str | None = None
    size: IconSize | Literal["any"] | None = None

    def to_json(self) -> dict:
        """JSON-able dict without unset metadata (cache and response shape)."""
        return self.model_dump(mode="json", exclude_none=True)
