"""Favicon Lookup — GET /api/grab?domain=<host> | ?url=<absolute url>.

Invariants:
    - Query validated before the resolver touches cache or network
    - 200 body is the icon descriptor with an absolute url
    - All failures raise FaviconGrabError subclasses (handled globally → 400)

Design Decisions:
    - Raw query_params instead of typed Query(): the two parameters form a
      tagged union the normalizer owns, including its error message
    - Resolver lives on app.state (built once in the lifespan) and is reached
      through a dependency so tests can override it
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.services.normalize_request import normalize
from app.services.resolve_favicon import FaviconResolver

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["favicons"])


def get_resolver(request: Request) -> FaviconResolver:
    """FastAPI dependency for the process-wide resolver."""
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise RuntimeError("Favicon resolver not initialized")
    return resolver


@router.get("/grab")
async def grab(
    request: Request, resolver: FaviconResolver = Depends(get_resolver),
):
    """Resolve the favicon for a domain or page URL."""
    target = normalize(request.query_params)
    outcome = await resolver.resolve(target)
    return JSONResponse(
        content=outcome.icon.to_json(),
        headers={"X-Cache": "HIT" if outcome.cache_hit else "MISS"},
    )
