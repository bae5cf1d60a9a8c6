"""Favicon Grabber API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FaviconGrabError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Cache database and HTTP client built once on startup, shared by all requests

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Resolver stored on app.state: one instance wired from settings, swapped in
      tests through dependency_overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import grab, health
from app.config import get_settings
from app.infrastructure.cache_store import SqlCacheStore
from app.infrastructure.database import close_db, init_db
from app.infrastructure.http_fetcher import HttpFetcher, build_async_client
from app.infrastructure.observability import setup_logging
from app.services.resolve_favicon import FaviconResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await db_manager.create_schema()
    http_client = build_async_client(settings)
    app.state.resolver = FaviconResolver(
        cache=SqlCacheStore(
            db_manager, default_ttl_seconds=settings.cache_default_ttl_seconds,
        ),
        fetcher=HttpFetcher(http_client),
        ttl_seconds=settings.favicon_cache_ttl_seconds,
    )
    logger.info("Favicon Grabber API started")
    yield
    logger.info("Favicon Grabber API shutting down")
    await http_client.aclose()
    await close_db()


app = FastAPI(
    title="Favicon Grabber API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(grab.router)

register_error_handlers(app)
