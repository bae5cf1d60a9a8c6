"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Favicon TTL (30 days) deliberately longer than the generic cache TTL (24h):
      icon URLs rarely change and discovery is the expensive path
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from app.core.domain_types import (
    DEFAULT_CACHE_TTL_SECONDS, FAVICON_CACHE_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database (cache store)
    database_url: str = (
        "postgresql+asyncpg://favicons:favicons@db:5432/favicons"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_auto_create: bool = False

    # Cache
    favicon_cache_ttl_seconds: int = FAVICON_CACHE_TTL_SECONDS
    cache_default_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS

    # Outbound HTTP
    http_timeout_seconds: float = 10.0
    http_max_redirects: int = 5
    http_user_agent: str = "FaviconGrabber/1.0"

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
