"""Service test fixtures — resolver wired to fakes + FastAPI test client.

Invariants:
    - The resolver dependency is overridden: no lifespan, no database, no network
    - Each test gets fresh fakes, so call counts start at zero

Design Decisions:
    - ASGITransport does not run the lifespan; dependency_overrides supplies the
      resolver the lifespan would have built
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.routes.grab import get_resolver
from app.main import app
from app.services.resolve_favicon import FaviconResolver

from tests.services.fakes import FakeCacheStore, FakeDiscovery, FakeFetcher


@pytest.fixture
def fake_cache():
    return FakeCacheStore()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def discovery():
    """Default discovery yields one origin-relative icon; tests replace .icons/.error."""
    return FakeDiscovery([{"url": "/icon.png", "type": "image/png"}])


@pytest.fixture
def resolver(fake_cache, fake_fetcher, discovery):
    return FaviconResolver(fake_cache, fake_fetcher, discover=discovery)


@pytest.fixture
async def client(resolver):
    """FastAPI test client with the resolver dependency overridden."""
    app.dependency_overrides[get_resolver] = lambda: resolver
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
