"""
Shared test fixtures for Vitrine.
"""
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tests.fixtures.database import FakePool, fake_pool, seeded_pool  # noqa: F401
from vitrine.api.main import app, build_state
from vitrine.config import settings
from vitrine.domain import CollectionRepository, GalleryItemRepository
from vitrine.infrastructure.auth import SessionManager
from vitrine.services.gallery import GalleryService

TEST_PASSWORD = "open-sesame"
TEST_SIGNING_KEY = "test-signing-key"


@pytest.fixture
def session_manager() -> SessionManager:
    """A configured password gate."""
    return SessionManager(
        password=TEST_PASSWORD, signing_key=TEST_SIGNING_KEY, max_age=3600
    )


@pytest.fixture
def gallery_service(seeded_pool: FakePool) -> GalleryService:  # noqa: F811
    """Service wired to the seeded in-memory store."""
    return GalleryService(
        CollectionRepository(seeded_pool), GalleryItemRepository(seeded_pool)
    )


@pytest.fixture
def api_app(seeded_pool: FakePool, session_manager: SessionManager):  # noqa: F811
    """The app with its state wired to the in-memory store."""
    build_state(app, seeded_pool)
    app.state.session_manager = session_manager
    return app


@pytest_asyncio.fixture
async def anonymous_client(api_app) -> AsyncGenerator[AsyncClient, None]:
    """Client without a session cookie."""
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def client(
    api_app, session_manager: SessionManager
) -> AsyncGenerator[AsyncClient, None]:
    """Client carrying a valid session cookie."""
    token = session_manager.issue_token()
    transport = ASGITransport(app=api_app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Cookie": f"{settings.session_cookie_name}={token}"},
    ) as client:
        yield client
