"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import DatabaseSettings, Settings
from src.app_users.infrastructure.memory_store import InMemoryUserStore
from src.main import create_app


@pytest.fixture
def settings() -> Settings:
    """Defaults, with the in-memory store selected."""
    return Settings(database=DatabaseSettings(enabled=False))


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
async def client(settings: Settings, store: InMemoryUserStore) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    app = create_app(settings, store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
