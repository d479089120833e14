"""Integration-test fixtures (live PostgreSQL).

Skipped unless APP_TEST_DATABASE is set. Connection details come from the
usual settings layers (PG* or APP_DATABASE__* variables). All tests share a
single event loop so the store's connection pool stays valid for the
whole session.
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config.settings import load_settings
from src.app_common.database import Database
from src.app_users.infrastructure.store import SqlUserStore
from src.main import create_app


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    if os.environ.get("APP_TEST_DATABASE"):
        return
    skip = pytest.mark.skip(reason="set APP_TEST_DATABASE=1 to run against PostgreSQL")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def sql_store() -> SqlUserStore:
    settings = load_settings()
    store = SqlUserStore(Database(settings.database))
    await store.migrate()
    yield store
    await store.close()


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client(sql_store: SqlUserStore) -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client over the real store."""
    app = create_app(load_settings(), sql_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
