"""PostgreSQL connection pool wrapper.

One Database is built at startup from DatabaseSettings and shared by the
store; sessions are acquired per operation through session() and always
released when the block exits.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import Connection, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import DatabaseSettings

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "alembic"


def _run_upgrade(connection: Connection) -> None:
    """Apply alembic revisions up to head on an already-open connection."""
    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # alembic/env.py picks this up instead of creating its own engine
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


class Database:
    def __init__(
        self,
        settings: DatabaseSettings,
        timeout_seconds: int = 30,
        echo: bool = False,
    ) -> None:
        # pool_size=0 means "unbounded" to SQLAlchemy, so keep at least one
        pool_size = max(settings.min_connections, 1)
        self.url = settings.url
        self.engine: AsyncEngine = create_async_engine(
            settings.url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max(settings.max_connections - pool_size, 0),
            pool_timeout=timeout_seconds,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def migrate(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(_run_upgrade)

    async def dispose(self) -> None:
        await self.engine.dispose()
