"""SqlUserStore: the PostgreSQL-backed UserStore.

Each operation acquires its own session from the pool and releases it on
exit; writes run inside `async with db.begin()`. Driver and SQLAlchemy
failures surface as StoreError, never retried.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from alembic.util.exc import CommandError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings
from src.app_common.database import Database
from src.app_common.errors import StoreError
from src.app_users.domain.models import DbUser
from src.app_users.domain.repository import UserRepositoryProtocol, UserStore
from src.app_users.infrastructure.memory_store import InMemoryUserStore
from src.app_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)

_STORE_FAILURES = (SQLAlchemyError, OSError)


class SqlUserStore:
    def __init__(
        self,
        database: Database,
        repo: UserRepositoryProtocol | None = None,
    ) -> None:
        self._database = database
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._database.session() as db:
                yield db
        except _STORE_FAILURES as exc:
            logger.error("Store operation failed: %s", exc)
            raise StoreError(f"Database error: {exc}") from exc

    async def create(self, name: str, email: str) -> DbUser:
        async with self._session() as db, db.begin():
            user = await self._repo.create(db, name, email)
        logger.info("Created user %d", user.id)
        return user

    async def find_by_id(self, user_id: int) -> DbUser | None:
        async with self._session() as db:
            return await self._repo.find_by_id(db, user_id)

    async def find_by_email(self, email: str) -> DbUser | None:
        async with self._session() as db:
            return await self._repo.find_by_email(db, email)

    async def list_all(self) -> list[DbUser]:
        async with self._session() as db:
            return await self._repo.list_all(db)

    async def update(self, user: DbUser) -> None:
        async with self._session() as db, db.begin():
            await self._repo.update(db, user)

    async def delete(self, user_id: int) -> None:
        async with self._session() as db, db.begin():
            await self._repo.delete(db, user_id)
        logger.info("Deleted user %d", user_id)

    async def count(self) -> int:
        async with self._session() as db:
            return await self._repo.count(db)

    async def ping(self) -> None:
        try:
            await self._database.ping()
        except _STORE_FAILURES as exc:
            raise StoreError(str(exc)) from exc

    async def migrate(self) -> None:
        try:
            await self._database.migrate()
        except (*_STORE_FAILURES, CommandError) as exc:
            raise StoreError(f"Migration failed: {exc}") from exc
        logger.info("Migrations applied")

    async def close(self) -> None:
        await self._database.dispose()


def build_user_store(settings: Settings) -> UserStore:
    """Pick the store implementation once, at startup."""
    if not settings.database.enabled:
        logger.info("Database disabled; using in-memory user store")
        return InMemoryUserStore()
    database = Database(
        settings.database,
        timeout_seconds=settings.server.timeout_seconds,
        echo=settings.logging.level.lower() == "debug",
    )
    return SqlUserStore(database)
