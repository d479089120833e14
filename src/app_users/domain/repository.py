"""Store Protocols: dependency inversion for testability.

UserRepositoryProtocol works on a caller-supplied AsyncSession (the SQL
layer). UserStore is the capability the API and CLI depend on: it owns
session acquisition, so callers never see a connection. Two
implementations exist, selected once at startup:
  - SqlUserStore       (src/app_users/infrastructure/store.py)
  - InMemoryUserStore  (src/app_users/infrastructure/memory_store.py)
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.app_users.domain.models import DbUser


class UserRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, name: str, email: str) -> DbUser: ...

    async def find_by_id(self, db: AsyncSession, user_id: int) -> DbUser | None: ...

    async def find_by_email(self, db: AsyncSession, email: str) -> DbUser | None: ...

    async def list_all(self, db: AsyncSession) -> list[DbUser]: ...

    async def update(self, db: AsyncSession, user: DbUser) -> None: ...

    async def delete(self, db: AsyncSession, user_id: int) -> None: ...

    async def count(self, db: AsyncSession) -> int: ...


class UserStore(Protocol):
    async def create(self, name: str, email: str) -> DbUser: ...

    async def find_by_id(self, user_id: int) -> DbUser | None: ...

    async def find_by_email(self, email: str) -> DbUser | None: ...

    async def list_all(self) -> list[DbUser]: ...

    async def update(self, user: DbUser) -> None: ...

    async def delete(self, user_id: int) -> None: ...

    async def count(self) -> int: ...

    async def ping(self) -> None: ...

    async def migrate(self) -> None: ...

    async def close(self) -> None: ...
