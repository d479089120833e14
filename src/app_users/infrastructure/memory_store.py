"""InMemoryUserStore: UserStore stub used when the database is disabled.

Keeps the SQL store's contract: ids auto-increment from 1, created_at is
set at insert, email is unique, update/delete of a missing id is a no-op.
Nothing is persisted across processes.
"""

from dataclasses import replace

from src.app_common.datetime_utils import utc_now
from src.app_common.errors import StoreError
from src.app_users.domain.models import DbUser


class InMemoryUserStore:
    def __init__(self) -> None:
        self._rows: dict[int, DbUser] = {}
        self._next_id = 1

    def _check_email_free(self, email: str, owner_id: int | None = None) -> None:
        for row in self._rows.values():
            if row.email == email and row.id != owner_id:
                raise StoreError(f"Email already exists: {email}")

    async def create(self, name: str, email: str) -> DbUser:
        self._check_email_free(email)
        user = DbUser(
            id=self._next_id,
            name=name,
            email=email,
            active=True,
            created_at=utc_now(),
        )
        self._rows[user.id] = user
        self._next_id += 1
        return replace(user)

    async def find_by_id(self, user_id: int) -> DbUser | None:
        row = self._rows.get(user_id)
        return replace(row) if row else None

    async def find_by_email(self, email: str) -> DbUser | None:
        for row in self._rows.values():
            if row.email == email:
                return replace(row)
        return None

    async def list_all(self) -> list[DbUser]:
        return [replace(self._rows[k]) for k in sorted(self._rows)]

    async def update(self, user: DbUser) -> None:
        existing = self._rows.get(user.id)
        if existing is None:
            return
        self._check_email_free(user.email, owner_id=user.id)
        self._rows[user.id] = replace(
            existing, name=user.name, email=user.email, active=user.active
        )

    async def delete(self, user_id: int) -> None:
        self._rows.pop(user_id, None)

    async def count(self) -> int:
        return len(self._rows)

    async def ping(self) -> None:
        return None

    async def migrate(self) -> None:
        return None

    async def close(self) -> None:
        return None
