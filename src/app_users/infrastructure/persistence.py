"""UserRepository: concrete implementation of UserRepositoryProtocol.

All queries use raw text() SQL (no ORM). Writes are not committed here;
the caller owns the transaction.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.app_users.domain.models import DbUser

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_INSERT_USER_SQL = text("""
    INSERT INTO users (name, email, active)
    VALUES (:name, :email, true)
    RETURNING id, name, email, active, created_at
""")

_GET_USER_BY_ID_SQL = text("""
    SELECT id, name, email, active, created_at
    FROM users
    WHERE id = :user_id
""")

_GET_USER_BY_EMAIL_SQL = text("""
    SELECT id, name, email, active, created_at
    FROM users
    WHERE email = :email
""")

_LIST_USERS_SQL = text("""
    SELECT id, name, email, active, created_at
    FROM users
    ORDER BY id
""")

_UPDATE_USER_SQL = text("""
    UPDATE users
    SET name = :name, email = :email, active = :active, updated_at = NOW()
    WHERE id = :user_id
""")

_DELETE_USER_SQL = text("DELETE FROM users WHERE id = :user_id")

_COUNT_USERS_SQL = text("SELECT COUNT(*) FROM users")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_user(row: object) -> DbUser:
    return DbUser(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        email=row.email,  # type: ignore[attr-defined]
        active=row.active,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class UserRepository:
    async def create(self, db: AsyncSession, name: str, email: str) -> DbUser:
        result = await db.execute(_INSERT_USER_SQL, {"name": name, "email": email})
        return _row_to_user(result.fetchone())

    async def find_by_id(self, db: AsyncSession, user_id: int) -> DbUser | None:
        result = await db.execute(_GET_USER_BY_ID_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def find_by_email(self, db: AsyncSession, email: str) -> DbUser | None:
        result = await db.execute(_GET_USER_BY_EMAIL_SQL, {"email": email})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def list_all(self, db: AsyncSession) -> list[DbUser]:
        result = await db.execute(_LIST_USERS_SQL)
        return [_row_to_user(row) for row in result.fetchall()]

    async def update(self, db: AsyncSession, user: DbUser) -> None:
        # No row matched → no-op; existence is the caller's concern
        await db.execute(
            _UPDATE_USER_SQL,
            {
                "name": user.name,
                "email": user.email,
                "active": user.active,
                "user_id": user.id,
            },
        )

    async def delete(self, db: AsyncSession, user_id: int) -> None:
        await db.execute(_DELETE_USER_SQL, {"user_id": user_id})

    async def count(self, db: AsyncSession) -> int:
        result = await db.execute(_COUNT_USERS_SQL)
        return int(result.scalar_one())
