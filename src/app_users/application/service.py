"""UserApplicationService: thin composition layer over a UserStore.

Turns lookup misses into UserNotFoundError and store rows into
UserResponse; store errors pass through untouched.
"""

from src.app_common.errors import UserNotFoundError
from src.app_users.application.schemas import UserResponse
from src.app_users.domain.repository import UserStore


class UserApplicationService:
    def __init__(self, store: UserStore) -> None:
        self._store = store

    async def list_users(self) -> list[UserResponse]:
        users = await self._store.list_all()
        return [UserResponse.from_domain(u) for u in users]

    async def create_user(self, name: str, email: str) -> UserResponse:
        user = await self._store.create(name, email)
        return UserResponse.from_domain(user)

    async def get_user(self, user_id: int) -> UserResponse:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserResponse.from_domain(user)

    async def delete_user(self, user_id: int) -> None:
        # Deleting a missing id is not an error
        await self._store.delete(user_id)
