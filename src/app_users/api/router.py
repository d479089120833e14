"""app_users REST endpoints.

GET    /users           list, ordered by id
POST   /users           create (validated before the store is touched)
GET    /users/{user_id}  fetch one, 404 when absent
DELETE /users/{user_id}  physical delete, succeeds when absent
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request

from src.app_common.response import ApiResponse, success_response
from src.app_users.application.schemas import CreateUserRequest
from src.app_users.application.service import UserApplicationService
from src.app_users.domain.models import USER_ID_MAX, USER_ID_MIN
from src.app_users.domain.repository import UserStore

router = APIRouter(prefix="/users", tags=["users"])

UserId = Annotated[int, Path(ge=USER_ID_MIN, le=USER_ID_MAX)]


def get_user_store(request: Request) -> UserStore:
    """The store selected at startup, kept on app.state by create_app()."""
    return request.app.state.user_store


def get_user_service(
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserApplicationService:
    return UserApplicationService(store)


@router.get("", response_model=ApiResponse)
async def list_users(
    service: Annotated[UserApplicationService, Depends(get_user_service)],
) -> ApiResponse:
    users = await service.list_users()
    return success_response([u.model_dump() for u in users])


@router.post("", response_model=ApiResponse)
async def create_user(
    body: CreateUserRequest,
    service: Annotated[UserApplicationService, Depends(get_user_service)],
) -> ApiResponse:
    user = await service.create_user(body.name, body.email)
    return success_response(user.model_dump())


@router.get("/{user_id}", response_model=ApiResponse)
async def get_user(
    user_id: UserId,
    service: Annotated[UserApplicationService, Depends(get_user_service)],
) -> ApiResponse:
    user = await service.get_user(user_id)
    return success_response(user.model_dump())


@router.delete("/{user_id}", response_model=ApiResponse)
async def delete_user(
    user_id: UserId,
    service: Annotated[UserApplicationService, Depends(get_user_service)],
) -> ApiResponse:
    await service.delete_user(user_id)
    return success_response()
