"""
Stockroom Backend — User Route Handlers
=========================================

What:  /api/users list, detail, create, update, password change and delete.
How:   Each route attaches its API-key dependency, then hands the parsed
       body to UserService. No business rules live here.

Header per route (value configured in settings):
    GET    /api/users                 get-user-header       (get_users_key)
    GET    /api/users/{id}            get-user-header       (get_user_key)
    POST   /api/users                 add-user-header       (add_user_key)
    PUT    /api/users/{id}            update-user-header    (update_user_key)
    PUT    /api/users/{id}/password   edit-password-header  (edit_password_key)
    DELETE /api/users/{id}            delete-user-header    (delete_user_key)
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.database import get_db_session
from stockroom.schemas.common import ErrorResponse, MessageResponse
from stockroom.schemas.user import (
    PasswordChange,
    UserCreate,
    UserEnvelope,
    UserResponse,
    UserUpdate,
)
from stockroom.security import require_api_key
from stockroom.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])

_errors = {
    401: {"description": "Missing or invalid API key", "model": ErrorResponse},
    404: {"description": "User or acting user not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[UserResponse],
    responses=_errors,
    summary="List all users",
    dependencies=[Depends(require_api_key("get-user-header", "get_users_key"))],
)
async def list_users(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    users = await user_service.list_users(db)
    response.headers["X-Total-Count"] = str(len(users))
    return users


@router.get(
    "/{user_id}",
    response_model=UserEnvelope,
    responses=_errors,
    summary="Get a single user by ID",
    dependencies=[Depends(require_api_key("get-user-header", "get_user_key"))],
)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    return UserEnvelope(data=await user_service.get_user(db, user_id))


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_errors,
        400: {"description": "Missing field or invalid role", "model": ErrorResponse},
        403: {"description": "Acting user is not an admin", "model": ErrorResponse},
        409: {"description": "Email or name already taken", "model": ErrorResponse},
    },
    summary="Create a user",
    description="Creates a user on behalf of an admin identified by `last_op_id`.",
    dependencies=[Depends(require_api_key("add-user-header", "add_user_key"))],
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, payload)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        **_errors,
        400: {"description": "Invalid role or missing last_op_id", "model": ErrorResponse},
        409: {"description": "Name already taken", "model": ErrorResponse},
    },
    summary="Update a user's name and/or role",
    dependencies=[Depends(require_api_key("update-user-header", "update_user_key"))],
)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.update_user(db, user_id, payload)


@router.put(
    "/{user_id}/password",
    response_model=MessageResponse,
    responses={
        **_errors,
        400: {"description": "Password rules not met", "model": ErrorResponse},
        403: {"description": "Acting user is not an admin", "model": ErrorResponse},
    },
    summary="Change a user's password",
    dependencies=[Depends(require_api_key("edit-password-header", "edit_password_key"))],
)
async def change_password(
    user_id: UUID,
    payload: PasswordChange,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.change_password(db, user_id, payload)
    return MessageResponse(message="Password updated successfully")


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses=_errors,
    summary="Delete a user",
    dependencies=[Depends(require_api_key("delete-user-header", "delete_user_key"))],
)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
