"""
SiteCMS Backend: User Management Routes
========================================

What:  CRUD over /api/users for the admin panel.

Behaviour worth knowing:
    - Passwords never leave the server (list and create omit them).
    - PUT without a password (or with an empty one) keeps the stored password.
    - PUT/DELETE of an unknown id returns {success: true}; nothing changes.
    - Nothing prevents deleting the built-in admin; the seed loader recreates
      it on the next startup.
    - Duplicate usernames are rejected with 400 "Username already exists".
"""

from fastapi import APIRouter, Depends

from sitecms.dependencies import get_user_repository
from sitecms.repositories.users import UserRepository
from sitecms.schemas.common import ErrorResponse, SuccessResponse
from sitecms.schemas.user import UserCreate, UserList, UserPublic, UserUpdate

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=UserList, summary="List users")
async def list_users(users: UserRepository = Depends(get_user_repository)) -> UserList:
    return [UserPublic.model_validate(user) for user in await users.list_all()]


@router.post(
    "",
    response_model=UserPublic,
    responses={
        400: {"description": "Username already exists", "model": ErrorResponse},
        500: {"description": "Failed to create user", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    body: UserCreate,
    users: UserRepository = Depends(get_user_repository),
) -> UserPublic:
    user = await users.create_user(
        username=body.username,
        password=body.password,
        name=body.name,
        role=body.role,
    )
    return UserPublic.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Username already exists", "model": ErrorResponse},
        500: {"description": "Failed to update user", "model": ErrorResponse},
    },
    summary="Update a user",
)
async def update_user(
    user_id: int,
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
) -> SuccessResponse:
    await users.update_user(
        user_id,
        username=body.username,
        name=body.name,
        role=body.role,
        password=body.password,
    )
    return SuccessResponse()


@router.delete("/{user_id}", response_model=SuccessResponse, summary="Delete a user")
async def delete_user(
    user_id: int,
    users: UserRepository = Depends(get_user_repository),
) -> SuccessResponse:
    await users.delete(user_id)
    return SuccessResponse()
