"""
SiteCMS Backend: Login Route
=============================

What:  POST /api/login, checks credentials and returns the public user.
Who:   Called by the admin panel's login form.

Each call is independent: no session or token is issued, and later API
calls are not re-authenticated.
"""

from fastapi import APIRouter, Depends

from sitecms.dependencies import get_authenticator
from sitecms.schemas.common import ErrorResponse
from sitecms.schemas.user import LoginRequest, LoginResponse, UserPublic
from sitecms.services.auth_service import Authenticator

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {"description": "Credentials matched", "model": LoginResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Log in to the admin panel",
)
async def login(
    body: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> LoginResponse:
    """
    Returns `{success: true, user: {id, name, username, role}}` on a match.
    A mismatch raises AuthError, rendered as 401 by the global handler.
    """
    user = await authenticator.authenticate(body.username, body.password)
    return LoginResponse(success=True, user=UserPublic.model_validate(user))
