"""
TASKNEST API - Authentication Router

Endpoints for registration, login, logout and current user info.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tasknest.auth.dependencies import CurrentAuth, get_auth_service
from tasknest.auth.schemas import AuthResponse, UserLoginRequest, UserRegisterRequest
from tasknest.auth.service import AuthService
from tasknest.errors import NotFoundError
from tasknest.responses import ApiResponse, MessageData
from tasknest.users.schemas import UserResponse


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[AuthResponse]:
    """
    Register a new user and open a session for them.

    - Name must not be empty
    - Email must be valid and not already registered
    - Password must be 8-72 characters
    """
    user, session = await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return ApiResponse(data=AuthResponse(user=UserResponse.from_user(user), token=session.token))


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Login and get access token",
)
async def login(
    request: UserLoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[AuthResponse]:
    """
    Authenticate user and return a bearer token.

    Use the returned token in the Authorization header:
    `Authorization: Bearer <token>`
    """
    user, session = await auth_service.login(email=request.email, password=request.password)
    return ApiResponse(data=AuthResponse(user=UserResponse.from_user(user), token=session.token))


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Get current user info",
)
async def get_me(
    auth: CurrentAuth,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[UserResponse]:
    """Get the current authenticated user's public information."""
    user = await auth_service.get_user_by_id(auth.subject)
    if user is None:
        raise NotFoundError("User not found")
    return ApiResponse(data=UserResponse.from_user(user))


@router.post(
    "/logout",
    response_model=ApiResponse[MessageData],
    summary="Logout (delete the current session)",
)
async def logout(
    auth: CurrentAuth,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[MessageData]:
    """
    Delete the session row for the presented token.

    The token keeps verifying until its own expiry unless
    REQUIRE_ACTIVE_SESSION is enabled.
    """
    await auth_service.logout(auth.token)
    return ApiResponse(data=MessageData(message="Logged out"))
