"""
TASKNEST API - User Router

The collection endpoints only need a valid token. Item endpoints are
self-only: another user's id is 403 whether or not it exists.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from tasknest.auth.dependencies import CurrentAuth, get_auth_service
from tasknest.auth.service import AuthService
from tasknest.responses import ApiResponse, DeletedData
from tasknest.sessions.repository import SessionRepositoryInterface, get_session_repository
from tasknest.tasks.repository import TaskRepositoryInterface, get_task_repository
from tasknest.users.repository import UserRepositoryInterface, get_user_repository
from tasknest.users.schemas import UserCreateRequest, UserResponse, UserUpdateRequest
from tasknest.users.service import UserService


router = APIRouter(prefix="/users", tags=["Users"])


async def get_user_service(
    repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
    session_repository: Annotated[SessionRepositoryInterface, Depends(get_session_repository)],
    task_repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)],
) -> UserService:
    """Dependency to get user service instance."""
    return UserService(repository, session_repository, task_repository)


@router.get(
    "",
    response_model=ApiResponse[List[UserResponse]],
    summary="List all users",
)
async def list_users(
    auth: CurrentAuth,
    service: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse[List[UserResponse]]:
    users = await service.list_users()
    return ApiResponse(data=[UserResponse.from_user(u) for u in users])


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    request: UserCreateRequest,
    auth: CurrentAuth,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[UserResponse]:
    """Create an account without opening a session for it."""
    user = await auth_service.create_user(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return ApiResponse(data=UserResponse.from_user(user))


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Get own profile",
)
async def get_user(
    user_id: str,
    auth: CurrentAuth,
    service: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse[UserResponse]:
    user = await service.get_user(user_id, auth.subject)
    return ApiResponse(data=UserResponse.from_user(user))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Update own profile",
)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    auth: CurrentAuth,
    service: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse[UserResponse]:
    user = await service.update_user(user_id, auth.subject, request)
    return ApiResponse(data=UserResponse.from_user(user))


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[DeletedData],
    summary="Delete own account",
)
async def delete_user(
    user_id: str,
    auth: CurrentAuth,
    service: Annotated[UserService, Depends(get_user_service)],
) -> ApiResponse[DeletedData]:
    await service.delete_user(user_id, auth.subject)
    return ApiResponse(data=DeletedData(id=user_id))
