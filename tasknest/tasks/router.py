"""
TASKNEST API - Task Router

CRUD endpoints for task management.
All endpoints sit behind the route guard and are owner-scoped.
"""

from datetime import datetime
from typing import Optional, Annotated

from fastapi import APIRouter, status, Depends, Query

from tasknest.auth.dependencies import CurrentAuth
from tasknest.responses import ApiResponse, DeletedData
from tasknest.tasks.service import TaskService, DEFAULT_PAGE_SIZE
from tasknest.tasks.repository import TaskRepositoryInterface, get_task_repository
from tasknest.tasks.schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskResponse,
    TaskListResponse,
)
from tasknest.tasks.enums import TaskStatus, TaskPriority


router = APIRouter(prefix="/tasks", tags=["Tasks"])


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


@router.post(
    "",
    response_model=ApiResponse[TaskResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskCreateRequest,
    auth: CurrentAuth,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> ApiResponse[TaskResponse]:
    """
    Create a new task for the authenticated user.

    The task is automatically associated with the current user.
    """
    task = await service.create_task(owner_id=auth.subject, request=request)
    return ApiResponse(data=task)


@router.get(
    "",
    response_model=ApiResponse[TaskListResponse],
    summary="List tasks",
)
async def list_tasks(
    auth: CurrentAuth,
    service: Annotated[TaskService, Depends(get_task_service)],
    page: int = Query(default=1, description="Page number, clamped to >= 1"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, description="Page size, clamped to 1..50"),
    status_filter: Optional[TaskStatus] = Query(
        default=None,
        alias="status",
        description="Filter by task status",
    ),
    priority: Optional[TaskPriority] = Query(default=None, description="Filter by priority"),
    due_before: Optional[datetime] = Query(
        default=None,
        description="Only tasks due strictly before this date",
    ),
    q: Optional[str] = Query(
        default=None,
        max_length=200,
        description="Case-insensitive search in title and description",
    ),
) -> ApiResponse[TaskListResponse]:
    result = await service.list_tasks(
        owner_id=auth.subject,
        page=page,
        limit=limit,
        status=status_filter,
        priority=priority,
        due_before=due_before,
        search=q,
    )
    return ApiResponse(data=result)


@router.get(
    "/{task_id}",
    response_model=ApiResponse[TaskResponse],
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    auth: CurrentAuth,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> ApiResponse[TaskResponse]:
    """
    Get a specific task by ID.

    Returns 404 if the task doesn't exist and 403 if it belongs to another user.
    """
    return ApiResponse(data=await service.get_task(task_id, auth.subject))


@router.put(
    "/{task_id}",
    response_model=ApiResponse[TaskResponse],
    summary="Update a task",
)
async def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    auth: CurrentAuth,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> ApiResponse[TaskResponse]:
    """
    Update a task by ID.

    Only provided fields will be updated.
    """
    return ApiResponse(data=await service.update_task(task_id, auth.subject, request))


@router.delete(
    "/{task_id}",
    response_model=ApiResponse[DeletedData],
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    auth: CurrentAuth,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> ApiResponse[DeletedData]:
    await service.delete_task(task_id, auth.subject)
    return ApiResponse(data=DeletedData(id=task_id))
