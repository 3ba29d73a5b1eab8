"""
TASKNEST API - Task Service

Business logic for task operations. Every operation on a single task loads
it first (404 when absent) and then checks ownership (403).
"""

from datetime import datetime, timezone
from typing import Optional, List, Callable
import math

from tasknest.auth.ownership import ensure_owner
from tasknest.errors import NotFoundError
from tasknest.tasks.models import Task, ensure_utc
from tasknest.tasks.repository import TaskRepositoryInterface
from tasknest.tasks.enums import TaskStatus, TaskPriority
from tasknest.tasks.schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
    TaskResponse,
    TaskListResponse,
)


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def task_to_response(task: Task) -> TaskResponse:
    """Convert a Task model to its API representation."""
    return TaskResponse(
        id=task.id,
        user_id=task.user_id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        tags=task.tags,
        due_date=task.due_date,
        completed_at=task.completed_at,
        is_private=task.is_private,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TaskService:
    """Service layer for task business logic."""

    def __init__(
        self,
        repository: TaskRepositoryInterface,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the task service.

        Args:
            repository: Task repository implementation
            clock: Optional clock function for testing (returns current datetime)
        """
        self.repository = repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _now(self) -> datetime:
        return self._clock()

    async def _load_owned(self, task_id: str, subject: str) -> Task:
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        ensure_owner(task.user_id, subject)
        return task

    async def create_task(self, owner_id: str, request: TaskCreateRequest) -> TaskResponse:
        """Create a new task for the owner."""
        task = Task.create(
            user_id=owner_id,
            title=request.title,
            status=request.status,
            priority=request.priority,
            description=request.description,
            tags=request.tags,
            due_date=request.due_date,
            is_private=request.is_private,
        )
        await self.repository.create(task)
        return task_to_response(task)

    async def get_task(self, task_id: str, subject: str) -> TaskResponse:
        task = await self._load_owned(task_id, subject)
        return task_to_response(task)

    async def list_tasks(
        self,
        owner_id: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> TaskListResponse:
        """List one page of the owner's tasks, newest first. Out-of-range paging is clamped."""
        page = max(1, page)
        limit = min(MAX_PAGE_SIZE, max(1, limit))
        search = search.strip() if search else None
        filters = dict(status=status, priority=priority, due_before=due_before, search=search or None)

        total = await self.repository.count_by_owner(owner_id, **filters)
        tasks = await self.repository.list_by_owner(
            owner_id,
            skip=(page - 1) * limit,
            limit=limit,
            **filters,
        )
        return TaskListResponse(
            items=[task_to_response(task) for task in tasks],
            total=total,
            page=page,
            limit=limit,
            total_pages=max(1, math.ceil(total / limit)),
        )

    async def update_task(self, task_id: str, subject: str, request: TaskUpdateRequest) -> TaskResponse:
        """
        Update a task owned by the subject.

        Moving a task into DONE stamps completed_at; moving it out clears it.
        """
        current = await self._load_owned(task_id, subject)

        provided = request.model_dump(exclude_unset=True)
        updates: dict = {}
        for key in ("title", "priority", "tags", "is_private", "status"):
            if provided.get(key) is not None:
                updates[key] = provided[key]
        # Explicit null clears these two
        if "description" in provided:
            updates["description"] = provided["description"]
        if "due_date" in provided:
            updates["due_date"] = ensure_utc(provided["due_date"])

        if "status" in updates:
            next_status = TaskStatus(updates["status"])
            updates["status"] = next_status.value
            if next_status == TaskStatus.DONE and current.status != TaskStatus.DONE:
                updates["completed_at"] = self._now()
            elif next_status != TaskStatus.DONE:
                updates["completed_at"] = None
        if "priority" in updates:
            updates["priority"] = TaskPriority(updates["priority"]).value

        if not updates:
            return task_to_response(current)

        task = await self.repository.update(task_id, updates)
        if task is None:
            raise NotFoundError("Task not found")
        return task_to_response(task)

    async def delete_task(self, task_id: str, subject: str) -> None:
        await self._load_owned(task_id, subject)
        await self.repository.delete(task_id)
