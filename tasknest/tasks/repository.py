"""
TASKNEST API - Task Repository

Repository pattern for task data access.
Includes MongoDB implementation for runtime and an in-memory one for tests.

Lookups by id are not scoped by owner; callers run the ownership check
themselves so a missing task (404) stays distinct from a foreign one (403).
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Annotated, List, Optional
import re

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from tasknest.database import get_database
from tasknest.tasks.enums import TaskPriority, TaskStatus
from tasknest.tasks.models import Task, ensure_utc


class TaskRepositoryInterface(ABC):
    """
    Abstract interface for task repository.

    Enables swapping implementations (MongoDB for runtime, in-memory for tests).
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_by_owner(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Task]:
        """List tasks for owner with optional filters, newest first."""
        pass

    @abstractmethod
    async def count_by_owner(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> int:
        pass

    @abstractmethod
    async def update(self, task_id: str, updates: dict) -> Optional[Task]:
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        pass

    @abstractmethod
    async def delete_by_owner(self, owner_id: str) -> int:
        pass


class TaskRepository(TaskRepositoryInterface):
    """
    MongoDB implementation of the task repository.
    """

    COLLECTION_NAME = "tasks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    @staticmethod
    def _build_query(
        owner_id: str,
        status: Optional[TaskStatus],
        priority: Optional[TaskPriority],
        due_before: Optional[datetime],
        search: Optional[str],
    ) -> dict:
        query: dict = {"user_id": owner_id}
        if status is not None:
            query["status"] = status.value
        if priority is not None:
            query["priority"] = priority.value
        if due_before is not None:
            query["due_date"] = {"$lt": ensure_utc(due_before)}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"description": pattern}]
        return query

    async def create(self, task: Task) -> Task:
        await self.collection.insert_one(task.to_dict())
        return task

    async def get_by_id(self, task_id: str) -> Optional[Task]:
        doc = await self.collection.find_one({"_id": task_id})
        if doc is None:
            return None
        return Task.from_dict(doc)

    async def list_by_owner(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Task]:
        query = self._build_query(owner_id, status, priority, due_before, search)
        cursor = self.collection.find(query).sort("created_at", -1).skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)

        tasks: List[Task] = []
        async for doc in cursor:
            tasks.append(Task.from_dict(doc))
        return tasks

    async def count_by_owner(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> int:
        query = self._build_query(owner_id, status, priority, due_before, search)
        return await self.collection.count_documents(query)

    async def update(self, task_id: str, updates: dict) -> Optional[Task]:
        updates = dict(updates)
        updates["updated_at"] = datetime.now(timezone.utc)

        result = await self.collection.find_one_and_update(
            {"_id": task_id},
            {"$set": updates},
            return_document=True,
        )
        if result is None:
            return None
        return Task.from_dict(result)

    async def delete(self, task_id: str) -> bool:
        result = await self.collection.delete_one({"_id": task_id})
        return result.deleted_count > 0

    async def delete_by_owner(self, owner_id: str) -> int:
        result = await self.collection.delete_many({"user_id": owner_id})
        return result.deleted_count


class InMemoryTaskRepository(TaskRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    def clear(self) -> None:
        self._tasks.clear()

    def _matching(
        self,
        owner_id: str,
        status: Optional[TaskStatus],
        priority: Optional[TaskPriority],
        due_before: Optional[datetime],
        search: Optional[str],
    ) -> List[Task]:
        due_before = ensure_utc(due_before)
        needle = search.lower() if search else None
        results: List[Task] = []

        for task in self._tasks.values():
            if task.user_id != owner_id:
                continue
            if status is not None and task.status != status:
                continue
            if priority is not None and task.priority != priority:
                continue
            if due_before is not None:
                if task.due_date is None or task.due_date >= due_before:
                    continue
            if needle is not None:
                haystacks = [task.title.lower(), (task.description or "").lower()]
                if not any(needle in h for h in haystacks):
                    continue
            results.append(task)

        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    async def create(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def get_by_id(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def list_by_owner(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Task]:
        results = self._matching(owner_id, status, priority, due_before, search)
        end = None if limit is None else skip + limit
        return results[skip:end]

    async def count_by_owner(
        self,
        owner_id: str,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        due_before: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> int:
        return len(self._matching(owner_id, status, priority, due_before, search))

    async def update(self, task_id: str, updates: dict) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None:
            return None

        for key, value in updates.items():
            if key == "status":
                value = TaskStatus(value)
            elif key == "priority":
                value = TaskPriority(value)
            if hasattr(task, key):
                setattr(task, key, value)

        task.updated_at = datetime.now(timezone.utc)
        return task

    async def delete(self, task_id: str) -> bool:
        return self._tasks.pop(task_id, None) is not None

    async def delete_by_owner(self, owner_id: str) -> int:
        doomed = [t.id for t in self._tasks.values() if t.user_id == owner_id]
        for task_id in doomed:
            del self._tasks[task_id]
        return len(doomed)


async def get_task_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return TaskRepository(db)
