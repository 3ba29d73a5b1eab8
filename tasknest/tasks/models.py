"""
TASKNEST API - Task Models

Internal task model for database operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
import uuid

from tasknest.tasks.enums import TaskStatus, TaskPriority


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so they compare with stored values."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Task:
    """Task entity for database storage."""

    id: str
    user_id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    is_private: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        user_id: str,
        title: str,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        due_date: Optional[datetime] = None,
        is_private: bool = False,
    ) -> "Task":
        """Create a new task with generated ID."""
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            status=status,
            priority=priority,
            description=description,
            tags=list(tags or []),
            due_date=ensure_utc(due_date),
            completed_at=now if status == TaskStatus.DONE else None,
            is_private=is_private,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        """Convert task to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "description": self.description,
            "tags": self.tags,
            "due_date": self.due_date,
            "completed_at": self.completed_at,
            "is_private": self.is_private,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create task from MongoDB document."""
        return cls(
            id=data["_id"],
            user_id=data["user_id"],
            title=data["title"],
            status=TaskStatus(data["status"]),
            priority=TaskPriority(data["priority"]),
            description=data.get("description"),
            tags=list(data.get("tags") or []),
            due_date=ensure_utc(data.get("due_date")),
            completed_at=ensure_utc(data.get("completed_at")),
            is_private=data.get("is_private", False),
            created_at=ensure_utc(data["created_at"]),
            updated_at=ensure_utc(data["updated_at"]),
        )
