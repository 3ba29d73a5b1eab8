"""
TASKNEST API - Task Schemas

Pydantic models for task API requests and responses.
"""

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator

from tasknest.tasks.enums import TaskStatus, TaskPriority


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    cleaned: List[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class TaskCreateRequest(BaseModel):
    """Request model for creating a task."""

    title: str = Field(min_length=1, max_length=500, description="Task title")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Task status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")
    tags: List[str] = Field(default_factory=list, max_length=50, description="Free-form tags")
    is_private: bool = Field(default=False, description="Hide from shared views")

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: List[str]) -> List[str]:
        return _clean_tags(value)


class TaskUpdateRequest(BaseModel):
    """Request model for updating a task. Only provided fields change."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=500, description="Task title")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")
    status: Optional[TaskStatus] = Field(default=None, description="Task status")
    priority: Optional[TaskPriority] = Field(default=None, description="Task priority")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")
    tags: Optional[List[str]] = Field(default=None, max_length=50, description="Free-form tags")
    is_private: Optional[bool] = Field(default=None, description="Hide from shared views")

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(value)


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    user_id: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: TaskStatus = Field(description="Task status")
    priority: TaskPriority = Field(description="Task priority")
    tags: List[str] = Field(description="Free-form tags")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")
    completed_at: Optional[datetime] = Field(default=None, description="When the task was marked done")
    is_private: bool = Field(description="Hide from shared views")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class TaskListResponse(BaseModel):
    """Response model for one page of tasks."""

    items: List[TaskResponse] = Field(description="Tasks on this page")
    total: int = Field(description="Total number of matching tasks")
    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Page size")
    total_pages: int = Field(description="Number of pages, at least 1")
