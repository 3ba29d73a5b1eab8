"""
TASKNEST API - Dashboard Schemas
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from tasknest.tasks.schemas import TaskResponse


class StatusCounts(BaseModel):
    """Number of tasks per status."""

    todo: int = 0
    in_progress: int = 0
    done: int = 0


class DashboardSummary(BaseModel):
    """Summary of the caller's tasks."""

    generated_at: datetime = Field(description="The 'now' the summary was computed for")
    period_days: int = Field(description="Window used for recent_tasks")
    total_tasks: int = Field(description="Number of tasks owned by the user")
    by_status: StatusCounts
    due_soon: List[TaskResponse] = Field(description="Up to 5 tasks due within 7 days (or overdue), soonest first")
    recent_tasks: List[TaskResponse] = Field(description="Up to 5 tasks created within the period, newest first")
