"""
TASKNEST API - Dashboard Service

Computes the dashboard summary from a user's tasks.
This is a deterministic, side-effect free computation: the caller supplies
both the tasks and "now".
"""

from datetime import datetime, timedelta
from typing import List

from tasknest.dashboard.schemas import DashboardSummary, StatusCounts
from tasknest.tasks.enums import TaskStatus
from tasknest.tasks.models import Task
from tasknest.tasks.service import task_to_response


DUE_SOON_WINDOW = timedelta(days=7)
SECTION_LIMIT = 5
DEFAULT_PERIOD_DAYS = 7


class DashboardService:
    """Service for computing the dashboard summary."""

    def _count_by_status(self, tasks: List[Task]) -> StatusCounts:
        counts = {s.value: 0 for s in TaskStatus}
        for task in tasks:
            counts[task.status.value] += 1
        return StatusCounts(**counts)

    def _due_soon(self, tasks: List[Task], now: datetime) -> List[Task]:
        """
        Tasks due at or before now + 7 days, soonest first.

        Overdue tasks are included; tasks without a due date are not.
        """
        horizon = now + DUE_SOON_WINDOW
        due = [t for t in tasks if t.due_date is not None and t.due_date <= horizon]
        due.sort(key=lambda t: t.due_date)
        return due[:SECTION_LIMIT]

    def _recent(self, tasks: List[Task], now: datetime, period_days: int) -> List[Task]:
        since = now - timedelta(days=period_days)
        recent = [t for t in tasks if t.created_at >= since]
        recent.sort(key=lambda t: t.created_at, reverse=True)
        return recent[:SECTION_LIMIT]

    def generate_summary(
        self,
        tasks: List[Task],
        now: datetime,
        period_days: int = DEFAULT_PERIOD_DAYS,
    ) -> DashboardSummary:
        return DashboardSummary(
            generated_at=now,
            period_days=period_days,
            total_tasks=len(tasks),
            by_status=self._count_by_status(tasks),
            due_soon=[task_to_response(t) for t in self._due_soon(tasks, now)],
            recent_tasks=[task_to_response(t) for t in self._recent(tasks, now, period_days)],
        )
