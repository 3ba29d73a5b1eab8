from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tasknest.auth.dependencies import CurrentAuth
from tasknest.dashboard.schemas import DashboardSummary
from tasknest.dashboard.service import DashboardService, DEFAULT_PERIOD_DAYS
from tasknest.responses import ApiResponse
from tasknest.tasks.repository import TaskRepositoryInterface, get_task_repository


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


async def get_dashboard_service() -> DashboardService:
    """Dependency to get dashboard service instance."""
    return DashboardService()


@router.get("", response_model=ApiResponse[DashboardSummary])
async def get_dashboard(
    auth: CurrentAuth,
    task_repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
    period: int = Query(default=DEFAULT_PERIOD_DAYS, ge=1, le=365, description="Days covered by recent_tasks"),
) -> ApiResponse[DashboardSummary]:
    tasks = await task_repository.list_by_owner(auth.subject)
    now = datetime.now(timezone.utc)
    return ApiResponse(data=dashboard_service.generate_summary(tasks, now, period))
