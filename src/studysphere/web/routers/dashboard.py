from fastapi import APIRouter

from studysphere.core.modules.dashboard.models import DashboardStats
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard/stats",
    summary="Dashboard statistics",
    description="Note, task and focus totals with the current and longest study streak.",
    operation_id="getDashboardStats",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def get_dashboard_stats(app: AppDep, token: SessionTokenDep) -> DashboardStats:
    return await app.get_dashboard_stats(token)
