"""Dashboard endpoints."""

from fastapi import APIRouter, status

from app.dependencies import CurrentUserId, StorageDep
from app.schemas.dashboard import DashboardStats
from app.services.dashboard_service import DashboardService

router = APIRouter()


@router.get(
    "/stats",
    response_model=DashboardStats,
    status_code=status.HTTP_200_OK,
    summary="Dashboard statistics",
)
async def get_dashboard_stats(user_id: CurrentUserId, storage: StorageDep) -> DashboardStats:
    """
    Counts for the authenticated user's dashboard.

    Returns:
        Physicians, upcoming appointments, unsent reminders and appointments this month
    """
    return await DashboardService(storage).get_stats(user_id)
