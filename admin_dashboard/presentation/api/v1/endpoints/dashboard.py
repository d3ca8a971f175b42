"""Dashboard stats endpoint."""

from fastapi import APIRouter, Depends

from admin_dashboard.application.schemas import DashboardStatsResponse
from admin_dashboard.application.services import DashboardService
from admin_dashboard.infrastructure.dependencies import get_dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardStatsResponse)
async def get_dashboard(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStatsResponse:
    """Collection counts; collections that failed to load count as zero and appear in ``errors``."""
    stats = await service.stats()
    return DashboardStatsResponse.model_validate(stats, from_attributes=True)
