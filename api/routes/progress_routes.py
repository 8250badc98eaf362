"""
Learning progress and dashboard endpoints.
"""

from fastapi import APIRouter, Depends

from api.schemas.progress_schemas import DashboardResponse, ProgressListResponse
from api.schemas.user_schemas import User
from api.services.dashboard_service import DashboardService
from api.services.progress_service import ProgressService
from api.utils.auth import get_current_user
from api.utils.services import get_dashboard_service, get_progress_service

progress_routes = APIRouter()


@progress_routes.get("/progress", response_model=ProgressListResponse)
async def get_progress(
    current_user: User = Depends(get_current_user),
    progress: ProgressService = Depends(get_progress_service),
) -> ProgressListResponse:
    """Every (category, language) bucket for the current user."""
    return ProgressListResponse(progress=progress.get_user_progress(current_user.user_id))


@progress_routes.get("/progress/by-category", response_model=ProgressListResponse)
async def get_progress_by_category(
    current_user: User = Depends(get_current_user),
    progress: ProgressService = Depends(get_progress_service),
) -> ProgressListResponse:
    """Buckets ordered by average percentage, best first."""
    return ProgressListResponse(progress=progress.get_progress_by_category(current_user.user_id))


@progress_routes.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    return dashboard.build(current_user.user_id)
