"""Dashboard routes."""

from fastapi import APIRouter, Depends

from ...services import TrackerService
from ..deps import get_service, get_user_id

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/metrics")
async def metrics(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Headline calories, weight and workout numbers with goal progress."""
    return await service.dashboard_metrics(user_id)


@router.get("/weekly-progress")
async def weekly_progress(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.weekly_progress(user_id)
