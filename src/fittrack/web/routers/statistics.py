"""Long-range statistics routes."""

from fastapi import APIRouter, Depends

from ...services import TrackerService
from ..deps import get_service, get_user_id

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


@router.get("/summary")
async def summary(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.statistics_summary(user_id)


@router.get("/weight-trend")
async def weight_trend(
    period: str = "3m",
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.weight_trend(user_id, period)


@router.get("/workout-consistency")
async def workout_consistency(
    period: str = "3m",
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Workouts per week against the weekly goal."""
    return await service.workout_consistency(user_id, period)


@router.get("/nutrition-weight-correlation")
async def nutrition_weight_correlation(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.nutrition_weight_correlation(user_id)


@router.get("/workout-performance")
async def workout_performance(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.workout_performance(user_id)


@router.get("/goal-progress")
async def goal_progress(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.goal_progress(user_id)
