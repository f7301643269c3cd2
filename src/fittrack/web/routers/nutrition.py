"""Nutrition tracking routes."""

from fastapi import APIRouter, Depends, HTTPException

from ...models.entries import NutritionEntry
from ...services import TrackerService
from ..deps import get_service, get_user_id
from ..schemas import NutritionCreate, NutritionUpdate, to_changes

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])

NOT_FOUND = "Food entry not found"


@router.get("")
async def list_meals(
    date_filter: str = "today",
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entries = await service.list_meals(user_id, date_filter)
    return [e.to_dict() for e in entries]


@router.post("", status_code=201)
async def add_meal(
    body: NutritionCreate,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entry = await service.add_meal(NutritionEntry(user_id=user_id, **to_changes(body)))
    return entry.to_dict()


@router.get("/summary")
async def nutrition_summary(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Today's calorie and protein totals against the goals."""
    return await service.nutrition_summary(user_id)


@router.get("/weekly")
async def weekly_calories(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.weekly_calories(user_id)


@router.get("/macros")
async def macro_distribution(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.macro_distribution(user_id)


@router.get("/{entry_id}")
async def get_meal(
    entry_id: int,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entry = await service.get_meal(user_id, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return entry.to_dict()


@router.patch("/{entry_id}")
async def update_meal(
    entry_id: int,
    body: NutritionUpdate,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entry = await service.update_meal(user_id, entry_id, to_changes(body))
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return entry.to_dict()


@router.delete("/{entry_id}")
async def delete_meal(
    entry_id: int,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    if not await service.delete_meal(user_id, entry_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Food entry deleted"}
