"""Weight tracking routes."""

from fastapi import APIRouter, Depends, HTTPException

from ...models.entries import WeightEntry
from ...services import TrackerService
from ..deps import get_service, get_user_id
from ..schemas import WeightCreate, WeightUpdate, to_changes

router = APIRouter(prefix="/api/weight", tags=["weight"])

NOT_FOUND = "Weight entry not found"


@router.get("")
async def list_weights(
    filter: str = "all",
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Readings for a window preset, newest first."""
    return await service.list_weights(user_id, filter)


@router.post("", status_code=201)
async def add_weight(
    body: WeightCreate,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entry = await service.add_weight(WeightEntry(user_id=user_id, **to_changes(body)))
    return entry.to_dict()


@router.get("/summary")
async def weight_summary(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.weight_summary(user_id)


@router.get("/{entry_id}")
async def get_weight(
    entry_id: int,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entry = await service.get_weight(user_id, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return entry.to_dict()


@router.patch("/{entry_id}")
async def update_weight(
    entry_id: int,
    body: WeightUpdate,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    entry = await service.update_weight(user_id, entry_id, to_changes(body))
    if not entry:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return entry.to_dict()


@router.delete("/{entry_id}")
async def delete_weight(
    entry_id: int,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    if not await service.delete_weight(user_id, entry_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Weight entry deleted"}
