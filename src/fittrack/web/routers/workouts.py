"""Workout tracking routes."""

from fastapi import APIRouter, Depends, HTTPException

from ...models.entries import WorkoutEntry
from ...services import TrackerService
from ..deps import get_service, get_user_id
from ..schemas import WorkoutCreate, WorkoutUpdate, to_changes

router = APIRouter(prefix="/api/workouts", tags=["workouts"])

NOT_FOUND = "Workout not found"


@router.get("")
async def list_workouts(
    type_filter: str = "all",
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    workouts = await service.list_workouts(user_id, type_filter)
    return [w.to_dict() for w in workouts]


@router.post("", status_code=201)
async def add_workout(
    body: WorkoutCreate,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Log a workout together with its exercises."""
    fields = to_changes(body)
    fields.pop("exercises")
    workout = WorkoutEntry(
        user_id=user_id,
        exercises=[ex.to_entry() for ex in body.exercises],
        **fields,
    )
    workout = await service.add_workout(workout)
    return workout.to_dict()


@router.get("/summary")
async def workout_summary(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.workout_summary(user_id)


@router.get("/types")
async def workout_types(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.workout_type_distribution(user_id)


@router.get("/duration")
async def workout_duration(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.weekly_workout_duration(user_id)


@router.get("/{workout_id}")
async def get_workout(
    workout_id: int,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    workout = await service.get_workout(user_id, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return workout.to_dict()


@router.patch("/{workout_id}")
async def update_workout(
    workout_id: int,
    body: WorkoutUpdate,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Edit a workout; a supplied exercise list replaces the stored one."""
    changes = to_changes(body)
    changes.pop("exercises", None)
    exercises = [ex.to_entry() for ex in body.exercises] if body.exercises else None
    workout = await service.update_workout(user_id, workout_id, changes, exercises)
    if not workout:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return workout.to_dict()


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: int,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    if not await service.delete_workout(user_id, workout_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Workout deleted"}
