"""Account and goal routes."""

from fastapi import APIRouter, Depends, HTTPException

from ...services import TrackerService
from ..deps import get_service, get_user_id
from ..schemas import GoalsRequest, RegisterRequest, to_changes

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, service: TrackerService = Depends(get_service)):
    """Create an account."""
    user = await service.register_user(
        body.username, body.password, email=body.email, display_name=body.display_name
    )
    return user.to_dict()


@router.get("/user")
async def current_user(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    user = await service.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user.to_dict()


@router.get("/goals")
async def get_goals(
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    goals = await service.get_goals(user_id)
    return goals.to_dict()


@router.post("/goals", status_code=201)
async def set_goals(
    body: GoalsRequest,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Save a new active goal set, replacing the current one."""
    goals = await service.set_goals(user_id, **body.model_dump())
    return goals.to_dict()


@router.patch("/goals")
async def update_goals(
    body: GoalsRequest,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    goals = await service.update_goals(user_id, to_changes(body))
    return goals.to_dict()
