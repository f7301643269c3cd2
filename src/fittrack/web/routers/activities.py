"""Activity feed, history and export routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ...services import TrackerService
from ..deps import get_service, get_user_id

router = APIRouter(prefix="/api", tags=["activities"])


@router.get("/activities/recent")
async def recent_activities(
    limit: int = Query(10, ge=1, le=100),
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.recent_activities(user_id, limit)


@router.get("/activities/log")
async def activity_log(
    limit: int = Query(10, ge=1, le=100),
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Audit trail of entry creations, edits and deletions."""
    entries = await service.audit_log(user_id, limit)
    return [e.to_dict() for e in entries]


@router.get("/history")
async def history(
    activity_type: str = "all",
    date_from: date | None = None,
    date_to: date | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    return await service.history(
        user_id, activity_type, date_from, date_to, page=page, per_page=limit
    )


@router.get("/history/export")
async def export_history(
    activity_type: str = "all",
    date_from: date | None = None,
    date_to: date | None = None,
    service: TrackerService = Depends(get_service),
    user_id: int = Depends(get_user_id),
):
    """Filtered history as a downloadable CSV file."""
    filename, content = await service.export_history(
        user_id, activity_type, date_from, date_to
    )
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
