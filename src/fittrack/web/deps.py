"""Request dependencies shared by the routers."""

from fastapi import Request

from .. import config
from ..services import TrackerService


def get_service(request: Request) -> TrackerService:
    return TrackerService(request.app.state.db_path)


def get_user_id() -> int:
    """The acting user; the API serves a single configured account."""
    return config.DEFAULT_USER_ID
