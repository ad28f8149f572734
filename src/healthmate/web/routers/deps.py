"""Request dependencies shared by the routers."""

from fastapi import Header, HTTPException, Request

from ...db import UserProfileRepository
from ...services import HealthAssistant, HealthLogService


def get_user_id(x_user_id: int | None = Header(None)) -> int:
    """Authenticated user ID, set by the auth proxy in ``X-User-Id``."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


def get_log_service(request: Request) -> HealthLogService:
    return request.app.state.log_service


def get_assistant(request: Request) -> HealthAssistant:
    return request.app.state.assistant


def get_profile_repo(request: Request) -> UserProfileRepository:
    return request.app.state.profile_repo
