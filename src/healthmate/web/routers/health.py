"""Daily health log routes."""

from fastapi import APIRouter, Body, Depends, Query

from ...models.health_log import DailyLog
from ...services import HealthLogService
from ...services.validation import parse_activity, parse_datetime, parse_log_update, parse_meal
from .deps import get_log_service, get_user_id

router = APIRouter(prefix="/api/health", tags=["health"])


def _payload(log: DailyLog) -> dict:
    return {"id": log.id, **log.to_dict()}


@router.post("/log")
async def save_log(
    payload: dict = Body(...),
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    """Merge a partial update into a day's log (today unless ``date`` is given)."""
    log = await service.save_update(user_id, parse_log_update(payload))
    return _payload(log)


@router.post("/meal")
async def add_meal(
    payload: dict = Body(...),
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    """Append a meal to today's log."""
    log = await service.add_meal(user_id, parse_meal(payload))
    return _payload(log)


@router.post("/activity")
async def add_activity(
    payload: dict = Body(...),
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    """Append an exercise activity to today's log."""
    log = await service.add_activity(user_id, parse_activity(payload))
    return _payload(log)


@router.get("/today")
async def get_today(
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    """Today's log, created empty on first access."""
    log = await service.get_today(user_id)
    return _payload(log)


@router.get("/logs")
async def list_logs(
    start: str | None = None,
    end: str | None = None,
    limit: int = Query(30, ge=1, le=366),
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    """Logs newest first, optionally limited to an inclusive date range."""
    logs = await service.list_logs(
        user_id,
        parse_datetime("start", start),
        parse_datetime("end", end),
        limit,
    )
    return [_payload(log) for log in logs]


@router.get("/analytics")
async def analytics(
    days: int = Query(7, ge=1, le=365),
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    report = await service.analytics(user_id, days)
    return report.to_dict()


@router.get("/calorie-balance")
async def calorie_balance(
    days: int = Query(7, ge=1, le=365),
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    report = await service.calorie_balance(user_id, days)
    return report.to_dict()


@router.get("/score")
async def health_score(
    user_id: int = Depends(get_user_id),
    service: HealthLogService = Depends(get_log_service),
):
    """Dashboard health score of the most recent log."""
    return {"health_score": await service.dashboard_score(user_id)}
