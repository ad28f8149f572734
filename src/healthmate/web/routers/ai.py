"""AI assistant routes."""

from fastapi import APIRouter, Body, Depends, Query

from ...errors import ValidationError
from ...models.assistant import ChatTurn
from ...services import HealthAssistant
from ...services.validation import parse_datetime
from .deps import get_assistant, get_user_id

router = APIRouter(prefix="/api/ai", tags=["ai"])


def parse_history(value) -> list[ChatTurn]:
    """Previous chat turns sent by the client, oldest first."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError("history", "must be a list")
    turns = []
    for item in value:
        if not isinstance(item, dict):
            raise ValidationError("history", "items must be objects")
        try:
            turns.append(ChatTurn.from_dict(item))
        except ValueError:
            raise ValidationError("history", f"unknown role {item.get('role')!r}")
    return turns


@router.post("/daily-summary")
async def daily_summary(
    payload: dict = Body(default={}),
    user_id: int = Depends(get_user_id),
    assistant: HealthAssistant = Depends(get_assistant),
):
    """Summarize a day's log and store the summary on it."""
    summary = await assistant.daily_summary(user_id, parse_datetime("date", payload.get("date")))
    return summary.to_dict()


@router.post("/chat")
async def chat(
    payload: dict = Body(...),
    user_id: int = Depends(get_user_id),
    assistant: HealthAssistant = Depends(get_assistant),
):
    message = payload.get("message")
    if not isinstance(message, str):
        raise ValidationError("message", "Message is required")
    reply = await assistant.chat(user_id, message, parse_history(payload.get("history")))
    return reply.to_dict()


@router.get("/predictions")
async def predictions(
    days: int = Query(30, ge=1, le=365),
    user_id: int = Depends(get_user_id),
    assistant: HealthAssistant = Depends(get_assistant),
):
    result = await assistant.predictions(user_id, days)
    return result.to_dict()
