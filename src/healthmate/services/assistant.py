"""AI health assistant: prompt building, completion and response cleanup."""

import logging
import re
from datetime import datetime, time, timedelta

from ..agents.prompts import build_chat_system_prompt, build_daily_summary_prompt
from ..clients.base import CompletionClient
from ..db.repositories import HealthLogRepository, UserProfileRepository
from ..errors import ExternalServiceError, NotFoundError, ValidationError
from ..models.analytics import PredictionResult
from ..models.assistant import ChatReply, ChatRole, ChatTurn, DailySummary
from ..models.health_log import DailyLog
from . import analytics

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "Sorry, the AI service is temporarily unavailable. Please try again later."
MAX_RESPONSE_WORDS = 100
MAX_RECOMMENDATIONS = 5
MAX_CONTEXT_TURNS = 5
SUMMARY_TREND_DAYS = 7

_LIST_ITEM = re.compile(r"^\s*(?:[•\-*·]|\d+[.)])\s+")
_WORD = re.compile(r"\S+")


def select_response_text(message: dict | None) -> str:
    """Pick the usable text from a completion message.

    Prefers ``content``, then ``reasoning``, then the first reasoning
    detail's ``summary``. Falls back to a fixed apology.
    """
    if not message:
        return FALLBACK_TEXT

    content = message.get("content")
    if isinstance(content, str) and content.strip():
        return content

    reasoning = message.get("reasoning")
    if isinstance(reasoning, str) and reasoning.strip():
        return reasoning

    details = message.get("reasoning_details")
    if isinstance(details, list) and details and isinstance(details[0], dict):
        summary = details[0].get("summary")
        if isinstance(summary, str) and summary.strip():
            return summary

    return FALLBACK_TEXT


def truncate_words(text: str, limit: int = MAX_RESPONSE_WORDS) -> str:
    """Cut ``text`` after ``limit`` words, appending ``...`` if anything was cut.

    Whitespace inside the kept part, line breaks included, is preserved.
    """
    words = list(_WORD.finditer(text))
    if len(words) <= limit:
        return text
    return text[: words[limit - 1].end()] + "..."


def extract_recommendations(text: str, limit: int = MAX_RECOMMENDATIONS) -> list[str]:
    """Collect bulleted or numbered lines from free text, in order."""
    items = []
    for line in text.splitlines():
        if _LIST_ITEM.match(line):
            items.append(line.strip())
            if len(items) == limit:
                break
    return items


class HealthAssistant:
    """Daily summaries, chat and predictions for a user."""

    def __init__(
        self,
        client: CompletionClient | None,
        log_repo: HealthLogRepository,
        profile_repo: UserProfileRepository,
    ):
        """Initialize the assistant.

        Args:
            client: Completion backend. Without one every AI answer is
                the fallback text.
            log_repo: Repository for daily logs
            profile_repo: Repository for user profiles
        """
        self.client = client
        self.log_repo = log_repo
        self.profile_repo = profile_repo

    async def _ask(self, messages: list[dict], max_tokens: int, temperature: float) -> str:
        """Run a completion and return cleaned-up text, never raising."""
        if self.client is None:
            logger.warning("No completion client configured, using fallback text")
            return FALLBACK_TEXT

        try:
            message = await self.client.complete(
                messages, max_tokens=max_tokens, temperature=temperature
            )
        except ExternalServiceError as e:
            logger.warning("AI completion failed: %s", e)
            return FALLBACK_TEXT

        return truncate_words(select_response_text(message))

    async def daily_summary(
        self, user_id: int, date: datetime | None = None
    ) -> DailySummary:
        """Summarize a day and cache the summary on its log.

        Raises:
            NotFoundError: if the user has no log for that day
        """
        target = date or datetime.now()
        log = await self.log_repo.get_by_day(user_id, target.date())
        if log is None:
            raise NotFoundError("No health data found for this date")

        start = datetime.combine(target.date(), time.min) - timedelta(days=SUMMARY_TREND_DAYS)
        end = datetime.combine(target.date(), time.max)
        recent = await self.log_repo.list_between(user_id, start, end)
        profile = await self.profile_repo.get(user_id)

        prompt = build_daily_summary_prompt(profile, log, recent)
        summary = await self._ask(
            [{"role": ChatRole.USER.value, "content": prompt}], max_tokens=500, temperature=0.7
        )
        recommendations = extract_recommendations(summary)

        def attach(stored: DailyLog | None) -> DailyLog:
            updated = stored or log
            updated.ai_summary = summary
            updated.ai_recommendations = recommendations
            return updated

        await self.log_repo.update_day(user_id, log.day, attach)
        logger.info(
            "Generated daily summary for user %s on %s (%d recommendations)",
            user_id,
            log.day,
            len(recommendations),
        )

        return DailySummary(
            summary=summary,
            recommendations=recommendations,
            health_score=analytics.daily_health_score(log),
            trends=analytics.analyze_trends(recent),
        )

    async def chat(
        self,
        user_id: int,
        message: str,
        previous: list[ChatTurn] | None = None,
    ) -> ChatReply:
        """Answer a chat message with the user's latest log as context."""
        if not message or not message.strip():
            raise ValidationError("message", "Message is required")

        profile = await self.profile_repo.get(user_id)
        recent_log = await self.log_repo.get_latest(user_id)

        messages = [
            {
                "role": ChatRole.SYSTEM.value,
                "content": build_chat_system_prompt(profile, recent_log),
            }
        ]
        history = [turn for turn in previous or [] if turn.role != ChatRole.SYSTEM]
        messages.extend(turn.to_message() for turn in history[-MAX_CONTEXT_TURNS:])
        messages.append({"role": ChatRole.USER.value, "content": message})

        response = await self._ask(messages, max_tokens=300, temperature=0.8)
        return ChatReply(response=response, timestamp=datetime.now())

    async def predictions(
        self, user_id: int, days: int = 30, now: datetime | None = None
    ) -> PredictionResult:
        """Forward-looking signals from the last ``days`` days of logs."""
        now = now or datetime.now()
        logs = await self.log_repo.list_since(user_id, now - timedelta(days=days))
        return analytics.predict(logs)
