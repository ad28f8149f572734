"""Daily log service.

Ties the merge engine to the repositories: every write goes through
``HealthLogRepository.update_day`` so the find-merge-store cycle for a
(user, day) pair runs as one atomic transaction.
"""

import logging
from datetime import datetime, time, timedelta

from ..db.repositories import HealthLogRepository, UserProfileRepository
from ..models.analytics import AnalyticsReport, CalorieBalanceReport
from ..models.health_log import Activity, DailyLog, Meal
from ..models.updates import DailyLogUpdate
from ..models.user_profile import UserProfile
from . import analytics, merge

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 30


class HealthLogService:
    """Service for recording and reading daily health logs."""

    def __init__(
        self,
        log_repo: HealthLogRepository,
        profile_repo: UserProfileRepository | None = None,
    ):
        """Initialize the service.

        Args:
            log_repo: Repository for daily logs
            profile_repo: Repository for user profiles, used for BMI and
                fitness level. Without it those fields are never derived.
        """
        self.log_repo = log_repo
        self.profile_repo = profile_repo

    async def _profile(self, user_id: int) -> UserProfile | None:
        if self.profile_repo is None:
            return None
        return await self.profile_repo.get(user_id)

    async def save_update(
        self,
        user_id: int,
        update: DailyLogUpdate,
        now: datetime | None = None,
    ) -> DailyLog:
        """Merge a partial update into the user's log for the update's day.

        The target day is ``update.date`` when given, otherwise today.
        """
        now = now or datetime.now()
        target = update.date or now
        profile = await self._profile(user_id)

        def mutate(existing: DailyLog | None) -> DailyLog:
            return merge.merge_daily_update(existing, update, user_id, profile, now)

        log = await self.log_repo.update_day(user_id, target.date(), mutate)
        logger.info("Saved health log %s for user %s on %s", log.id, user_id, log.day)
        return log

    async def add_meal(
        self, user_id: int, meal: Meal, now: datetime | None = None
    ) -> DailyLog:
        """Append a meal to today's log."""
        now = now or datetime.now()
        profile = await self._profile(user_id)
        return await self.log_repo.update_day(
            user_id,
            now.date(),
            lambda existing: merge.add_meal(existing, meal, user_id, profile, now),
        )

    async def add_activity(
        self, user_id: int, activity: Activity, now: datetime | None = None
    ) -> DailyLog:
        """Append an exercise activity to today's log."""
        now = now or datetime.now()
        profile = await self._profile(user_id)
        return await self.log_repo.update_day(
            user_id,
            now.date(),
            lambda existing: merge.add_activity(existing, activity, user_id, profile, now),
        )

    async def get_today(self, user_id: int, now: datetime | None = None) -> DailyLog:
        """Get today's log, creating an empty one if none exists yet."""
        now = now or datetime.now()
        existing = await self.log_repo.get_by_day(user_id, now.date())
        if existing:
            return existing

        logger.debug("Creating empty log for user %s on %s", user_id, now.date())
        return await self.log_repo.update_day(
            user_id,
            now.date(),
            lambda stored: stored or merge.new_daily_log(user_id, now),
        )

    async def list_logs(
        self,
        user_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[DailyLog]:
        """List logs newest first.

        With both ``start`` and ``end`` the range covers whole days: from
        the start of ``start``'s day to the end of ``end``'s day.
        """
        if start and end:
            start = datetime.combine(start.date(), time.min)
            end = datetime.combine(end.date(), time.max)
        return await self.log_repo.list_recent(user_id, start, end, limit)

    async def window(
        self, user_id: int, days: int, now: datetime | None = None
    ) -> list[DailyLog]:
        """Logs from the last ``days`` days, oldest first."""
        now = now or datetime.now()
        return await self.log_repo.list_since(user_id, now - timedelta(days=days))

    async def analytics(
        self, user_id: int, days: int = 7, now: datetime | None = None
    ) -> AnalyticsReport:
        """Aggregate the last ``days`` days of logs."""
        logs = await self.window(user_id, days, now)
        return analytics.aggregate(logs, days)

    async def calorie_balance(
        self, user_id: int, days: int = 7, now: datetime | None = None
    ) -> CalorieBalanceReport:
        """Calorie intake versus burn over the last ``days`` days."""
        logs = await self.window(user_id, days, now)
        return analytics.calorie_balance_report(logs)

    async def dashboard_score(self, user_id: int) -> int:
        """Six-factor health score of the user's most recent log."""
        latest = await self.log_repo.get_latest(user_id)
        return analytics.dashboard_health_score(latest)

    async def clear_all(self) -> int:
        """Delete every stored log, for every user."""
        deleted = await self.log_repo.clear_all()
        logger.warning("Cleared %d health logs", deleted)
        return deleted
