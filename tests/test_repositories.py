"""Tests for the aiosqlite repositories."""

import asyncio
from datetime import date, datetime, timedelta

import pytest

from healthmate.db import HealthLogRepository, UserProfileRepository
from healthmate.models.health_log import Meal, Mood
from healthmate.models.user_profile import ActivityLevel, Gender
from healthmate.services.merge import add_meal, new_daily_log

DAY = datetime(2026, 10, 18, 8, 0)


class TestUserProfileRepository:
    """Tests for profile storage."""

    def test_create_and_get(self, db_path, sample_profile):
        """Test a profile round trip through the database."""

        async def scenario():
            repo = UserProfileRepository(db_path)
            profile_id = await repo.create(sample_profile)
            return profile_id, await repo.get(profile_id)

        profile_id, stored = asyncio.run(scenario())

        assert stored.id == profile_id
        assert stored.name == "Test User"
        assert stored.gender == Gender.MALE
        assert stored.health_goals == sample_profile.health_goals
        assert stored.created_at is not None

    def test_get_missing(self, db_path):
        """Test that an unknown ID returns None."""
        assert asyncio.run(UserProfileRepository(db_path).get(42)) is None

    def test_update_and_latest(self, db_path, sample_profile):
        """Test updating a stored profile."""

        async def scenario():
            repo = UserProfileRepository(db_path)
            sample_profile.id = await repo.create(sample_profile)
            sample_profile.weight = 78
            sample_profile.activity_level = ActivityLevel.ACTIVE
            await repo.update(sample_profile)
            return await repo.get_latest()

        latest = asyncio.run(scenario())

        assert latest.weight == 78
        assert latest.activity_level == ActivityLevel.ACTIVE

    def test_update_requires_id(self, db_path, sample_profile):
        """Test that an unsaved profile cannot be updated."""
        with pytest.raises(ValueError):
            asyncio.run(UserProfileRepository(db_path).update(sample_profile))


class TestHealthLogRepository:
    """Tests for daily log storage."""

    def test_upsert_and_get_by_day(self, db_path):
        """Test storing and loading a log by calendar day."""
        log = new_daily_log(1, DAY)
        log.mood = Mood.HAPPY

        async def scenario():
            repo = HealthLogRepository(db_path)
            log_id = await repo.upsert(log)
            return log_id, await repo.get_by_day(1, DAY.date())

        log_id, stored = asyncio.run(scenario())

        assert stored.id == log_id
        assert stored.mood == Mood.HAPPY
        assert stored.date == DAY

    def test_one_log_per_day(self, db_path):
        """Test that a second log on the same day replaces the first."""
        morning = new_daily_log(1, DAY)
        evening = new_daily_log(1, DAY.replace(hour=21))
        evening.energy = 9

        async def scenario():
            repo = HealthLogRepository(db_path)
            first_id = await repo.upsert(morning)
            second_id = await repo.upsert(evening)
            return first_id, second_id, await repo.list_recent(1)

        first_id, second_id, logs = asyncio.run(scenario())

        assert first_id == second_id
        assert len(logs) == 1
        assert logs[0].energy == 9

    def test_days_are_per_user(self, db_path):
        """Test that two users can log the same day."""

        async def scenario():
            repo = HealthLogRepository(db_path)
            await repo.upsert(new_daily_log(1, DAY))
            await repo.upsert(new_daily_log(2, DAY))
            return await repo.get_by_day(1, DAY.date()), await repo.get_by_day(2, DAY.date())

        first, second = asyncio.run(scenario())
        assert first.id != second.id

    def test_listing(self, db_path):
        """Test range and recency queries."""

        async def scenario():
            repo = HealthLogRepository(db_path)
            for i in range(5):
                await repo.upsert(new_daily_log(1, DAY - timedelta(days=i)))
            await repo.upsert(new_daily_log(2, DAY))
            return (
                await repo.list_since(1, DAY - timedelta(days=2)),
                await repo.list_between(1, DAY - timedelta(days=3), DAY - timedelta(days=1)),
                await repo.list_recent(1, limit=2),
                await repo.get_latest(1),
            )

        since, between, recent, latest = asyncio.run(scenario())

        assert [log.day for log in since] == [
            (DAY - timedelta(days=2)).date(),
            (DAY - timedelta(days=1)).date(),
            DAY.date(),
        ]
        assert len(between) == 3
        assert between[0].date < between[-1].date
        assert [log.day for log in recent] == [DAY.date(), (DAY - timedelta(days=1)).date()]
        assert latest.day == DAY.date()

    def test_update_day_creates_and_updates(self, db_path):
        """Test find-or-create through update_day."""

        def set_mood(existing):
            log = existing or new_daily_log(1, DAY)
            log.mood = Mood.NEUTRAL if existing else Mood.HAPPY
            return log

        async def scenario():
            repo = HealthLogRepository(db_path)
            created = await repo.update_day(1, DAY.date(), set_mood)
            updated = await repo.update_day(1, DAY.date(), set_mood)
            return created, updated

        created, updated = asyncio.run(scenario())

        assert created.mood == Mood.HAPPY
        assert updated.mood == Mood.NEUTRAL
        assert created.id == updated.id

    def test_update_day_rolls_back_on_error(self, db_path):
        """Test that a failing mutation stores nothing."""

        def explode(existing):
            raise RuntimeError("boom")

        async def scenario():
            repo = HealthLogRepository(db_path)
            with pytest.raises(RuntimeError):
                await repo.update_day(1, DAY.date(), explode)
            return await repo.get_by_day(1, DAY.date())

        assert asyncio.run(scenario()) is None

    def test_update_day_rejects_moving_the_log(self, db_path):
        """Test that a mutation cannot change the log's key."""

        async def scenario():
            repo = HealthLogRepository(db_path)
            with pytest.raises(ValueError):
                await repo.update_day(
                    1, DAY.date(), lambda existing: new_daily_log(1, DAY + timedelta(days=1))
                )
            return await repo.list_recent(1)

        assert asyncio.run(scenario()) == []

    def test_concurrent_updates_are_not_lost(self, db_path):
        """Test that concurrent meal additions on one day all survive."""

        async def scenario():
            repo = HealthLogRepository(db_path)

            async def add(i):
                meal = Meal(name=f"Meal {i}", calories=100)
                await repo.update_day(
                    1, DAY.date(), lambda existing: add_meal(existing, meal, 1, now=DAY)
                )

            await asyncio.gather(*(add(i) for i in range(10)))
            return await repo.get_by_day(1, DAY.date())

        stored = asyncio.run(scenario())

        assert len(stored.diet.meals) == 10
        assert stored.diet.total_calories == 1000

    def test_clear_all_keeps_profiles(self, db_path, sample_profile):
        """Test the bulk clear."""

        async def scenario():
            profiles = UserProfileRepository(db_path)
            logs = HealthLogRepository(db_path)
            await profiles.create(sample_profile)
            await logs.upsert(new_daily_log(1, DAY))
            await logs.upsert(new_daily_log(1, DAY - timedelta(days=1)))
            deleted = await logs.clear_all()
            return deleted, await logs.list_recent(1), await profiles.list_all()

        deleted, remaining, profiles = asyncio.run(scenario())

        assert deleted == 2
        assert remaining == []
        assert len(profiles) == 1

    def test_get_by_day_missing(self, db_path):
        """Test an empty day."""
        assert asyncio.run(HealthLogRepository(db_path).get_by_day(1, date(2026, 1, 1))) is None
