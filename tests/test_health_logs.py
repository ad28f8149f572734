"""Tests for the daily log service."""

import asyncio
from datetime import datetime, timedelta

import pytest

from healthmate.db import HealthLogRepository, UserProfileRepository
from healthmate.models.health_log import Activity, ExerciseType, Meal, Mood
from healthmate.services import HealthLogService
from healthmate.services.validation import parse_log_update

NOW = datetime(2026, 10, 18, 9, 30)


@pytest.fixture
def service(db_path):
    return HealthLogService(HealthLogRepository(db_path), UserProfileRepository(db_path))


@pytest.fixture
def user_id(db_path, sample_profile):
    return asyncio.run(UserProfileRepository(db_path).create(sample_profile))


class TestSaveUpdate:
    """Tests for saving partial updates."""

    def test_updates_merge_into_one_log(self, service, user_id):
        """Test that two partial updates on one day share a log."""

        async def scenario():
            await service.save_update(user_id, parse_log_update({"steps": {"count": 8000}}), NOW)
            return await service.save_update(
                user_id, parse_log_update({"mood": "happy", "energy": 7}), NOW
            )

        log = asyncio.run(scenario())

        assert log.steps.count == 8000
        assert log.steps.calories_burned == 320
        assert log.mood == Mood.HAPPY
        assert log.energy == 7

    def test_date_targets_that_day(self, service, user_id):
        """Test that an explicit date writes to that day, not today."""

        async def scenario():
            await service.save_update(
                user_id, parse_log_update({"date": "2026-10-15", "energy": 4}), NOW
            )
            return (
                await service.log_repo.get_by_day(user_id, datetime(2026, 10, 15).date()),
                await service.log_repo.get_by_day(user_id, NOW.date()),
            )

        earlier, today = asyncio.run(scenario())

        assert earlier.energy == 4
        assert today is None

    def test_profile_used_for_body_composition(self, service, user_id):
        """Test that the stored profile feeds BMI."""
        update = parse_log_update({"body_composition": {"body_fat_percentage": 12}})
        log = asyncio.run(service.save_update(user_id, update, NOW))
        assert log.body_composition.bmi == pytest.approx(25.0)

    def test_without_profile_repository(self, db_path):
        """Test that derived body metrics are skipped without profiles."""
        service = HealthLogService(HealthLogRepository(db_path))
        update = parse_log_update({"body_composition": {"body_fat_percentage": 12}})

        log = asyncio.run(service.save_update(1, update, NOW))

        assert log.body_composition.bmi is None


class TestEntries:
    """Tests for meals and activities."""

    def test_meal_and_activity(self, service, user_id):
        """Test that entries accumulate on today's log."""

        async def scenario():
            await service.add_meal(user_id, Meal(name="Oats", calories=350), NOW)
            return await service.add_activity(
                user_id, Activity(type=ExerciseType.RUNNING, name="Run", duration=30), NOW
            )

        log = asyncio.run(scenario())

        assert log.diet.total_calories == 350
        assert log.exercise.total_calories_burned == 417
        assert log.calorie_balance == 350 - 417

    def test_concurrent_meals(self, service, user_id):
        """Test that concurrently added meals are all kept."""

        async def scenario():
            await asyncio.gather(
                *(
                    service.add_meal(user_id, Meal(name=f"Snack {i}", calories=50), NOW)
                    for i in range(8)
                )
            )
            return await service.get_today(user_id, NOW)

        log = asyncio.run(scenario())

        assert len(log.diet.meals) == 8
        assert log.diet.total_calories == 400

    def test_concurrent_disjoint_updates(self, service, user_id):
        """Test that a mood update and an energy update both land."""

        async def scenario():
            await asyncio.gather(
                service.save_update(user_id, parse_log_update({"mood": "sad"}), NOW),
                service.save_update(user_id, parse_log_update({"energy": 3}), NOW),
                service.add_meal(user_id, Meal(name="Tea", calories=20), NOW),
            )
            return await service.get_today(user_id, NOW)

        log = asyncio.run(scenario())

        assert log.mood == Mood.SAD
        assert log.energy == 3
        assert log.diet.total_calories == 20


class TestReads:
    """Tests for reading logs and reports."""

    def test_get_today_creates_once(self, service, user_id):
        """Test that repeated reads return the same empty log."""

        async def scenario():
            first = await service.get_today(user_id, NOW)
            second = await service.get_today(user_id, NOW.replace(hour=18))
            return first, second

        first, second = asyncio.run(scenario())

        assert first.id == second.id
        assert first.steps.count == 0
        assert first.diet.meals == []

    def test_list_logs_covers_whole_days(self, service, user_id):
        """Test that the range includes the full start and end days."""

        async def scenario():
            for i in range(5):
                when = NOW - timedelta(days=i)
                await service.save_update(user_id, parse_log_update({"energy": i + 1}), when)
            return await service.list_logs(
                user_id,
                datetime(2026, 10, 15, 23, 0),
                datetime(2026, 10, 17, 0, 0),
            )

        logs = asyncio.run(scenario())

        assert [log.day.day for log in logs] == [17, 16, 15]

    def test_list_logs_limit(self, service, user_id):
        """Test the newest-first limit without a range."""

        async def scenario():
            for i in range(4):
                await service.save_update(
                    user_id, parse_log_update({"energy": 5}), NOW - timedelta(days=i)
                )
            return await service.list_logs(user_id, limit=2)

        logs = asyncio.run(scenario())
        assert [log.day for log in logs] == [NOW.date(), (NOW - timedelta(days=1)).date()]

    def test_analytics_window(self, service, user_id):
        """Test that only the last days count towards analytics."""

        async def scenario():
            for i, steps in enumerate([6000, 4000, 20000]):
                await service.save_update(
                    user_id,
                    parse_log_update({"steps": {"count": steps}}),
                    NOW - timedelta(days=i * 5),
                )
            return (
                await service.analytics(user_id, days=7, now=NOW),
                await service.calorie_balance(user_id, days=7, now=NOW),
            )

        report, balance = asyncio.run(scenario())

        assert report.average_steps == 5000
        assert len(report.steps_trend) == 2
        assert balance.average_calories_burned == 200

    def test_dashboard_score(self, service, user_id):
        """Test the score of the latest log."""

        async def scenario():
            empty = await service.dashboard_score(user_id)
            await service.save_update(
                user_id, parse_log_update({"steps": {"count": 10000}, "energy": 10}), NOW
            )
            return empty, await service.dashboard_score(user_id)

        empty, score = asyncio.run(scenario())

        assert empty == 0
        assert score == 100

    def test_clear_all(self, service, user_id):
        """Test deleting every log."""

        async def scenario():
            await service.get_today(user_id, NOW)
            deleted = await service.clear_all()
            return deleted, await service.list_logs(user_id)

        deleted, logs = asyncio.run(scenario())

        assert deleted == 1
        assert logs == []
