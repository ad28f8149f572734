"""Integration tests for the full tracking pipeline.

A week of logging through the service layer against a real SQLite file,
followed by every report and the assistant on the stored data.
"""

import asyncio
from datetime import datetime, timedelta

from healthmate.models.health_log import Activity, ExerciseType, Meal, MealType
from healthmate.services import HealthLogService
from healthmate.services.validation import parse_log_update

TODAY = datetime(2026, 10, 18, 21, 0)


async def log_week(user_id: int, service: HealthLogService) -> None:
    sleep = [8, 7.5, 7, 6, 5.5, 5, 5]
    steps = [11000, 10000, 9000, 9500, 8000, 8500, 9000]
    for i in range(7):
        when = TODAY - timedelta(days=6 - i)
        await service.save_update(
            user_id,
            parse_log_update(
                {
                    "steps": {"count": steps[i]},
                    "sleep": {"duration": sleep[i], "quality": "fair"},
                    "mood": "neutral",
                    "energy": 6,
                }
            ),
            when,
        )
        await service.add_meal(
            user_id, Meal(name="Dinner", type=MealType.DINNER, calories=2200), when
        )
        if i % 2 == 0:
            await service.add_activity(
                user_id, Activity(type=ExerciseType.YOGA, name="Yoga", duration=40), when
            )


class TestPipelineIntegration:
    """End-to-end tests over a week of stored logs."""

    def test_week_of_logging(self, stack):
        """Test reports built from a week of merged updates."""
        user_id, service, assistant, _ = stack

        async def scenario():
            await log_week(user_id, service)
            return (
                await service.list_logs(user_id),
                await service.analytics(user_id, 7, TODAY),
                await service.calorie_balance(user_id, 7, TODAY),
                await assistant.predictions(user_id, 30, TODAY),
            )

        logs, report, balance, predictions = asyncio.run(scenario())

        assert len(logs) == 7
        assert all(len(log.diet.meals) == 1 for log in logs)
        assert report.average_steps == 9286
        assert report.total_workouts == 0
        assert report.mood_distribution == {"neutral": 7}
        assert balance.total_exercise_minutes == 160
        assert balance.exercise_frequency == 57
        assert [p.type for p in predictions.predictions] == ["sleep"]

    def test_summary_and_chat(self, stack):
        """Test the assistant on the stored week."""
        user_id, service, assistant, client = stack

        async def scenario():
            await log_week(user_id, service)
            summary = await assistant.daily_summary(user_id, TODAY)
            reply = await assistant.chat(user_id, "Why am I tired?")
            return summary, reply, await service.get_today(user_id, TODAY)

        summary, reply, today = asyncio.run(scenario())

        assert summary.recommendations == [
            "1. Get to bed before 23:00",
            "2. Keep the evening walks",
            "3. Add a protein source to breakfast",
        ]
        assert summary.trends == {"steps": "declining", "sleep": "declining"}
        assert today.ai_recommendations == summary.recommendations
        assert reply.response.startswith("Good week overall.")
        assert "- Recent Sleep: 5 hours" in client.calls[1][0]["content"]
