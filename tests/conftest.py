"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from healthmate.db import init_db
from healthmate.errors import ExternalServiceError
from healthmate.models.health_log import (
    Activity,
    BloodPressure,
    BodyComposition,
    DailyLog,
    Diet,
    Exercise,
    ExerciseType,
    Meal,
    MealType,
    Mood,
    Sleep,
    Steps,
)
from healthmate.models.user_profile import ActivityLevel, Gender, HealthGoal, UserProfile


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema created."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def sample_profile():
    """Create a sample user profile for testing."""
    return UserProfile(
        name="Test User",
        age=35,
        gender=Gender.MALE,
        height=180,
        weight=81,
        activity_level=ActivityLevel.MODERATE,
        health_goals=[HealthGoal.IMPROVE_FITNESS, HealthGoal.BETTER_SLEEP],
    )


@pytest.fixture
def make_log():
    """Factory for daily logs with the common fields filled in."""

    def _make(
        day: datetime,
        steps: int = 0,
        sleep: float | None = None,
        calories: int = 0,
        energy: int = 5,
        mood: Mood | None = None,
        activities: list[Activity] | None = None,
        user_id: int = 1,
        body_composition: BodyComposition | None = None,
        blood_pressure: BloodPressure | None = None,
    ) -> DailyLog:
        meals = [Meal(name="Food", type=MealType.LUNCH, calories=calories)] if calories else []
        activities = activities or []
        return DailyLog(
            user_id=user_id,
            date=day,
            steps=Steps(count=steps, calories_burned=round(steps * 0.04)),
            sleep=Sleep(duration=sleep),
            diet=Diet(meals=meals, total_calories=calories),
            exercise=Exercise(
                activities=activities,
                total_duration=sum(a.duration for a in activities),
                total_calories_burned=sum(a.calories_burned or 0 for a in activities),
            ),
            mood=mood,
            energy=energy,
            body_composition=body_composition,
            blood_pressure=blood_pressure,
        )

    return _make


@pytest.fixture
def run_activity():
    """A 30 minute moderate run worth 360 kcal."""
    return Activity(
        type=ExerciseType.RUNNING, name="Run", duration=30, calories_burned=360
    )


class FakeCompletionClient:
    """In-memory completion client that records requests."""

    def __init__(self, message: dict | None = None, error: Exception | None = None):
        self.message = message if message is not None else {"content": "All good."}
        self.error = error
        self.calls: list[dict] = []

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> dict:
        self.calls.append(
            {"messages": messages, "max_tokens": max_tokens, "temperature": temperature}
        )
        if self.error:
            raise self.error
        return self.message


@pytest.fixture
def fake_client():
    """Completion client answering with a fixed bulleted summary."""
    return FakeCompletionClient(
        {
            "content": (
                "You had a solid day.\n"
                "- Walk 2000 more steps\n"
                "- Drink two more glasses of water\n"
                "Keep it up!"
            )
        }
    )


@pytest.fixture
def failing_client():
    """Completion client whose every call fails."""
    return FakeCompletionClient(error=ExternalServiceError("connection refused"))


@pytest.fixture
def make_client():
    """Factory for fake completion clients with a given reply or error."""
    return FakeCompletionClient
