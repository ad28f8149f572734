"""Fixtures for the end-to-end tests: a real database file and the full service stack."""

import asyncio
from pathlib import Path

import pytest

from healthmate.db import HealthLogRepository, UserProfileRepository, init_db
from healthmate.models.user_profile import ActivityLevel, Gender, HealthGoal, UserProfile
from healthmate.services import HealthAssistant, HealthLogService


def pytest_collection_modifyitems(items):
    """Tag everything collected from this directory as an integration test."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


class ScriptedClient:
    """Completion client that always answers with the same coaching note."""

    def __init__(self):
        self.calls = []

    async def complete(self, messages, max_tokens=500, temperature=0.7):
        self.calls.append(messages)
        # Reasoning-only reply, as some free OpenRouter models send
        return {
            "content": None,
            "reasoning": (
                "Good week overall.\n"
                "1. Get to bed before 23:00\n"
                "2. Keep the evening walks\n"
                "3. Add a protein source to breakfast"
            ),
        }


@pytest.fixture
def stack(tmp_path: Path):
    """(user_id, log service, assistant, client) over a fresh database."""
    db_path = tmp_path / "healthmate.db"
    asyncio.run(init_db(db_path))
    logs = HealthLogRepository(db_path)
    profiles = UserProfileRepository(db_path)
    profile = UserProfile(
        name="Sam",
        age=42,
        gender=Gender.FEMALE,
        height=170,
        weight=68,
        activity_level=ActivityLevel.LIGHT,
        health_goals=[HealthGoal.BETTER_SLEEP],
    )
    user_id = asyncio.run(profiles.create(profile))
    client = ScriptedClient()
    return (
        user_id,
        HealthLogService(logs, profiles),
        HealthAssistant(client, logs, profiles),
        client,
    )
