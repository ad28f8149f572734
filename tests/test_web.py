"""Tests for the JSON API."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from healthmate import __version__
from healthmate.config import Settings
from healthmate.services.analytics import INSUFFICIENT_DATA_MESSAGE
from healthmate.services.assistant import FALLBACK_TEXT
from healthmate.web import create_app

USER = {"X-User-Id": "1"}

PROFILE = {
    "name": "Ada",
    "age": 36,
    "gender": "female",
    "height": 165,
    "weight": 60,
    "activity_level": "active",
    "health_goals": ["improve_fitness"],
}


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(data_dir=tmp_path))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(client):
    response = client.post("/api/profile", json=PROFILE)
    assert response.status_code == 201
    return response.json()


class TestProfileRoutes:
    """Tests for /api/profile."""

    def test_create_and_get(self, client, user):
        """Test creating a profile and reading it back by user ID."""
        assert user["id"] == 1

        response = client.get("/api/profile", headers=USER)

        assert response.status_code == 200
        assert response.json()["name"] == "Ada"
        assert response.json()["health_goals"] == ["improve_fitness"]

    def test_update(self, client, user):
        """Test replacing the caller's profile."""
        response = client.put("/api/profile", json={**PROFILE, "weight": 58}, headers=USER)

        assert response.status_code == 200
        assert client.get("/api/profile", headers=USER).json()["weight"] == 58

    def test_missing_profile(self, client):
        """Test reading an unknown profile."""
        response = client.get("/api/profile", headers={"X-User-Id": "9"})
        assert response.status_code == 404

    def test_invalid_profile(self, client):
        """Test field errors on profile creation."""
        response = client.post("/api/profile", json={"age": 30})

        assert response.status_code == 422
        assert response.json()["field"] == "profile.name"


class TestHealthRoutes:
    """Tests for /api/health."""

    def test_requires_user(self, client):
        """Test that requests without a user ID are rejected."""
        assert client.get("/api/health/today").status_code == 401

    def test_save_log(self, client, user):
        """Test merging updates and derived fields."""
        client.post("/api/health/log", json={"steps": {"count": 8000}}, headers=USER)
        response = client.post(
            "/api/health/log", json={"mood": "happy", "energy": "7"}, headers=USER
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] is not None
        assert data["steps"]["count"] == 8000
        assert data["steps"]["calories_burned"] == 320
        assert data["mood"] == "happy"
        assert data["energy"] == 7

    def test_validation_error(self, client, user):
        """Test the field-level error body."""
        response = client.post(
            "/api/health/log", json={"blood_pressure": {"systolic": 300}}, headers=USER
        )

        assert response.status_code == 422
        assert response.json() == {
            "field": "blood_pressure.systolic",
            "message": "must be between 70-250",
        }

    def test_meal_and_activity(self, client, user):
        """Test appending entries to today's log."""
        client.post(
            "/api/health/meal",
            json={"name": "Salad", "type": "lunch", "calories": 400},
            headers=USER,
        )
        response = client.post(
            "/api/health/activity",
            json={"type": "walking", "duration": 60, "calories_burned": 250},
            headers=USER,
        )

        data = response.json()
        assert data["diet"]["total_calories"] == 400
        assert data["exercise"]["total_calories_burned"] == 250
        assert data["calorie_balance"] == 150

    def test_invalid_activity(self, client, user):
        """Test an unknown exercise type."""
        response = client.post(
            "/api/health/activity", json={"type": "curling", "duration": 10}, headers=USER
        )
        assert response.status_code == 422
        assert response.json()["field"] == "activity.type"

    def test_today_and_list(self, client, user):
        """Test that today's log is created once and listed."""
        first = client.get("/api/health/today", headers=USER).json()
        second = client.get("/api/health/today", headers=USER).json()

        logs = client.get("/api/health/logs", headers=USER).json()

        assert first["id"] == second["id"]
        assert [log["id"] for log in logs] == [first["id"]]

    def test_logs_date_range(self, client, user):
        """Test the inclusive date range filter."""
        for day in ("2026-10-01", "2026-10-02", "2026-10-05"):
            client.post("/api/health/log", json={"date": day, "energy": 5}, headers=USER)

        response = client.get(
            "/api/health/logs",
            params={"start": "2026-10-01", "end": "2026-10-02"},
            headers=USER,
        )

        assert [log["date"][:10] for log in response.json()] == ["2026-10-02", "2026-10-01"]

    def test_bad_range_date(self, client, user):
        """Test an unparsable range bound."""
        response = client.get("/api/health/logs", params={"start": "soon"}, headers=USER)
        assert response.status_code == 422

    def test_reports(self, client, user):
        """Test analytics, calorie balance and the dashboard score."""
        client.post(
            "/api/health/log",
            json={"steps": {"count": 10000}, "energy": 10},
            headers=USER,
        )

        analytics = client.get("/api/health/analytics", params={"days": 7}, headers=USER)
        balance = client.get("/api/health/calorie-balance", headers=USER)
        score = client.get("/api/health/score", headers=USER)

        assert analytics.json()["average_steps"] == 10000
        assert analytics.json()["days"] == 7
        assert balance.json()["average_calories_burned"] == 400
        assert score.json() == {"health_score": 100}

    def test_days_out_of_range(self, client, user):
        """Test the window bounds."""
        response = client.get("/api/health/analytics", params={"days": 0}, headers=USER)
        assert response.status_code == 422


class TestAiRoutes:
    """Tests for /api/ai without a configured AI service."""

    def test_summary_without_log(self, client, user):
        """Test the missing-day response."""
        response = client.post("/api/ai/daily-summary", json={}, headers=USER)

        assert response.status_code == 404
        assert response.json() == {"message": "No health data found for this date"}

    def test_summary_fallback(self, client, user):
        """Test the unavailable-service summary for a logged day."""
        client.post("/api/health/log", json={"steps": {"count": 5000}}, headers=USER)

        response = client.post(
            "/api/ai/daily-summary",
            json={"date": datetime.now().date().isoformat()},
            headers=USER,
        )

        assert response.status_code == 200
        assert response.json()["summary"] == FALLBACK_TEXT
        assert response.json()["recommendations"] == []

    def test_chat_fallback(self, client, user):
        """Test chat with history and the unavailable-service reply."""
        response = client.post(
            "/api/ai/chat",
            json={
                "message": "Any tips?",
                "history": [{"type": "user", "content": "Hi"}, {"type": "ai", "content": "Hello"}],
            },
            headers=USER,
        )

        assert response.status_code == 200
        assert response.json()["response"] == FALLBACK_TEXT
        assert "timestamp" in response.json()

    @pytest.mark.parametrize(
        "payload,field",
        [
            ({}, "message"),
            ({"message": ""}, "message"),
            ({"message": "Hi", "history": "nope"}, "history"),
            ({"message": "Hi", "history": [{"role": "robot", "content": "x"}]}, "history"),
        ],
    )
    def test_chat_invalid(self, client, user, payload, field):
        """Test chat payload errors."""
        response = client.post("/api/ai/chat", json=payload, headers=USER)

        assert response.status_code == 422
        assert response.json()["field"] == field

    def test_predictions_insufficient(self, client, user):
        """Test predictions with less than a week of logs."""
        client.get("/api/health/today", headers=USER)

        response = client.get("/api/ai/predictions", headers=USER)

        assert response.json()["sufficient_data"] is False
        assert response.json()["message"] == INSUFFICIENT_DATA_MESSAGE


class TestHealthCheck:
    def test_health_check(self, client):
        """Test the liveness endpoint."""
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "version": __version__}
