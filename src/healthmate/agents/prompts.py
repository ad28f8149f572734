"""Prompt templates for the health assistant."""

from collections.abc import Sequence

from ..models.health_log import DailyLog
from ..models.user_profile import UserProfile

NOT_RECORDED = "Not recorded"
NOT_SPECIFIED = "Not specified"


def _value(value, default: str) -> str:
    if value is None or value == "":
        return default
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _goals(profile: UserProfile | None, default: str) -> str:
    if not profile or not profile.health_goals:
        return default
    return ", ".join(goal.value for goal in profile.health_goals)


def format_profile(profile: UserProfile | None, default: str = NOT_SPECIFIED) -> str:
    """Format a user profile as prompt bullet lines."""
    p = profile
    return "\n".join(
        [
            f"- Age: {_value(p and p.age, default)}",
            f"- Gender: {_value(p and p.gender, default)}",
            f"- Height: {_value(p and p.height, default)}cm",
            f"- Weight: {_value(p and p.weight, default)}kg",
            f"- Activity Level: {_value(p and p.activity_level, default)}",
            f"- Health Goals: {_goals(p, default)}",
        ]
    )


def format_today(log: DailyLog) -> str:
    """Format a full day's metrics as prompt bullet lines."""
    lines = [
        f"- Steps: {log.steps.count or 0} (Goal: {log.steps.goal or 10000})",
        f"- Sleep: {_value(log.sleep.duration, NOT_RECORDED)} hours",
        f"- Sleep Quality: {_value(log.sleep.quality, NOT_RECORDED)}",
        f"- Total Calories: {log.diet.total_calories or 0}",
        f"- Water Intake: {log.diet.water_intake or 0} glasses",
        f"- Workouts: {len(log.exercise.activities)}",
        f"- Mood: {_value(log.mood, NOT_RECORDED)}",
        f"- Energy Level: {_value(log.energy, NOT_RECORDED)}/10",
    ]
    if log.weight:
        lines.append(f"- Weight: {log.weight}kg")
    if log.blood_pressure and log.blood_pressure.systolic and log.blood_pressure.diastolic:
        lines.append(
            f"- Blood Pressure: {log.blood_pressure.systolic}/{log.blood_pressure.diastolic}"
        )
    return "\n".join(lines)


def format_trend_line(log: DailyLog) -> str:
    """One line of the weekly trend block."""
    return (
        f"{log.date.strftime('%a %b %d %Y')}: {log.steps.count or 0} steps, "
        f"{log.sleep.duration or 0}h sleep, {log.diet.total_calories or 0} cal, "
        f"mood: {_value(log.mood, 'N/A')}, energy: {_value(log.energy, 'N/A')}"
    )


DAILY_SUMMARY_TEMPLATE = """As a health AI assistant, analyze this user's health data and provide a comprehensive daily summary with personalized recommendations.

User Profile:
{profile}

Today's Data:
{today}

Weekly Trends:
{trends}

Please provide:
1. A brief summary of today's health metrics
2. 3-5 specific, actionable recommendations based on the data and trends
3. Identification of any concerning patterns
4. Positive reinforcement for good habits
5. Tomorrow's focus areas

Keep the response concise but insightful, focusing on practical advice."""


def build_daily_summary_prompt(
    profile: UserProfile | None,
    log: DailyLog,
    recent_logs: Sequence[DailyLog],
) -> str:
    """Build the daily summary request.

    Args:
        profile: The user's profile, if any
        log: The day being summarized
        recent_logs: Logs of the preceding week, oldest first
    """
    trends = "\n".join(format_trend_line(day) for day in recent_logs) or "No recent data"
    return DAILY_SUMMARY_TEMPLATE.format(
        profile=format_profile(profile, NOT_RECORDED),
        today=format_today(log),
        trends=trends,
    )


CHAT_SYSTEM_TEMPLATE = """You are HealthMate AI, a knowledgeable and supportive health assistant. You help users with:
- Nutrition advice and meal planning
- Exercise recommendations and workout plans
- Sleep optimization tips
- General wellness guidance
- Motivation and encouragement

User Context:
{profile}

Recent Activity:
- Recent Steps: {steps}
- Recent Sleep: {sleep} hours
- Recent Mood: {mood}
- Recent Energy: {energy}/10

Provide helpful, personalized advice. Be encouraging and supportive. If asked about serious medical conditions, remind the user to consult healthcare professionals."""


def build_chat_system_prompt(
    profile: UserProfile | None, recent_log: DailyLog | None
) -> str:
    """Build the system prompt for a chat turn from the last known log."""
    log = recent_log
    return CHAT_SYSTEM_TEMPLATE.format(
        profile=format_profile(profile),
        steps=_value(log.steps.count if log else None, NOT_RECORDED),
        sleep=_value(log.sleep.duration if log else None, NOT_RECORDED),
        mood=_value(log.mood if log else None, NOT_RECORDED),
        energy=_value(log.energy if log else None, NOT_RECORDED),
    )
