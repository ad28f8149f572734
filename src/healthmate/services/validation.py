"""Validation boundary for client payloads.

Turns plain dict payloads into typed updates and entries, rejecting
malformed or out-of-range values with a field-level ValidationError
before anything reaches the calculator or the database.
"""

import math
from datetime import datetime
from enum import Enum

from ..errors import ValidationError
from ..models.health_log import (
    Activity,
    ExerciseType,
    FitnessLevel,
    Intensity,
    Meal,
    MealType,
    Mood,
    SleepQuality,
)
from ..models.updates import (
    BloodPressureUpdate,
    BodyCompositionUpdate,
    DailyLogUpdate,
    DietUpdate,
    SleepUpdate,
    StepsUpdate,
)
from ..models.user_profile import ActivityLevel, Gender, HealthGoal, UserProfile

# (minimum, maximum) inclusive; None means unbounded
RANGES = {
    "steps.count": (0, None),
    "steps.goal": (1, None),
    "sleep.duration": (0, 24),
    "diet.water_intake": (0, None),
    "energy": (1, 10),
    "weight": (0, None),
    "body_composition.body_fat_percentage": (3, 50),
    "body_composition.muscle_mass": (10, 200),
    "body_composition.bone_density": (0.5, 2.0),
    "body_composition.bmi": (10, 50),
    "blood_pressure.systolic": (70, 250),
    "blood_pressure.diastolic": (40, 150),
    "blood_pressure.pulse": (30, 200),
    "meal.calories": (0, None),
    "meal.protein": (0, None),
    "activity.duration": (1, None),
    "activity.calories_burned": (0, None),
    "profile.age": (1, 120),
    "profile.height": (50, 272),
    "profile.weight": (20, 500),
}


def parse_number(field: str, value, integer: bool = False) -> float | int | None:
    """Coerce a numeric payload value and check it against RANGES.

    Numeric strings are accepted; booleans and other types are not.
    ``None`` passes through so a field can be cleared explicitly.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(field, f"must be a number, got {value!r}")
    if not isinstance(value, (int, float)):
        raise ValidationError(field, "must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(field, "must be a finite number")

    if integer:
        value = int(value)

    low, high = RANGES.get(field, (None, None))
    if low is not None and value < low:
        raise ValidationError(field, _range_message(low, high))
    if high is not None and value > high:
        raise ValidationError(field, _range_message(low, high))
    return value


def _range_message(low, high) -> str:
    if high is None:
        return f"must be at least {low}"
    return f"must be between {low}-{high}"


def parse_enum(field: str, enum_type: type[Enum], value):
    if value is None or value == "":
        return None
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_type)
        raise ValidationError(field, f"must be one of: {allowed}")


def parse_datetime(field: str, value) -> datetime | None:
    """Parse an ISO 8601 date or datetime into a naive wall-clock datetime.

    A UTC offset is dropped, not converted: logs are keyed by the calendar
    day on the client's own clock, so ``23:30-05:00`` stays on that day.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(field, "must be an ISO 8601 date or datetime")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        raise ValidationError(field, f"invalid date {value!r}")


def parse_text(field: str, value) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, "must be text")
    return value


def _section(payload: dict, key: str) -> dict | None:
    section = payload.get(key)
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ValidationError(key, "must be an object")
    return section


def _provided(section: dict, allowed: tuple[str, ...]) -> frozenset[str]:
    return frozenset(k for k in allowed if k in section)


def parse_log_update(payload: dict) -> DailyLogUpdate:
    """Validate a daily-log merge payload.

    Derived fields (``steps.calories_burned``, ``diet.total_calories``,
    ``diet.meals``, ``calorie_balance`` and blood pressure ``category``)
    are ignored if present.
    """
    if not isinstance(payload, dict):
        raise ValidationError("body", "must be an object")

    update = DailyLogUpdate(date=parse_datetime("date", payload.get("date")))

    section = _section(payload, "steps")
    if section is not None:
        update.steps = StepsUpdate(
            provided=_provided(section, ("count", "goal")),
            count=parse_number("steps.count", section.get("count"), integer=True),
            goal=parse_number("steps.goal", section.get("goal"), integer=True),
        )
        _require_not_null(update.steps, ("count", "goal"), "steps")

    section = _section(payload, "sleep")
    if section is not None:
        update.sleep = SleepUpdate(
            provided=_provided(section, ("duration", "quality", "bedtime", "wake_time")),
            duration=parse_number("sleep.duration", section.get("duration")),
            quality=parse_enum("sleep.quality", SleepQuality, section.get("quality")),
            bedtime=parse_datetime("sleep.bedtime", section.get("bedtime")),
            wake_time=parse_datetime("sleep.wake_time", section.get("wake_time")),
        )

    section = _section(payload, "diet")
    if section is not None:
        update.diet = DietUpdate(
            provided=_provided(section, ("water_intake",)),
            water_intake=parse_number(
                "diet.water_intake", section.get("water_intake"), integer=True
            ),
        )
        _require_not_null(update.diet, ("water_intake",), "diet")

    section = _section(payload, "body_composition")
    if section is not None:
        fields = (
            "body_fat_percentage", "muscle_mass", "bone_density",
            "bmi", "fitness_level", "notes",
        )
        update.body_composition = BodyCompositionUpdate(
            provided=_provided(section, fields),
            body_fat_percentage=parse_number(
                "body_composition.body_fat_percentage", section.get("body_fat_percentage")
            ),
            muscle_mass=parse_number("body_composition.muscle_mass", section.get("muscle_mass")),
            bone_density=parse_number(
                "body_composition.bone_density", section.get("bone_density")
            ),
            bmi=parse_number("body_composition.bmi", section.get("bmi")),
            fitness_level=parse_enum(
                "body_composition.fitness_level", FitnessLevel, section.get("fitness_level")
            ),
            notes=parse_text("body_composition.notes", section.get("notes")),
        )

    section = _section(payload, "blood_pressure")
    if section is not None:
        update.blood_pressure = BloodPressureUpdate(
            provided=_provided(section, ("systolic", "diastolic", "pulse", "notes")),
            systolic=parse_number(
                "blood_pressure.systolic", section.get("systolic"), integer=True
            ),
            diastolic=parse_number(
                "blood_pressure.diastolic", section.get("diastolic"), integer=True
            ),
            pulse=parse_number("blood_pressure.pulse", section.get("pulse"), integer=True),
            notes=parse_text("blood_pressure.notes", section.get("notes")),
        )

    scalars = _provided(payload, ("mood", "energy", "weight", "notes"))
    update.provided = scalars
    update.mood = parse_enum("mood", Mood, payload.get("mood"))
    update.energy = parse_number("energy", payload.get("energy"), integer=True)
    update.weight = parse_number("weight", payload.get("weight"))
    update.notes = parse_text("notes", payload.get("notes"))
    if "energy" in scalars and update.energy is None:
        raise ValidationError("energy", "cannot be cleared")

    return update


def _require_not_null(update, fields: tuple[str, ...], prefix: str) -> None:
    for name in fields:
        if update.has(name) and getattr(update, name) is None:
            raise ValidationError(f"{prefix}.{name}", "cannot be cleared")


def parse_meal(payload: dict) -> Meal:
    """Validate and normalize a meal entry."""
    if not isinstance(payload, dict):
        raise ValidationError("meal", "must be an object")
    name = parse_text("meal.name", payload.get("name")) or ""
    meal_type = parse_enum("meal.type", MealType, payload.get("type")) or MealType.SNACK
    calories = parse_number("meal.calories", payload.get("calories"), integer=True)
    protein = parse_number("meal.protein", payload.get("protein"), integer=True)
    return Meal(
        name=name,
        type=meal_type,
        calories=calories or 0,
        protein=protein or 0,
    )


def parse_activity(payload: dict) -> Activity:
    """Validate and normalize an exercise activity.

    ``calories_burned`` stays None when not supplied so the merge engine
    can estimate it from the user's weight.
    """
    if not isinstance(payload, dict):
        raise ValidationError("activity", "must be an object")
    exercise_type = parse_enum("activity.type", ExerciseType, payload.get("type"))
    if exercise_type is None:
        raise ValidationError("activity.type", "is required")
    duration = parse_number("activity.duration", payload.get("duration"), integer=True)
    if duration is None:
        raise ValidationError("activity.duration", "is required")
    intensity = (
        parse_enum("activity.intensity", Intensity, payload.get("intensity"))
        or Intensity.MODERATE
    )
    calories = parse_number(
        "activity.calories_burned", payload.get("calories_burned"), integer=True
    )
    return Activity(
        type=exercise_type,
        name=parse_text("activity.name", payload.get("name")) or exercise_type.value,
        duration=duration,
        intensity=intensity,
        calories_burned=calories,
        notes=parse_text("activity.notes", payload.get("notes")) or "",
        time=parse_datetime("activity.time", payload.get("time")),
    )


def parse_profile(payload: dict) -> UserProfile:
    """Validate a user profile payload."""
    if not isinstance(payload, dict):
        raise ValidationError("profile", "must be an object")
    name = parse_text("profile.name", payload.get("name"))
    if not name:
        raise ValidationError("profile.name", "is required")
    goals = payload.get("health_goals") or []
    if not isinstance(goals, list):
        raise ValidationError("profile.health_goals", "must be a list")
    return UserProfile(
        name=name,
        age=parse_number("profile.age", payload.get("age"), integer=True),
        gender=parse_enum("profile.gender", Gender, payload.get("gender")),
        height=parse_number("profile.height", payload.get("height")),
        weight=parse_number("profile.weight", payload.get("weight")),
        activity_level=(
            parse_enum("profile.activity_level", ActivityLevel, payload.get("activity_level"))
            or ActivityLevel.MODERATE
        ),
        health_goals=[parse_enum("profile.health_goals", HealthGoal, g) for g in goals if g],
    )
