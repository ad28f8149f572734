"""Data models for healthmate."""

from .analytics import AnalyticsReport, CalorieBalanceReport, PredictionResult, TrendDirection
from .health_log import (
    Activity,
    BloodPressure,
    BloodPressureCategory,
    BodyComposition,
    DailyLog,
    Diet,
    Exercise,
    ExerciseType,
    FitnessLevel,
    Intensity,
    Meal,
    MealType,
    Mood,
    Sleep,
    SleepQuality,
    Steps,
)
from .updates import DailyLogUpdate
from .user_profile import ActivityLevel, Gender, HealthGoal, UserProfile

__all__ = [
    "Activity",
    "ActivityLevel",
    "AnalyticsReport",
    "BloodPressure",
    "BloodPressureCategory",
    "BodyComposition",
    "CalorieBalanceReport",
    "DailyLog",
    "DailyLogUpdate",
    "Diet",
    "Exercise",
    "ExerciseType",
    "FitnessLevel",
    "Gender",
    "HealthGoal",
    "Intensity",
    "Meal",
    "MealType",
    "Mood",
    "PredictionResult",
    "Sleep",
    "SleepQuality",
    "Steps",
    "TrendDirection",
    "UserProfile",
]
