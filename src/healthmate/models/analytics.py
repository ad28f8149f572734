"""Analytics report models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TrendDirection(str, Enum):
    """Direction of a metric over a window."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass
class TrendPoint:
    """One value of a metric time series."""

    date: datetime
    value: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "value": self.value}


def _series(points: list[TrendPoint]) -> list[dict]:
    return [p.to_dict() for p in points]


@dataclass
class AnalyticsReport:
    """Rollup of a window of daily logs."""

    average_steps: int = 0
    average_sleep: float = 0
    average_calories: int = 0
    average_energy: float = 0
    steps_trend: list[TrendPoint] = field(default_factory=list)
    sleep_trend: list[TrendPoint] = field(default_factory=list)
    calories_trend: list[TrendPoint] = field(default_factory=list)
    energy_trend: list[TrendPoint] = field(default_factory=list)
    mood_distribution: dict[str, int] = field(default_factory=dict)
    total_workouts: int = 0
    body_fat_trend: list[TrendPoint] = field(default_factory=list)
    muscle_mass_trend: list[TrendPoint] = field(default_factory=list)
    bone_density_trend: list[TrendPoint] = field(default_factory=list)
    average_body_fat: float = 0
    average_muscle_mass: float = 0
    average_bone_density: float = 0
    fitness_level_counts: dict[str, int] = field(default_factory=dict)
    systolic_trend: list[TrendPoint] = field(default_factory=list)
    diastolic_trend: list[TrendPoint] = field(default_factory=list)
    average_systolic: int = 0
    average_diastolic: int = 0
    bp_category_counts: dict[str, int] = field(default_factory=dict)
    days: int = 0

    def to_dict(self) -> dict:
        return {
            "days": self.days,
            "average_steps": self.average_steps,
            "average_sleep": self.average_sleep,
            "average_calories": self.average_calories,
            "average_energy": self.average_energy,
            "steps_trend": _series(self.steps_trend),
            "sleep_trend": _series(self.sleep_trend),
            "calories_trend": _series(self.calories_trend),
            "energy_trend": _series(self.energy_trend),
            "mood_distribution": dict(self.mood_distribution),
            "total_workouts": self.total_workouts,
            "body_fat_trend": _series(self.body_fat_trend),
            "muscle_mass_trend": _series(self.muscle_mass_trend),
            "bone_density_trend": _series(self.bone_density_trend),
            "average_body_fat": self.average_body_fat,
            "average_muscle_mass": self.average_muscle_mass,
            "average_bone_density": self.average_bone_density,
            "fitness_level_counts": dict(self.fitness_level_counts),
            "systolic_trend": _series(self.systolic_trend),
            "diastolic_trend": _series(self.diastolic_trend),
            "average_systolic": self.average_systolic,
            "average_diastolic": self.average_diastolic,
            "bp_category_counts": dict(self.bp_category_counts),
        }


@dataclass
class DailyBalance:
    """Intake versus step burn for one day."""

    date: datetime
    intake: int
    burned: int
    balance: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "intake": self.intake,
            "burned": self.burned,
            "balance": self.balance,
        }


@dataclass
class CalorieBalanceReport:
    """Calorie balance analysis over a window."""

    average_calorie_intake: int = 0
    average_calories_burned: int = 0
    average_calorie_balance: int = 0
    daily_balances: list[DailyBalance] = field(default_factory=list)
    total_exercise_minutes: int = 0
    exercise_frequency: int = 0  # percent of days with any activity
    recommendation: str = ""

    def to_dict(self) -> dict:
        return {
            "average_calorie_intake": self.average_calorie_intake,
            "average_calories_burned": self.average_calories_burned,
            "average_calorie_balance": self.average_calorie_balance,
            "daily_balances": [b.to_dict() for b in self.daily_balances],
            "total_exercise_minutes": self.total_exercise_minutes,
            "exercise_frequency": self.exercise_frequency,
            "recommendation": self.recommendation,
        }


@dataclass
class Prediction:
    """A forward-looking health signal."""

    type: str  # "sleep" or "activity"
    message: str
    severity: str  # "high", "medium"
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "severity": self.severity,
            "recommendation": self.recommendation,
        }


@dataclass
class PredictionResult:
    """Predictions plus whether enough history existed to make them."""

    predictions: list[Prediction] = field(default_factory=list)
    sufficient_data: bool = True
    message: str = ""

    def to_dict(self) -> dict:
        data = {
            "predictions": [p.to_dict() for p in self.predictions],
            "sufficient_data": self.sufficient_data,
        }
        if self.message:
            data["message"] = self.message
        return data
