"""User profile data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Gender(str, Enum):
    """Gender used for body-composition banding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"  # Little to no exercise
    LIGHT = "light"  # Light exercise 1-3 days/week
    MODERATE = "moderate"  # Moderate exercise 3-5 days/week
    ACTIVE = "active"  # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very_active"  # Very hard exercise, physical job


class HealthGoal(str, Enum):
    """Health goal tags."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MUSCLE_GAIN = "muscle_gain"
    MAINTAIN_WEIGHT = "maintain_weight"
    IMPROVE_FITNESS = "improve_fitness"
    BETTER_SLEEP = "better_sleep"


@dataclass
class UserProfile:
    """User identity and physiological profile."""

    name: str
    age: int | None = None
    gender: Gender | None = None
    height: float | None = None  # in cm
    weight: float | None = None  # in kg
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    health_goals: list[HealthGoal] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender.value if self.gender else None,
            "height": self.height,
            "weight": self.weight,
            "activity_level": self.activity_level.value,
            "health_goals": [g.value for g in self.health_goals],
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "UserProfile":
        """Create from dictionary."""
        gender = data.get("gender")
        return cls(
            id=id,
            name=data["name"],
            age=data.get("age"),
            gender=Gender(gender) if gender else None,
            height=data.get("height"),
            weight=data.get("weight"),
            activity_level=ActivityLevel(data.get("activity_level", "moderate")),
            health_goals=[HealthGoal(g) for g in data.get("health_goals", [])],
            created_at=created_at,
            updated_at=updated_at,
        )
