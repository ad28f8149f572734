"""Daily health log data models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class MealType(str, Enum):
    """Meal slot within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class ExerciseType(str, Enum):
    """Kinds of exercise activity."""

    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    WEIGHTLIFTING = "weightlifting"
    YOGA = "yoga"
    PILATES = "pilates"
    DANCING = "dancing"
    HIKING = "hiking"
    BASKETBALL = "basketball"
    SOCCER = "soccer"
    TENNIS = "tennis"
    OTHER = "other"


class Intensity(str, Enum):
    """Exercise intensity."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SleepQuality(str, Enum):
    """Subjective sleep quality."""

    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class Mood(str, Enum):
    """Daily mood."""

    VERY_SAD = "very_sad"
    SAD = "sad"
    NEUTRAL = "neutral"
    HAPPY = "happy"
    VERY_HAPPY = "very_happy"


class FitnessLevel(str, Enum):
    """Fitness level derived from body composition."""

    POOR = "poor"
    FAIR = "fair"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"


class BloodPressureCategory(str, Enum):
    """Blood pressure category (ESC/ESH grading)."""

    OPTIMAL = "optimal"
    NORMAL = "normal"
    HIGH_NORMAL = "high_normal"
    GRADE1_HYPERTENSION = "grade1_hypertension"
    GRADE2_HYPERTENSION = "grade2_hypertension"
    GRADE3_HYPERTENSION = "grade3_hypertension"
    ISOLATED_SYSTOLIC = "isolated_systolic"


DEFAULT_STEPS_GOAL = 10000
DEFAULT_ENERGY = 5


def _ts(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Meal:
    """A meal entry."""

    name: str
    type: MealType = MealType.SNACK
    calories: int = 0
    protein: int = 0
    time: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "calories": self.calories,
            "protein": self.protein,
            "time": _ts(self.time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Meal":
        return cls(
            name=data.get("name", ""),
            type=MealType(data.get("type", "snack")),
            calories=data.get("calories", 0),
            protein=data.get("protein", 0),
            time=_parse_ts(data.get("time")),
        )


@dataclass
class Activity:
    """An exercise activity entry."""

    type: ExerciseType
    name: str
    duration: int  # minutes
    intensity: Intensity = Intensity.MODERATE
    calories_burned: int | None = None  # estimated on add when not supplied
    notes: str = ""
    time: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "name": self.name,
            "duration": self.duration,
            "intensity": self.intensity.value,
            "calories_burned": self.calories_burned,
            "notes": self.notes,
            "time": _ts(self.time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Activity":
        return cls(
            type=ExerciseType(data["type"]),
            name=data.get("name", data["type"]),
            duration=data["duration"],
            intensity=Intensity(data.get("intensity", "moderate")),
            calories_burned=data.get("calories_burned", 0),
            notes=data.get("notes", ""),
            time=_parse_ts(data.get("time")),
        )


@dataclass
class Steps:
    """Step count for the day."""

    count: int = 0
    goal: int = DEFAULT_STEPS_GOAL
    calories_burned: int = 0  # derived

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "goal": self.goal,
            "calories_burned": self.calories_burned,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Steps":
        return cls(
            count=data.get("count", 0),
            goal=data.get("goal", DEFAULT_STEPS_GOAL),
            calories_burned=data.get("calories_burned", 0),
        )


@dataclass
class Sleep:
    """Previous night's sleep."""

    duration: float | None = None  # hours
    quality: SleepQuality | None = None
    bedtime: datetime | None = None
    wake_time: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "duration": self.duration,
            "quality": self.quality.value if self.quality else None,
            "bedtime": _ts(self.bedtime),
            "wake_time": _ts(self.wake_time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sleep":
        quality = data.get("quality")
        return cls(
            duration=data.get("duration"),
            quality=SleepQuality(quality) if quality else None,
            bedtime=_parse_ts(data.get("bedtime")),
            wake_time=_parse_ts(data.get("wake_time")),
        )


@dataclass
class Diet:
    """Food and water intake."""

    meals: list[Meal] = field(default_factory=list)
    water_intake: int = 0  # glasses
    total_calories: int = 0  # derived

    def to_dict(self) -> dict:
        return {
            "meals": [m.to_dict() for m in self.meals],
            "water_intake": self.water_intake,
            "total_calories": self.total_calories,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Diet":
        return cls(
            meals=[Meal.from_dict(m) for m in data.get("meals", [])],
            water_intake=data.get("water_intake", 0),
            total_calories=data.get("total_calories", 0),
        )


@dataclass
class Exercise:
    """Exercise activities for the day."""

    activities: list[Activity] = field(default_factory=list)
    total_duration: int = 0  # derived, minutes
    total_calories_burned: int = 0  # derived

    def to_dict(self) -> dict:
        return {
            "activities": [a.to_dict() for a in self.activities],
            "total_duration": self.total_duration,
            "total_calories_burned": self.total_calories_burned,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        return cls(
            activities=[Activity.from_dict(a) for a in data.get("activities", [])],
            total_duration=data.get("total_duration", 0),
            total_calories_burned=data.get("total_calories_burned", 0),
        )


@dataclass
class BodyComposition:
    """Body composition measurement."""

    body_fat_percentage: float | None = None
    muscle_mass: float | None = None  # kg
    bone_density: float | None = None  # g/cm^2
    bmi: float | None = None  # derived when height and weight are known
    fitness_level: FitnessLevel | None = None  # derived
    measurement_time: datetime | None = None
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "body_fat_percentage": self.body_fat_percentage,
            "muscle_mass": self.muscle_mass,
            "bone_density": self.bone_density,
            "bmi": self.bmi,
            "fitness_level": self.fitness_level.value if self.fitness_level else None,
            "measurement_time": _ts(self.measurement_time),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BodyComposition":
        level = data.get("fitness_level")
        return cls(
            body_fat_percentage=data.get("body_fat_percentage"),
            muscle_mass=data.get("muscle_mass"),
            bone_density=data.get("bone_density"),
            bmi=data.get("bmi"),
            fitness_level=FitnessLevel(level) if level else None,
            measurement_time=_parse_ts(data.get("measurement_time")),
            notes=data.get("notes", ""),
        )


@dataclass
class BloodPressure:
    """Blood pressure reading."""

    systolic: int | None = None
    diastolic: int | None = None
    pulse: int | None = None
    category: BloodPressureCategory | None = None  # derived
    measurement_time: datetime | None = None
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "pulse": self.pulse,
            "category": self.category.value if self.category else None,
            "measurement_time": _ts(self.measurement_time),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BloodPressure":
        category = data.get("category")
        return cls(
            systolic=data.get("systolic"),
            diastolic=data.get("diastolic"),
            pulse=data.get("pulse"),
            category=BloodPressureCategory(category) if category else None,
            measurement_time=_parse_ts(data.get("measurement_time")),
            notes=data.get("notes", ""),
        )


@dataclass
class DailyLog:
    """One user's health record for one calendar day.

    Derived fields (step calories, diet and exercise totals, calorie
    balance, BMI, fitness level, blood pressure category) are recomputed
    from their inputs every time the log is persisted.
    """

    user_id: int
    date: datetime
    steps: Steps = field(default_factory=Steps)
    sleep: Sleep = field(default_factory=Sleep)
    diet: Diet = field(default_factory=Diet)
    exercise: Exercise = field(default_factory=Exercise)
    mood: Mood | None = None
    energy: int = DEFAULT_ENERGY
    weight: float | None = None  # kg
    body_composition: BodyComposition | None = None
    blood_pressure: BloodPressure | None = None
    calorie_balance: int = 0  # derived
    notes: str = ""
    ai_summary: str | None = None
    ai_recommendations: list[str] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def day(self) -> date:
        """Calendar day this log belongs to."""
        return self.date.date()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "steps": self.steps.to_dict(),
            "sleep": self.sleep.to_dict(),
            "diet": self.diet.to_dict(),
            "exercise": self.exercise.to_dict(),
            "mood": self.mood.value if self.mood else None,
            "energy": self.energy,
            "weight": self.weight,
            "body_composition": (
                self.body_composition.to_dict() if self.body_composition else None
            ),
            "blood_pressure": (
                self.blood_pressure.to_dict() if self.blood_pressure else None
            ),
            "calorie_balance": self.calorie_balance,
            "notes": self.notes,
            "ai_summary": self.ai_summary,
            "ai_recommendations": list(self.ai_recommendations),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "DailyLog":
        """Create from dictionary."""
        mood = data.get("mood")
        body_composition = data.get("body_composition")
        blood_pressure = data.get("blood_pressure")
        return cls(
            id=id,
            user_id=data["user_id"],
            date=datetime.fromisoformat(data["date"]),
            steps=Steps.from_dict(data.get("steps") or {}),
            sleep=Sleep.from_dict(data.get("sleep") or {}),
            diet=Diet.from_dict(data.get("diet") or {}),
            exercise=Exercise.from_dict(data.get("exercise") or {}),
            mood=Mood(mood) if mood else None,
            energy=data.get("energy", DEFAULT_ENERGY),
            weight=data.get("weight"),
            body_composition=(
                BodyComposition.from_dict(body_composition) if body_composition else None
            ),
            blood_pressure=(
                BloodPressure.from_dict(blood_pressure) if blood_pressure else None
            ),
            calorie_balance=data.get("calorie_balance", 0),
            notes=data.get("notes") or "",
            ai_summary=data.get("ai_summary"),
            ai_recommendations=list(data.get("ai_recommendations") or []),
            created_at=created_at,
            updated_at=updated_at,
        )
