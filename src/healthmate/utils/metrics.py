"""Derived health metrics.

Pure functions with no I/O. Inputs are assumed to have passed the
validation boundary already.
"""

import math

from ..models.health_log import (
    Activity,
    BloodPressureCategory,
    ExerciseType,
    FitnessLevel,
    Intensity,
    Meal,
)
from ..models.user_profile import Gender

CALORIES_PER_STEP = 0.04
REFERENCE_WEIGHT_KG = 70

# Calories burned per minute for a 70kg person
CALORIES_PER_MINUTE: dict[ExerciseType, dict[Intensity, int]] = {
    ExerciseType.WALKING: {Intensity.LOW: 3, Intensity.MODERATE: 4, Intensity.HIGH: 5},
    ExerciseType.RUNNING: {Intensity.LOW: 8, Intensity.MODERATE: 12, Intensity.HIGH: 16},
    ExerciseType.CYCLING: {Intensity.LOW: 4, Intensity.MODERATE: 8, Intensity.HIGH: 12},
    ExerciseType.SWIMMING: {Intensity.LOW: 6, Intensity.MODERATE: 10, Intensity.HIGH: 14},
    ExerciseType.WEIGHTLIFTING: {Intensity.LOW: 3, Intensity.MODERATE: 5, Intensity.HIGH: 7},
    ExerciseType.YOGA: {Intensity.LOW: 2, Intensity.MODERATE: 3, Intensity.HIGH: 4},
    ExerciseType.PILATES: {Intensity.LOW: 3, Intensity.MODERATE: 4, Intensity.HIGH: 5},
    ExerciseType.DANCING: {Intensity.LOW: 3, Intensity.MODERATE: 5, Intensity.HIGH: 7},
    ExerciseType.HIKING: {Intensity.LOW: 4, Intensity.MODERATE: 6, Intensity.HIGH: 8},
    ExerciseType.BASKETBALL: {Intensity.LOW: 6, Intensity.MODERATE: 8, Intensity.HIGH: 10},
    ExerciseType.SOCCER: {Intensity.LOW: 6, Intensity.MODERATE: 9, Intensity.HIGH: 12},
    ExerciseType.TENNIS: {Intensity.LOW: 5, Intensity.MODERATE: 7, Intensity.HIGH: 9},
    ExerciseType.OTHER: {Intensity.LOW: 3, Intensity.MODERATE: 5, Intensity.HIGH: 7},
}

# Body fat thresholds per (gender, age band): score 5, 4, 3 below each, else 2
BODY_FAT_THRESHOLDS = {
    "male": [(30, (14, 18, 25)), (50, (17, 21, 28)), (None, (20, 25, 30))],
    "female": [(30, (21, 25, 32)), (50, (24, 28, 35)), (None, (27, 31, 38))],
}

BASELINE_MUSCLE_MASS_KG = {"male": 35, "female": 28}

BLOOD_PRESSURE_INTERPRETATIONS = {
    BloodPressureCategory.OPTIMAL: {
        "label": "Optimal", "color": "green", "description": "Excellent blood pressure",
    },
    BloodPressureCategory.NORMAL: {
        "label": "Normal", "color": "green", "description": "Good blood pressure",
    },
    BloodPressureCategory.HIGH_NORMAL: {
        "label": "High Normal", "color": "yellow", "description": "Monitor regularly",
    },
    BloodPressureCategory.GRADE1_HYPERTENSION: {
        "label": "Grade 1 Hypertension", "color": "orange",
        "description": "Consult healthcare provider",
    },
    BloodPressureCategory.GRADE2_HYPERTENSION: {
        "label": "Grade 2 Hypertension", "color": "red",
        "description": "Requires medical attention",
    },
    BloodPressureCategory.GRADE3_HYPERTENSION: {
        "label": "Grade 3 Hypertension", "color": "red",
        "description": "Seek immediate medical care",
    },
    BloodPressureCategory.ISOLATED_SYSTOLIC: {
        "label": "Isolated Systolic Hypertension", "color": "orange",
        "description": "Consult healthcare provider",
    },
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positives (0.5 -> 1, 2.5 -> 3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def steps_calories_burned(count: int) -> int:
    """Estimate calories burned from a step count."""
    return round_int(count * CALORIES_PER_STEP)


def exercise_calories_burned(
    exercise_type: ExerciseType | str,
    duration_minutes: float,
    intensity: Intensity | str = Intensity.MODERATE,
    user_weight_kg: float = REFERENCE_WEIGHT_KG,
) -> int:
    """Estimate calories burned by an activity, scaled by body weight.

    Unknown exercise types use the "other" row of the table.
    """
    try:
        exercise_type = ExerciseType(exercise_type)
    except ValueError:
        exercise_type = ExerciseType.OTHER
    intensity = Intensity(intensity)

    per_minute = CALORIES_PER_MINUTE[exercise_type][intensity]
    weight_multiplier = user_weight_kg / REFERENCE_WEIGHT_KG
    return round_int(per_minute * duration_minutes * weight_multiplier)


def total_exercise_duration(activities: list[Activity]) -> int:
    return sum(a.duration or 0 for a in activities)


def total_exercise_calories(activities: list[Activity]) -> int:
    return sum(a.calories_burned or 0 for a in activities)


def total_diet_calories(meals: list[Meal]) -> int:
    return sum(m.calories or 0 for m in meals)


def calorie_balance(total_intake: int, total_burned: int) -> int:
    """Intake minus expenditure."""
    return total_intake - total_burned


def bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index from weight (kg) and height (cm)."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_blood_pressure(
    systolic: float | None, diastolic: float | None
) -> BloodPressureCategory:
    """Categorize a reading using the ESC/ESH grading cascade.

    Rules are evaluated in order and the first match wins, so the
    isolated-systolic rule only catches readings none of the grades did.
    """
    if not systolic or not diastolic:
        return BloodPressureCategory.NORMAL

    if systolic < 120 and diastolic < 80:
        return BloodPressureCategory.OPTIMAL
    if systolic < 130 and diastolic < 85:
        return BloodPressureCategory.NORMAL
    if systolic < 140 and diastolic < 90:
        return BloodPressureCategory.HIGH_NORMAL
    if systolic < 160 and diastolic < 100:
        return BloodPressureCategory.GRADE1_HYPERTENSION
    if systolic < 180 and diastolic < 110:
        return BloodPressureCategory.GRADE2_HYPERTENSION
    if systolic >= 180 or diastolic >= 110:
        return BloodPressureCategory.GRADE3_HYPERTENSION
    if systolic >= 140 and diastolic < 90:
        return BloodPressureCategory.ISOLATED_SYSTOLIC
    return BloodPressureCategory.NORMAL


def blood_pressure_interpretation(category: BloodPressureCategory | str | None) -> dict:
    """Human-readable label, color and advice for a category."""
    try:
        category = BloodPressureCategory(category)
    except ValueError:
        category = BloodPressureCategory.NORMAL
    return dict(BLOOD_PRESSURE_INTERPRETATIONS[category])


def _body_fat_score(body_fat_pct: float, gender: str, age: int | None) -> int:
    bands = BODY_FAT_THRESHOLDS["male" if gender == "male" else "female"]
    thresholds = bands[-1][1]
    if age is not None:
        for upper_age, band in bands:
            if upper_age is None or age < upper_age:
                thresholds = band
                break

    excellent, good, average = thresholds
    if body_fat_pct < excellent:
        return 5
    if body_fat_pct < good:
        return 4
    if body_fat_pct < average:
        return 3
    return 2


def _muscle_mass_score(muscle_mass_kg: float, gender: str) -> int:
    baseline = BASELINE_MUSCLE_MASS_KG["male" if gender == "male" else "female"]
    if muscle_mass_kg > baseline * 1.2:
        return 5
    if muscle_mass_kg > baseline:
        return 4
    if muscle_mass_kg > baseline * 0.8:
        return 3
    return 2


def classify_fitness_level(
    body_fat_pct: float,
    muscle_mass_kg: float,
    gender: Gender | str | None,
    age: int | None,
) -> FitnessLevel:
    """Classify fitness from body fat and muscle mass.

    Anyone not recorded as male is scored on the female tables, and an
    unknown age falls into the oldest band.
    """
    gender_value = gender.value if isinstance(gender, Gender) else gender
    score = (
        _body_fat_score(body_fat_pct, gender_value, age)
        + _muscle_mass_score(muscle_mass_kg, gender_value)
    ) / 2

    if score >= 4.5:
        return FitnessLevel.EXCELLENT
    if score >= 3.5:
        return FitnessLevel.GOOD
    if score >= 2.5:
        return FitnessLevel.AVERAGE
    if score >= 1.5:
        return FitnessLevel.FAIR
    return FitnessLevel.POOR
