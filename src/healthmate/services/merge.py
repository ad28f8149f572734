"""Daily log merge engine.

Pure functions that fold partial updates, meals and activities into a
day's log and recompute every derived field. Persistence and locking
live in HealthLogService; nothing here touches the database.
"""

import logging
from datetime import datetime

from ..models.health_log import (
    Activity,
    BloodPressure,
    BodyComposition,
    DailyLog,
    Diet,
    Meal,
    SleepQuality,
    Steps,
)
from ..models.updates import DailyLogUpdate
from ..models.user_profile import UserProfile
from ..utils.metrics import (
    REFERENCE_WEIGHT_KG,
    bmi,
    calorie_balance,
    classify_blood_pressure,
    classify_fitness_level,
    exercise_calories_burned,
    steps_calories_burned,
    total_diet_calories,
    total_exercise_calories,
    total_exercise_duration,
)

logger = logging.getLogger(__name__)


def new_daily_log(user_id: int, when: datetime | None = None) -> DailyLog:
    """Create a zero-valued log for the day containing ``when``."""
    return DailyLog(
        user_id=user_id,
        date=when or datetime.now(),
        steps=Steps(count=0, calories_burned=0),
        diet=Diet(meals=[], water_intake=0, total_calories=0),
    )


def recompute_derived(log: DailyLog, profile: UserProfile | None = None) -> DailyLog:
    """Recompute every derived field of ``log`` in place.

    BMI needs a height from the profile and a weight (the log's own,
    falling back to the profile's). Fitness level additionally needs body
    fat and muscle mass. Client-supplied BMI or fitness level survive
    only when they cannot be derived.
    """
    log.steps.calories_burned = steps_calories_burned(log.steps.count or 0)

    log.exercise.total_duration = total_exercise_duration(log.exercise.activities)
    log.exercise.total_calories_burned = total_exercise_calories(log.exercise.activities)

    log.diet.total_calories = total_diet_calories(log.diet.meals)

    log.calorie_balance = calorie_balance(
        log.diet.total_calories,
        log.steps.calories_burned + log.exercise.total_calories_burned,
    )

    composition = log.body_composition
    weight = log.weight or (profile.weight if profile else None)
    if composition and profile and profile.height and weight:
        composition.bmi = bmi(weight, profile.height)
        if composition.body_fat_percentage and composition.muscle_mass:
            composition.fitness_level = classify_fitness_level(
                composition.body_fat_percentage,
                composition.muscle_mass,
                profile.gender,
                profile.age,
            )

    pressure = log.blood_pressure
    if pressure:
        if pressure.systolic and pressure.diastolic:
            pressure.category = classify_blood_pressure(pressure.systolic, pressure.diastolic)
        else:
            pressure.category = None

    return log


def _drop_stale_body_metrics(log: DailyLog, update: DailyLogUpdate) -> None:
    """Clear BMI or fitness level when this update removed one of their inputs.

    Values sent in the same update are kept. Anything still derivable is
    filled in again by recompute_derived.
    """
    composition = log.body_composition
    if composition is None:
        return
    section = update.body_composition
    supplied = section.provided if section else frozenset()

    if "bmi" not in supplied and update.has("weight") and update.weight is None:
        composition.bmi = None

    if "fitness_level" not in supplied and section and any(
        section.has(name) and getattr(section, name) is None
        for name in ("body_fat_percentage", "muscle_mass")
    ):
        composition.fitness_level = None


def merge_daily_update(
    existing: DailyLog | None,
    update: DailyLogUpdate,
    user_id: int,
    profile: UserProfile | None = None,
    now: datetime | None = None,
) -> DailyLog:
    """Merge a partial update into a day's log.

    Args:
        existing: The stored log for the day, or None to start a new one
        update: Validated partial update
        user_id: Owner of the log
        profile: Owner's profile, used for BMI and fitness level
        now: Merge time, stamped on body composition and blood pressure

    Returns:
        The merged log with derived fields recomputed
    """
    now = now or datetime.now()
    log = existing or new_daily_log(user_id, update.date or now)

    if update.steps:
        update.steps.apply_to(log.steps)

    if update.sleep:
        update.sleep.apply_to(log.sleep)
        if log.sleep.quality is None and log.sleep.duration is not None:
            log.sleep.quality = SleepQuality.FAIR

    if update.diet:
        # Meals only grow through add_meal
        update.diet.apply_to(log.diet)

    if update.body_composition:
        if log.body_composition is None:
            log.body_composition = BodyComposition()
        update.body_composition.apply_to(log.body_composition)
        log.body_composition.notes = log.body_composition.notes or ""
        log.body_composition.measurement_time = now

    if update.blood_pressure:
        if log.blood_pressure is None:
            log.blood_pressure = BloodPressure()
        update.blood_pressure.apply_to(log.blood_pressure)
        log.blood_pressure.notes = log.blood_pressure.notes or ""
        log.blood_pressure.measurement_time = now

    if update.has("mood"):
        log.mood = update.mood
    if update.has("energy"):
        log.energy = update.energy
    if update.has("weight"):
        log.weight = update.weight
    if update.has("notes"):
        log.notes = update.notes or ""

    _drop_stale_body_metrics(log, update)
    recompute_derived(log, profile)
    logger.debug(
        "Merged update into log for user %s on %s (sections: %s)",
        user_id,
        log.day,
        _describe(update),
    )
    return log


def add_meal(
    existing: DailyLog | None,
    meal: Meal,
    user_id: int,
    profile: UserProfile | None = None,
    now: datetime | None = None,
) -> DailyLog:
    """Append a meal to the day's log and recompute its totals."""
    log = existing or new_daily_log(user_id, now)
    log.diet.meals.append(
        Meal(
            name=meal.name or "",
            type=meal.type,
            calories=max(int(meal.calories or 0), 0),
            protein=max(int(meal.protein or 0), 0),
            time=meal.time,
        )
    )
    recompute_derived(log, profile)
    logger.debug(
        "Added meal %r to log for user %s, total calories now %s",
        meal.name,
        user_id,
        log.diet.total_calories,
    )
    return log


def add_activity(
    existing: DailyLog | None,
    activity: Activity,
    user_id: int,
    profile: UserProfile | None = None,
    now: datetime | None = None,
) -> DailyLog:
    """Append an exercise activity to the day's log.

    Calories burned are estimated from the activity table and the user's
    weight when the activity does not carry its own figure.
    """
    now = now or datetime.now()
    log = existing or new_daily_log(user_id, now)

    if activity.calories_burned is None:
        weight = (log.weight or (profile.weight if profile else None)) or REFERENCE_WEIGHT_KG
        activity.calories_burned = exercise_calories_burned(
            activity.type, activity.duration, activity.intensity, weight
        )
    if activity.time is None:
        activity.time = now

    log.exercise.activities.append(activity)
    recompute_derived(log, profile)
    logger.debug(
        "Added %s activity (%s min, %s kcal) for user %s",
        activity.type.value,
        activity.duration,
        activity.calories_burned,
        user_id,
    )
    return log


def _describe(update: DailyLogUpdate) -> str:
    sections = [
        name
        for name in ("steps", "sleep", "diet", "body_composition", "blood_pressure")
        if getattr(update, name) is not None
    ]
    sections.extend(sorted(update.provided))
    return ", ".join(sections) or "none"
