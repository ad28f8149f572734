"""Analytics over windows of daily logs.

Everything here is a pure read-then-compute over logs the caller has
already loaded (oldest first), so it is safe to run per user in parallel.
"""

from collections.abc import Sequence

from ..models.analytics import (
    AnalyticsReport,
    CalorieBalanceReport,
    DailyBalance,
    Prediction,
    PredictionResult,
    TrendDirection,
    TrendPoint,
)
from ..models.health_log import BloodPressureCategory, DailyLog, Exercise
from ..utils.metrics import round_half_up, round_int

MIN_TREND_POINTS = 3
MIN_PREDICTION_DAYS = 7

RECOMMEND_REDUCE = (
    "You're consuming significantly more calories than you're burning. Consider "
    "increasing your exercise duration or reducing calorie intake for better balance."
)
RECOMMEND_MODERATE = (
    "Your calorie intake is moderately higher than what you're burning. Adding 20-30 "
    "minutes more exercise daily could help achieve better balance."
)
RECOMMEND_EAT_MORE = (
    "You're burning more calories than you're consuming. Make sure you're eating "
    "enough to fuel your activities and recovery."
)
RECOMMEND_BALANCED = (
    "Great job! Your calorie intake and burn are well balanced. Keep up the good work!"
)

INSUFFICIENT_DATA_MESSAGE = "Need at least 7 days of data for predictions"


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def count_workouts(exercise) -> int:
    """Number of workout entries counted by the analytics report.

    Only a list-shaped exercise value has a length; the structured
    Exercise section does not, so it contributes nothing. Activities
    inside ``exercise.activities`` are not counted here.
    """
    if isinstance(exercise, Exercise) or exercise is None:
        return 0
    if isinstance(exercise, Sequence):
        return len(exercise)
    return 0


def aggregate(logs: Sequence[DailyLog], window_days: int = 7) -> AnalyticsReport:
    """Roll up a window of logs into averages, series and distributions.

    Args:
        logs: Logs ordered by date, oldest first
        window_days: Size of the window the logs were selected from

    Returns:
        AnalyticsReport; all zeros and empty series when ``logs`` is empty
    """
    report = AnalyticsReport(days=window_days)
    if not logs:
        return report

    body_fat, muscle_mass, bone_density = [], [], []
    systolic, diastolic = [], []

    for log in logs:
        steps = log.steps.count or 0
        sleep = log.sleep.duration or 0
        calories = log.diet.total_calories or 0
        energy = log.energy or 0

        report.steps_trend.append(TrendPoint(log.date, steps))
        report.sleep_trend.append(TrendPoint(log.date, sleep))
        report.calories_trend.append(TrendPoint(log.date, calories))
        report.energy_trend.append(TrendPoint(log.date, energy))

        if log.mood:
            mood = log.mood.value
            report.mood_distribution[mood] = report.mood_distribution.get(mood, 0) + 1

        report.total_workouts += count_workouts(log.exercise)

        composition = log.body_composition
        if composition:
            if composition.body_fat_percentage is not None:
                report.body_fat_trend.append(
                    TrendPoint(log.date, composition.body_fat_percentage)
                )
                body_fat.append(composition.body_fat_percentage)
            if composition.muscle_mass is not None:
                report.muscle_mass_trend.append(TrendPoint(log.date, composition.muscle_mass))
                muscle_mass.append(composition.muscle_mass)
            if composition.bone_density is not None:
                report.bone_density_trend.append(
                    TrendPoint(log.date, composition.bone_density)
                )
                bone_density.append(composition.bone_density)
            if composition.fitness_level:
                level = composition.fitness_level.value
                report.fitness_level_counts[level] = (
                    report.fitness_level_counts.get(level, 0) + 1
                )

        pressure = log.blood_pressure
        if pressure:
            if pressure.systolic is not None:
                report.systolic_trend.append(TrendPoint(log.date, pressure.systolic))
                systolic.append(pressure.systolic)
            if pressure.diastolic is not None:
                report.diastolic_trend.append(TrendPoint(log.date, pressure.diastolic))
                diastolic.append(pressure.diastolic)
            if pressure.category:
                category = pressure.category.value
                report.bp_category_counts[category] = (
                    report.bp_category_counts.get(category, 0) + 1
                )

    report.average_steps = round_int(_mean([p.value for p in report.steps_trend]))
    report.average_sleep = round_half_up(_mean([p.value for p in report.sleep_trend]), 1)
    report.average_calories = round_int(_mean([p.value for p in report.calories_trend]))
    report.average_energy = round_half_up(_mean([p.value for p in report.energy_trend]), 1)

    if body_fat:
        report.average_body_fat = round_half_up(_mean(body_fat), 1)
    if muscle_mass:
        report.average_muscle_mass = round_half_up(_mean(muscle_mass), 1)
    if bone_density:
        report.average_bone_density = round_half_up(_mean(bone_density), 2)
    if systolic:
        report.average_systolic = round_int(_mean(systolic))
    if diastolic:
        report.average_diastolic = round_int(_mean(diastolic))

    return report


def trend_direction(values: Sequence[float]) -> TrendDirection | None:
    """Compare the mean of the last three values with the first three.

    Returns None when there are fewer than three values.
    """
    if len(values) < MIN_TREND_POINTS:
        return None
    recent = _mean(values[-MIN_TREND_POINTS:])
    earlier = _mean(values[:MIN_TREND_POINTS])
    if recent > earlier:
        return TrendDirection.IMPROVING
    if recent < earlier:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def analyze_trends(logs: Sequence[DailyLog]) -> dict[str, str]:
    """Steps and sleep trend directions over a window of logs."""
    trends = {}
    steps = trend_direction([log.steps.count or 0 for log in logs])
    sleep = trend_direction([log.sleep.duration or 0 for log in logs])
    if steps:
        trends["steps"] = steps.value
    if sleep:
        trends["sleep"] = sleep.value
    return trends


def calorie_balance_report(logs: Sequence[DailyLog]) -> CalorieBalanceReport:
    """Intake versus step-based burn over a window.

    Exercise calories are deliberately left out of ``burned`` here, unlike
    the per-log ``calorie_balance`` field.
    """
    report = CalorieBalanceReport()
    if not logs:
        return report

    days_with_exercise = 0
    for log in logs:
        intake = log.diet.total_calories or 0
        burned = log.steps.calories_burned or 0
        report.daily_balances.append(
            DailyBalance(date=log.date, intake=intake, burned=burned, balance=intake - burned)
        )
        report.total_exercise_minutes += log.exercise.total_duration or 0
        if log.exercise.activities:
            days_with_exercise += 1

    balances = report.daily_balances
    report.average_calorie_intake = round_int(_mean([b.intake for b in balances]))
    report.average_calories_burned = round_int(_mean([b.burned for b in balances]))
    report.average_calorie_balance = round_int(_mean([b.balance for b in balances]))
    report.exercise_frequency = round_int(days_with_exercise / len(logs) * 100)
    report.recommendation = balance_recommendation(report.average_calorie_balance)
    return report


def balance_recommendation(average_balance: float) -> str:
    """Pick advice for an average daily calorie balance."""
    if average_balance > 500:
        return RECOMMEND_REDUCE
    if average_balance > 200:
        return RECOMMEND_MODERATE
    if average_balance < -200:
        return RECOMMEND_EAT_MORE
    return RECOMMEND_BALANCED


def _sleep_band(duration: float, best: int, good: int, other: int) -> int:
    if 7 <= duration <= 9:
        return best
    if 6 <= duration <= 10:
        return good
    return other


def _scaled(score: float, weight: float) -> int:
    return round_int(score / weight * 100) if weight else 0


def daily_health_score(log: DailyLog | None) -> int:
    """Four-factor score (0-100) used with the AI daily summary.

    Steps, sleep, energy and exercise are worth 25 points each. Only the
    factors the log has data for count towards the maximum.
    """
    if log is None:
        return 0

    score = 0.0
    weight = 0
    if log.steps.count:
        score += min(25, log.steps.count / log.steps.goal * 25)
        weight += 25
    if log.sleep.duration:
        score += _sleep_band(log.sleep.duration, 25, 20, 15)
        weight += 25
    if log.energy:
        score += log.energy / 10 * 25
        weight += 25
    if log.exercise.activities:
        score += 25
        weight += 25
    return _scaled(score, weight)


BODY_FAT_POINTS = ((15, 10), (20, 8), (25, 6))
BLOOD_PRESSURE_POINTS = {
    BloodPressureCategory.OPTIMAL: 10,
    BloodPressureCategory.NORMAL: 8,
    BloodPressureCategory.HIGH_NORMAL: 6,
}


def dashboard_health_score(log: DailyLog | None) -> int:
    """Six-factor score (0-100) shown on the dashboard.

    Steps, sleep, energy and exercise weigh 20% each; body fat and blood
    pressure 10% each. Renormalized over the factors present.
    """
    if log is None:
        return 0

    score = 0.0
    weight = 0
    if log.steps.count:
        score += min(20, log.steps.count / log.steps.goal * 20)
        weight += 20
    if log.sleep.duration:
        score += _sleep_band(log.sleep.duration, 20, 15, 10)
        weight += 20
    if log.energy:
        score += log.energy / 10 * 20
        weight += 20
    if log.exercise.activities:
        score += 20
        weight += 20

    composition = log.body_composition
    if composition and composition.body_fat_percentage:
        points = 4
        for limit, value in BODY_FAT_POINTS:
            if composition.body_fat_percentage <= limit:
                points = value
                break
        score += points
        weight += 10

    pressure = log.blood_pressure
    if pressure and pressure.systolic and pressure.diastolic:
        score += BLOOD_PRESSURE_POINTS.get(pressure.category, 4)
        weight += 10

    return _scaled(score, weight)


def predict(logs: Sequence[DailyLog]) -> PredictionResult:
    """Simple forward-looking signals from at least a week of logs."""
    if len(logs) < MIN_PREDICTION_DAYS:
        return PredictionResult(
            predictions=[], sufficient_data=False, message=INSUFFICIENT_DATA_MESSAGE
        )

    predictions = []

    sleep = [log.sleep.duration for log in logs if log.sleep.duration]
    if len(sleep) >= MIN_PREDICTION_DAYS:
        recent_sleep = sum(sleep[-3:]) / 3
        if recent_sleep < 6:
            predictions.append(
                Prediction(
                    type="sleep",
                    message=(
                        f"You've averaged {recent_sleep:.1f} hours of sleep recently. "
                        "Expect lower energy and focus if this pattern continues."
                    ),
                    severity="high",
                    recommendation=(
                        "Try to get 7-9 hours of sleep tonight for better performance tomorrow."
                    ),
                )
            )

    steps = [log.steps.count or 0 for log in logs]
    average_steps = _mean(steps)
    recent_steps = sum(steps[-3:]) / 3
    if recent_steps < average_steps * 0.7:
        predictions.append(
            Prediction(
                type="activity",
                message=(
                    "Your activity level has decreased significantly. "
                    "This may impact your energy and mood."
                ),
                severity="medium",
                recommendation="Consider scheduling a 20-30 minute walk or workout today.",
            )
        )

    return PredictionResult(predictions=predictions)
