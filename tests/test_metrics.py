"""Tests for derived health metrics."""

import pytest

from healthmate.models.health_log import (
    Activity,
    BloodPressureCategory,
    ExerciseType,
    FitnessLevel,
    Intensity,
    Meal,
)
from healthmate.models.user_profile import Gender
from healthmate.utils.metrics import (
    blood_pressure_interpretation,
    bmi,
    calorie_balance,
    classify_blood_pressure,
    classify_fitness_level,
    exercise_calories_burned,
    round_half_up,
    round_int,
    steps_calories_burned,
    total_diet_calories,
    total_exercise_calories,
    total_exercise_duration,
)


class TestRounding:
    """Tests for half-up rounding."""

    def test_halves_round_up(self):
        """Test that .5 rounds towards positive infinity."""
        assert round_int(0.5) == 1
        assert round_int(2.5) == 3
        assert round_int(-2.5) == -2

    def test_round_to_digits(self):
        """Test rounding to a number of decimals."""
        assert round_half_up(2.25, 1) == pytest.approx(2.3)
        assert round_half_up(6.333, 1) == pytest.approx(6.3)


class TestCalories:
    """Tests for calorie estimates."""

    def test_steps_calories(self):
        """Test 0.04 kcal per step, rounded."""
        assert steps_calories_burned(10000) == 400
        assert steps_calories_burned(12) == 0
        assert steps_calories_burned(13) == 1
        assert steps_calories_burned(0) == 0

    def test_exercise_calories_reference_weight(self):
        """Test table lookup for a 70kg person."""
        assert exercise_calories_burned(ExerciseType.RUNNING, 30, Intensity.MODERATE) == 360
        assert exercise_calories_burned("yoga", 60, "low") == 120

    def test_exercise_calories_scaled_by_weight(self):
        """Test the weight multiplier."""
        assert exercise_calories_burned(ExerciseType.RUNNING, 30, Intensity.MODERATE, 80) == 411

    def test_unknown_exercise_uses_other_row(self):
        """Test fallback to the "other" row."""
        assert exercise_calories_burned("skating", 10, Intensity.MODERATE) == 50

    def test_totals(self):
        """Test diet and exercise totals."""
        activities = [
            Activity(type=ExerciseType.WALKING, name="Walk", duration=20, calories_burned=80),
            Activity(type=ExerciseType.YOGA, name="Yoga", duration=40, calories_burned=None),
        ]
        meals = [Meal(name="Eggs", calories=300), Meal(name="Salad", calories=250)]

        assert total_exercise_duration(activities) == 60
        assert total_exercise_calories(activities) == 80
        assert total_diet_calories(meals) == 550
        assert total_diet_calories([]) == 0
        assert calorie_balance(550, 480) == 70


class TestBmi:
    """Tests for BMI."""

    def test_bmi(self):
        """Test weight over height in meters squared."""
        assert bmi(81, 180) == pytest.approx(25.0)
        assert bmi(72.9, 180) == pytest.approx(22.5)


class TestBloodPressure:
    """Tests for blood pressure classification."""

    @pytest.mark.parametrize(
        "systolic,diastolic,expected",
        [
            (115, 75, BloodPressureCategory.OPTIMAL),
            (125, 82, BloodPressureCategory.NORMAL),
            (119, 82, BloodPressureCategory.NORMAL),
            (135, 88, BloodPressureCategory.HIGH_NORMAL),
            (150, 95, BloodPressureCategory.GRADE1_HYPERTENSION),
            (170, 105, BloodPressureCategory.GRADE2_HYPERTENSION),
            (185, 95, BloodPressureCategory.GRADE3_HYPERTENSION),
            (120, 115, BloodPressureCategory.GRADE3_HYPERTENSION),
        ],
    )
    def test_cascade(self, systolic, diastolic, expected):
        """Test each step of the cascade."""
        assert classify_blood_pressure(systolic, diastolic) == expected

    def test_first_match_wins(self):
        """Test that grades are checked before the isolated-systolic rule."""
        assert classify_blood_pressure(145, 85) == BloodPressureCategory.GRADE1_HYPERTENSION
        assert classify_blood_pressure(175, 70) == BloodPressureCategory.GRADE2_HYPERTENSION

    def test_missing_reading_is_normal(self):
        """Test that a missing half of the reading gives normal."""
        assert classify_blood_pressure(None, 80) == BloodPressureCategory.NORMAL
        assert classify_blood_pressure(130, None) == BloodPressureCategory.NORMAL

    def test_interpretation(self):
        """Test the interpretation table and its fallback."""
        grade2 = blood_pressure_interpretation(BloodPressureCategory.GRADE2_HYPERTENSION)
        assert grade2["color"] == "red"
        assert blood_pressure_interpretation("high_normal")["color"] == "yellow"
        assert blood_pressure_interpretation("bogus")["label"] == "Normal"
        assert blood_pressure_interpretation(None)["label"] == "Normal"


class TestFitnessLevel:
    """Tests for fitness level classification."""

    def test_excellent_young_male(self):
        """Test a lean, muscular young man."""
        assert classify_fitness_level(12, 45, Gender.MALE, 25) == FitnessLevel.EXCELLENT

    def test_female_unknown_age_uses_oldest_band(self):
        """Test that an unknown age uses the 50+ thresholds."""
        # 30% scores 4 for women over 50 but only 3 under 30
        assert classify_fitness_level(30, 25, "female", None) == FitnessLevel.GOOD
        assert classify_fitness_level(30, 25, "female", 25) == FitnessLevel.AVERAGE

    def test_non_male_uses_female_tables(self):
        """Test that other genders are scored like women."""
        assert classify_fitness_level(22, 20, Gender.OTHER, 25) == FitnessLevel.AVERAGE
        assert classify_fitness_level(22, 20, None, 25) == FitnessLevel.AVERAGE

    def test_low_scores(self):
        """Test high body fat and low muscle mass."""
        assert classify_fitness_level(35, 20, Gender.MALE, 60) == FitnessLevel.FAIR
