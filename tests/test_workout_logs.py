"""
Tests for exercise building, same-day merging and daily summaries
"""
from datetime import date

import pytest

from strength_analytics.services.models import Exercise, ExerciseCategory, WeightUnit, WorkoutLog
from strength_analytics.services.workout_logs import (
    build_exercise,
    duration_in_minutes,
    generate_workout_summaries,
    merge_exercises,
)


class TestBuildExercise:
    """Units are kept only for positive quantities"""

    def test_default_units_for_positive_quantities(self):
        exercise = build_exercise("Rowing", category=ExerciseCategory.CARDIO, weight=20, distance=2, duration=30)
        assert exercise.weight_unit == WeightUnit.KG
        assert exercise.distance_unit == 'mi'
        assert exercise.duration_unit == 'min'

    def test_units_dropped_without_quantity(self):
        exercise = build_exercise("Plank", weight=0, weight_unit=WeightUnit.LBS, duration=0, duration_unit='sec')
        assert exercise.weight_unit is None
        assert exercise.duration_unit is None
        assert exercise.distance_unit is None

    def test_explicit_units_kept(self):
        exercise = build_exercise("Squat", sets=3, reps=5, weight=225, weight_unit="lbs")
        assert exercise.weight_unit == WeightUnit.LBS

    def test_name_trimmed(self):
        assert build_exercise("  Leg Press ").name == "Leg Press"


class TestMergeExercises:
    """One log per day; repeat submissions only add new exercises"""

    def test_duplicates_skipped_by_normalized_name(self):
        existing = WorkoutLog(date=date(2024, 2, 1), exercises=(Exercise(name="Chest Press"),), id="1")
        new = [Exercise(name="chest press (machine)"), Exercise(name="Leg Curl"), Exercise(name="leg curl")]

        merged, added = merge_exercises(existing, new)

        assert added == 1
        assert [e.name for e in merged.exercises] == ["Chest Press", "Leg Curl"]
        assert merged.id == "1"
        assert len(existing.exercises) == 1

    def test_nothing_new(self):
        existing = WorkoutLog(date=date(2024, 2, 1), exercises=(Exercise(name="Squat"),))
        merged, added = merge_exercises(existing, [Exercise(name="EGYM Squat")])
        assert added == 0
        assert merged == existing


class TestWorkoutSummaries:

    def test_totals_per_day_most_recent_first(self):
        logs = [
            WorkoutLog(date=date(2024, 2, 1), exercises=(
                Exercise(name="Squat", category=ExerciseCategory.LOWER_BODY, sets=3, reps=5, weight=100),
                Exercise(name="Bench Press", category=ExerciseCategory.UPPER_BODY, sets=4, reps=8, weight=70),
            )),
            WorkoutLog(date=date(2024, 2, 3), exercises=(
                Exercise(name="Treadmill", category=ExerciseCategory.CARDIO, duration=1, duration_unit='hr',
                         calories=400),
                Exercise(name="Plank", category=ExerciseCategory.CORE, duration=90, duration_unit='sec'),
            )),
        ]

        summaries = generate_workout_summaries(logs)

        assert [s.date for s in summaries] == [date(2024, 2, 3), date(2024, 2, 1)]
        recent, older = summaries
        assert recent.total_duration_minutes == pytest.approx(61.5)
        assert recent.total_calories_burned == 400
        assert recent.categories == {"Cardio": 1, "Core": 1}
        assert older.total_exercises == 2
        assert older.total_sets == 7
        assert older.total_reps == 3 * 5 + 4 * 8

    def test_empty(self):
        assert generate_workout_summaries([]) == []

    def test_duration_without_unit_is_minutes(self):
        assert duration_in_minutes(Exercise(name="Bike", duration=20)) == 20
