"""
Workout Log Service
Builds exercise entries, merges same-day logs and summarizes workout days
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .exercise_names import normalize_exercise_name
from .models import Exercise, ExerciseCategory, WeightUnit, WorkoutDaySummary, WorkoutLog

logger = logging.getLogger(__name__)

DEFAULT_DISTANCE_UNIT = 'mi'
DEFAULT_DURATION_UNIT = 'min'

# Minutes per unit of logged duration
DURATION_TO_MINUTES = {
    'sec': 1 / 60,
    'min': 1.0,
    'hr': 60.0,
}


def _positive(value) -> bool:
    return value is not None and value > 0


def build_exercise(name: str,
                   category=ExerciseCategory.OTHER,
                   sets: int = 0,
                   reps: int = 0,
                   weight: float = 0.0,
                   weight_unit=None,
                   distance: Optional[float] = None,
                   distance_unit: Optional[str] = None,
                   duration: Optional[float] = None,
                   duration_unit: Optional[str] = None,
                   calories: Optional[float] = None) -> Exercise:
    """
    Build an exercise entry.

    A unit is kept (or defaulted to kg, mi or min) only when its quantity is
    positive; otherwise it is dropped.
    """
    return Exercise(
        name=name.strip(),
        category=ExerciseCategory(category) if category else ExerciseCategory.OTHER,
        sets=sets or 0,
        reps=reps or 0,
        weight=weight or 0.0,
        weight_unit=WeightUnit(weight_unit or WeightUnit.KG) if _positive(weight) else None,
        distance=distance,
        distance_unit=(distance_unit or DEFAULT_DISTANCE_UNIT) if _positive(distance) else None,
        duration=duration,
        duration_unit=(duration_unit or DEFAULT_DURATION_UNIT) if _positive(duration) else None,
        calories=calories,
    )


def merge_exercises(existing_log: WorkoutLog,
                    new_exercises: Sequence[Exercise]) -> Tuple[WorkoutLog, int]:
    """
    Merge exercises into an existing log for the same date.

    Exercises whose normalized name is already present (in the log or
    earlier in the batch) are skipped.

    Returns:
        (merged log, number of exercises added)
    """
    seen = {normalize_exercise_name(exercise.name) for exercise in existing_log.exercises}

    added = []
    for exercise in new_exercises:
        key = normalize_exercise_name(exercise.name)
        if key in seen:
            continue
        seen.add(key)
        added.append(exercise)

    if added:
        logger.debug("Merged %d new exercises into log for %s", len(added), existing_log.date)

    merged = replace(existing_log, exercises=tuple(existing_log.exercises) + tuple(added))
    return merged, len(added)


def duration_in_minutes(exercise: Exercise) -> float:
    if not _positive(exercise.duration):
        return 0.0
    return exercise.duration * DURATION_TO_MINUTES.get(exercise.duration_unit or DEFAULT_DURATION_UNIT, 1.0)


def generate_workout_summaries(workout_logs: Sequence[WorkoutLog]) -> List[WorkoutDaySummary]:
    """Per-day totals, most recent day first"""
    summaries = {}

    for log in workout_logs:
        summary = summaries.setdefault(log.date, WorkoutDaySummary(date=log.date))
        for exercise in log.exercises:
            summary.total_exercises += 1
            summary.total_sets += exercise.sets or 0
            summary.total_reps += (exercise.sets or 0) * (exercise.reps or 0)
            summary.total_duration_minutes += duration_in_minutes(exercise)
            summary.total_calories_burned += exercise.calories or 0

            category = ExerciseCategory(exercise.category).value if exercise.category else ExerciseCategory.OTHER.value
            summary.categories[category] = summary.categories.get(category, 0) + 1

    return sorted(summaries.values(), key=lambda s: s.date, reverse=True)
