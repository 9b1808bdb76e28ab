"""
Data Access
Loads and stores per-user training data with plain SQL

Rows are converted into the service dataclasses here so that the
analytics services never see database types.
"""

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import Date, bindparam, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .services.models import (
    Exercise,
    ExerciseCategory,
    ExerciseDocument,
    FitnessGoal,
    PersonalRecord,
    UserProfile,
    WeightUnit,
    WorkoutLog,
)
from .services.personal_records import deduplicate_parsed_records
from .services.workout_logs import merge_exercises

logger = logging.getLogger(__name__)


def _to_date(value) -> Optional[date]:
    """Dates come back as date objects from PostgreSQL and as ISO strings from SQLite"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _unit(value) -> Optional[WeightUnit]:
    return WeightUnit(value) if value else None


def _category(value) -> Optional[ExerciseCategory]:
    return ExerciseCategory(value) if value else None


# ---------------------------------------------------------------------------
# Exercise library
# ---------------------------------------------------------------------------

def load_exercise_library(db: Session) -> List[ExerciseDocument]:
    rows = db.execute(text("""
        SELECT id, name, normalized_name, category, equipment
        FROM exercises
        ORDER BY id
    """)).fetchall()

    legacy_rows = db.execute(text("""
        SELECT exercise_id, legacy_name
        FROM exercise_legacy_names
        ORDER BY id
    """)).fetchall()

    legacy_names: Dict[int, List[str]] = {}
    for exercise_id, legacy_name in legacy_rows:
        legacy_names.setdefault(exercise_id, []).append(legacy_name)

    return [
        ExerciseDocument(
            id=str(row.id),
            name=row.name,
            normalized_name=row.normalized_name,
            legacy_names=tuple(legacy_names.get(row.id, ())),
            category=_category(row.category),
            equipment=row.equipment,
        )
        for row in rows
    ]


def add_exercise(db: Session,
                 name: str,
                 normalized_name: str,
                 legacy_names: Sequence[str] = (),
                 category=None,
                 equipment: Optional[str] = None) -> int:
    """Add an exercise library entry with its legacy aliases"""
    db.execute(
        text("""
            INSERT INTO exercises (name, normalized_name, category, equipment)
            VALUES (:name, :normalized_name, :category, :equipment)
        """),
        {
            "name": name,
            "normalized_name": normalized_name,
            "category": ExerciseCategory(category).value if category else None,
            "equipment": equipment,
        }
    )
    exercise_id = db.execute(
        text("SELECT id FROM exercises WHERE normalized_name = :normalized_name"),
        {"normalized_name": normalized_name}
    ).scalar_one()

    for legacy_name in legacy_names:
        db.execute(
            text("INSERT INTO exercise_legacy_names (exercise_id, legacy_name) VALUES (:exercise_id, :legacy_name)"),
            {"exercise_id": exercise_id, "legacy_name": legacy_name}
        )

    db.commit()
    return exercise_id


# ---------------------------------------------------------------------------
# User profiles
# ---------------------------------------------------------------------------

def load_user_profile(db: Session, user_id: str) -> Optional[UserProfile]:
    row = db.execute(
        text("""
            SELECT gender, age, weight_value, weight_unit,
                   skeletal_muscle_mass_value, skeletal_muscle_mass_unit,
                   height_value, height_unit, workouts_per_week
            FROM user_profiles
            WHERE user_id = :user_id
        """),
        {"user_id": user_id}
    ).fetchone()

    if not row:
        return None

    goal_rows = db.execute(
        text("""
            SELECT description, is_primary, achieved, date_achieved, target_date
            FROM fitness_goals
            WHERE user_id = :user_id
            ORDER BY id
        """),
        {"user_id": user_id}
    ).fetchall()

    goals = tuple(
        FitnessGoal(
            description=goal.description,
            is_primary=bool(goal.is_primary),
            achieved=bool(goal.achieved),
            date_achieved=_to_date(goal.date_achieved),
            target_date=_to_date(goal.target_date),
        )
        for goal in goal_rows
    )

    return UserProfile(
        gender=row.gender,
        age=row.age,
        weight_value=row.weight_value,
        weight_unit=_unit(row.weight_unit),
        skeletal_muscle_mass_value=row.skeletal_muscle_mass_value,
        skeletal_muscle_mass_unit=_unit(row.skeletal_muscle_mass_unit),
        height_value=row.height_value,
        height_unit=row.height_unit,
        fitness_goals=goals,
        workouts_per_week=row.workouts_per_week,
    )


def save_user_profile(db: Session, user_id: str, profile: UserProfile):
    """Insert or replace a user's profile and goals"""
    values = {
        "user_id": user_id,
        "gender": profile.gender,
        "age": profile.age,
        "weight_value": profile.weight_value,
        "weight_unit": profile.weight_unit.value if profile.weight_unit else None,
        "smm_value": profile.skeletal_muscle_mass_value,
        "smm_unit": profile.skeletal_muscle_mass_unit.value if profile.skeletal_muscle_mass_unit else None,
        "height_value": profile.height_value,
        "height_unit": profile.height_unit,
        "workouts_per_week": profile.workouts_per_week,
    }

    db.execute(text("DELETE FROM fitness_goals WHERE user_id = :user_id"), {"user_id": user_id})
    db.execute(text("DELETE FROM user_profiles WHERE user_id = :user_id"), {"user_id": user_id})
    db.execute(
        text("""
            INSERT INTO user_profiles (
                user_id, gender, age, weight_value, weight_unit,
                skeletal_muscle_mass_value, skeletal_muscle_mass_unit,
                height_value, height_unit, workouts_per_week
            ) VALUES (
                :user_id, :gender, :age, :weight_value, :weight_unit,
                :smm_value, :smm_unit, :height_value, :height_unit, :workouts_per_week
            )
        """),
        values
    )

    insert_goal = text("""
        INSERT INTO fitness_goals (user_id, description, is_primary, achieved, date_achieved, target_date)
        VALUES (:user_id, :description, :is_primary, :achieved, :date_achieved, :target_date)
    """).bindparams(
        bindparam("date_achieved", type_=Date),
        bindparam("target_date", type_=Date),
    )
    for goal in profile.fitness_goals:
        db.execute(insert_goal, {
            "user_id": user_id,
            "description": goal.description,
            "is_primary": goal.is_primary,
            "achieved": goal.achieved,
            "date_achieved": goal.date_achieved,
            "target_date": goal.target_date,
        })

    db.commit()
    logger.info("Saved profile for user %s", user_id)


# ---------------------------------------------------------------------------
# Workout logs
# ---------------------------------------------------------------------------

def _exercise_from_row(row) -> Exercise:
    return Exercise(
        name=row.name,
        category=_category(row.category) or ExerciseCategory.OTHER,
        sets=row.sets or 0,
        reps=row.reps or 0,
        weight=float(row.weight or 0),
        weight_unit=_unit(row.weight_unit),
        distance=row.distance,
        distance_unit=row.distance_unit,
        duration=row.duration,
        duration_unit=row.duration_unit,
        calories=row.calories,
    )


def load_workout_logs(db: Session, user_id: str) -> List[WorkoutLog]:
    """All of a user's logs, oldest first, exercises in logged order"""
    rows = db.execute(
        text("""
            SELECT
                wl.id AS log_id,
                wl.log_date,
                we.name, we.category, we.sets, we.reps, we.weight, we.weight_unit,
                we.distance, we.distance_unit, we.duration, we.duration_unit, we.calories
            FROM workout_logs wl
            LEFT JOIN workout_exercises we ON we.workout_log_id = wl.id
            WHERE wl.user_id = :user_id
            ORDER BY wl.log_date, wl.id, we.position
        """),
        {"user_id": user_id}
    ).fetchall()

    logs: Dict[int, Tuple[date, List[Exercise]]] = {}
    for row in rows:
        log_date, entries = logs.setdefault(row.log_id, (_to_date(row.log_date), []))
        if row.name is not None:
            entries.append(_exercise_from_row(row))

    return [
        WorkoutLog(id=str(log_id), date=log_date, exercises=tuple(entries))
        for log_id, (log_date, entries) in logs.items()
    ]


def _find_log(db: Session, user_id: str, log_date: date) -> Optional[WorkoutLog]:
    for log in load_workout_logs(db, user_id):
        if log.date == log_date:
            return log
    return None


def _insert_exercises(db: Session, log_id: int, exercises: Iterable[Exercise], start_position: int):
    statement = text("""
        INSERT INTO workout_exercises (
            workout_log_id, position, name, category, sets, reps, weight, weight_unit,
            distance, distance_unit, duration, duration_unit, calories
        ) VALUES (
            :workout_log_id, :position, :name, :category, :sets, :reps, :weight, :weight_unit,
            :distance, :distance_unit, :duration, :duration_unit, :calories
        )
    """)
    for offset, exercise in enumerate(exercises):
        db.execute(statement, {
            "workout_log_id": log_id,
            "position": start_position + offset,
            "name": exercise.name,
            "category": ExerciseCategory(exercise.category).value,
            "sets": exercise.sets,
            "reps": exercise.reps,
            "weight": exercise.weight,
            "weight_unit": exercise.weight_unit.value if exercise.weight_unit else None,
            "distance": exercise.distance,
            "distance_unit": exercise.distance_unit,
            "duration": exercise.duration,
            "duration_unit": exercise.duration_unit,
            "calories": exercise.calories,
        })


def _merge_into_log(db: Session, user_id: str, existing: WorkoutLog,
                    exercises: Sequence[Exercise]) -> Tuple[WorkoutLog, int]:
    merged, added_count = merge_exercises(existing, exercises)
    _insert_exercises(db, int(existing.id), merged.exercises[len(existing.exercises):],
                      start_position=len(existing.exercises))
    db.commit()
    logger.info("Merged %d exercises into log %s for user %s", added_count, existing.id, user_id)
    return merged, added_count


def save_workout_log(db: Session,
                     user_id: str,
                     log_date: date,
                     exercises: Sequence[Exercise]) -> Tuple[WorkoutLog, int, bool]:
    """
    Create the user's log for `log_date`, or merge into the existing one.

    If another request creates the same day's log between the lookup and
    the insert, the unique (user_id, log_date) constraint rejects the
    insert and the exercises are merged into that log instead.

    Returns:
        (stored log, number of exercises added, whether the log was created)
    """
    existing = _find_log(db, user_id, log_date)

    if existing is None:
        try:
            db.execute(
                text("INSERT INTO workout_logs (user_id, log_date) VALUES (:user_id, :log_date)")
                .bindparams(bindparam("log_date", type_=Date)),
                {"user_id": user_id, "log_date": log_date}
            )
        except IntegrityError:
            db.rollback()
            logger.warning("Log for user %s on %s was created concurrently, merging", user_id, log_date)
            existing = _find_log(db, user_id, log_date)
            if existing is None:
                raise

    if existing is not None:
        merged, added_count = _merge_into_log(db, user_id, existing, exercises)
        return merged, added_count, False

    log_id = db.execute(
        text("SELECT id FROM workout_logs WHERE user_id = :user_id AND log_date = :log_date")
        .bindparams(bindparam("log_date", type_=Date)),
        {"user_id": user_id, "log_date": log_date}
    ).scalar_one()

    # A new log still drops repeated names within the submitted batch
    created, added_count = merge_exercises(WorkoutLog(date=log_date, id=str(log_id)), exercises)
    _insert_exercises(db, log_id, created.exercises, start_position=0)
    db.commit()
    logger.info("Created log %s for user %s with %d exercises", log_id, user_id, added_count)
    return created, added_count, True


# ---------------------------------------------------------------------------
# Personal records
# ---------------------------------------------------------------------------

def load_personal_records(db: Session, user_id: str) -> List[PersonalRecord]:
    rows = db.execute(
        text("""
            SELECT id, exercise_name, weight, weight_unit, record_date, category
            FROM personal_records
            WHERE user_id = :user_id
            ORDER BY record_date, id
        """),
        {"user_id": user_id}
    ).fetchall()

    return [
        PersonalRecord(
            id=str(row.id),
            user_id=user_id,
            exercise_name=row.exercise_name,
            weight=float(row.weight),
            weight_unit=WeightUnit(row.weight_unit),
            date=_to_date(row.record_date),
            category=_category(row.category),
        )
        for row in rows
    ]


def add_personal_records(db: Session, user_id: str, records: Sequence[PersonalRecord]) -> List[PersonalRecord]:
    """
    Store records that are not already on file (same exercise and date).

    Returns:
        The records actually inserted
    """
    new_records = deduplicate_parsed_records(load_personal_records(db, user_id), records)

    statement = text("""
        INSERT INTO personal_records (user_id, exercise_name, weight, weight_unit, record_date, category)
        VALUES (:user_id, :exercise_name, :weight, :weight_unit, :record_date, :category)
    """).bindparams(bindparam("record_date", type_=Date))

    for record in new_records:
        db.execute(statement, {
            "user_id": user_id,
            "exercise_name": record.exercise_name,
            "weight": record.weight,
            "weight_unit": WeightUnit(record.weight_unit).value,
            "record_date": record.date,
            "category": ExerciseCategory(record.category).value if record.category else None,
        })

    db.commit()
    skipped = len(records) - len(new_records)
    if skipped:
        logger.info("Skipped %d duplicate personal records for user %s", skipped, user_id)
    return new_records
