"""
Workouts Router
API endpoints for logging workouts and daily summaries
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..repository import load_workout_logs, save_workout_log
from ..services import ExerciseCategory, WeightUnit, build_exercise, generate_workout_summaries

router = APIRouter(prefix="/workouts", tags=["Workouts"])


class ExerciseIn(BaseModel):
    name: str = Field(..., min_length=1)
    category: ExerciseCategory = ExerciseCategory.OTHER
    sets: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    weight: float = Field(default=0, ge=0)
    weight_unit: Optional[WeightUnit] = None
    distance: Optional[float] = Field(default=None, ge=0)
    distance_unit: Optional[str] = Field(default=None, pattern="^(mi|km|ft|m)$")
    duration: Optional[float] = Field(default=None, ge=0)
    duration_unit: Optional[str] = Field(default=None, pattern="^(sec|min|hr)$")
    calories: Optional[float] = Field(default=None, ge=0)


class WorkoutLogIn(BaseModel):
    date: date
    exercises: List[ExerciseIn] = Field(..., min_length=1)


@router.post("/{user_id}")
async def log_workout(
    user_id: str,
    workout: WorkoutLogIn,
    db: Session = Depends(get_db)
):
    """
    Log exercises for a date.

    A user has at most one log per date: logging again for the same date
    adds only exercises not already in that day's log.
    """
    exercises = [build_exercise(**exercise.model_dump()) for exercise in workout.exercises]
    log, added_count, created = save_workout_log(db, user_id, workout.date, exercises)

    return {
        "id": log.id,
        "date": log.date,
        "created": created,
        "exercises_added": added_count,
        "total_exercises": len(log.exercises),
        "exercises": [asdict(exercise) for exercise in log.exercises]
    }


@router.get("/{user_id}/summaries")
async def get_workout_summaries(
    user_id: str,
    db: Session = Depends(get_db)
):
    """Per-day totals (exercises, sets, reps, minutes, calories), most recent first"""
    summaries = generate_workout_summaries(load_workout_logs(db, user_id))
    return {
        "days": len(summaries),
        "summaries": [asdict(summary) for summary in summaries]
    }
