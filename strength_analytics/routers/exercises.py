"""
Exercises Router
API endpoints for the exercise library (canonical names and legacy aliases)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..repository import add_exercise, load_exercise_library
from ..services import ExerciseCategory, find_canonical_exercise, normalize_exercise_name

router = APIRouter(prefix="/exercises", tags=["Exercises"])


class ExerciseDocumentIn(BaseModel):
    name: str = Field(..., min_length=1)
    legacy_names: List[str] = []
    category: Optional[ExerciseCategory] = None
    equipment: Optional[str] = None


def _exercise_dict(exercise) -> dict:
    return {
        "id": exercise.id,
        "name": exercise.name,
        "normalized_name": exercise.normalized_name,
        "legacy_names": list(exercise.legacy_names),
        "category": exercise.category,
        "equipment": exercise.equipment,
    }


@router.get("")
async def list_exercises(db: Session = Depends(get_db)):
    """All library exercises with their aliases"""
    library = load_exercise_library(db)
    return {
        "total": len(library),
        "exercises": [_exercise_dict(exercise) for exercise in library]
    }


@router.post("", status_code=201)
async def create_exercise(
    body: ExerciseDocumentIn,
    db: Session = Depends(get_db)
):
    """
    Add a library exercise.

    Logged names matching the canonical name or any legacy alias (after
    normalization) are then treated as this exercise.
    """
    normalized_name = normalize_exercise_name(body.name)
    if not normalized_name:
        raise HTTPException(status_code=422, detail="Exercise name is empty")

    library = load_exercise_library(db)
    for name in [body.name, *body.legacy_names]:
        existing = find_canonical_exercise(name, library)
        if existing is not None:
            raise HTTPException(
                status_code=409,
                detail=f"'{name}' already belongs to library exercise '{existing.name}'"
            )

    add_exercise(db, body.name.strip(), normalized_name, body.legacy_names, body.category, body.equipment)

    created = next(e for e in load_exercise_library(db) if e.normalized_name == normalized_name)
    return _exercise_dict(created)
