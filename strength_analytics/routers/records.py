"""
Records Router
API endpoints for personal records and strength levels
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..repository import add_personal_records, load_exercise_library, load_personal_records, load_user_profile
from ..services import (
    ExerciseCategory,
    PersonalRecord,
    WeightUnit,
    find_best_pr,
    get_best_records,
    get_exercise_category,
    get_strength_level,
    get_strength_thresholds,
    group_records_by_category,
    with_strength_levels,
)

router = APIRouter(prefix="/records", tags=["Records"])


class PersonalRecordIn(BaseModel):
    exercise_name: str = Field(..., min_length=1)
    weight: float = Field(..., gt=0)
    weight_unit: WeightUnit = WeightUnit.KG
    date: date
    category: Optional[ExerciseCategory] = None


def _record_dict(record: PersonalRecord) -> dict:
    return {
        "id": record.id,
        "exercise_name": record.exercise_name,
        "weight": record.weight,
        "weight_unit": record.weight_unit,
        "date": record.date,
        "category": record.category,
        "strength_level": record.strength_level,
    }


@router.get("/{user_id}")
async def get_personal_records(
    user_id: str,
    as_of: Optional[date] = Query(default=None, description="Ignore records set after this date"),
    db: Session = Depends(get_db)
):
    """
    Current PR per exercise with strength levels, grouped by category.

    - **user_id**: Owner of the records
    - **as_of**: Only records on or before this date count
    """
    records = load_personal_records(db, user_id)
    if as_of is not None:
        records = [record for record in records if record.date <= as_of]

    best = with_strength_levels(get_best_records(records, load_exercise_library(db)),
                                load_user_profile(db, user_id))
    grouped = group_records_by_category(best)

    return {
        "total_records": len(best),
        "categories": [
            {"category": category, "records": [_record_dict(record) for record in category_records]}
            for category, category_records in grouped.items()
        ]
    }


@router.post("/{user_id}", status_code=201)
async def create_personal_records(
    user_id: str,
    records: List[PersonalRecordIn],
    db: Session = Depends(get_db)
):
    """
    Store personal records, skipping ones already on file for the same
    exercise and date.
    """
    parsed = [
        PersonalRecord(
            exercise_name=record.exercise_name.strip(),
            weight=record.weight,
            weight_unit=record.weight_unit,
            date=record.date,
            user_id=user_id,
            category=record.category or get_exercise_category(record.exercise_name),
        )
        for record in records
    ]

    added = add_personal_records(db, user_id, parsed)

    return {
        "added": len(added),
        "skipped": len(parsed) - len(added),
        "records": [_record_dict(record) for record in added]
    }


@router.get("/{user_id}/best")
async def get_best_record(
    user_id: str,
    exercise: List[str] = Query(..., description="Exercise name(s) treated as one lift"),
    db: Session = Depends(get_db)
):
    """
    Heaviest record among the given exercise names (compared in kg).

    - **exercise**: One or more names (aliases resolve to the same lift)
    """
    records = load_personal_records(db, user_id)
    best = find_best_pr(records, exercise, load_exercise_library(db))

    if best is None:
        raise HTTPException(status_code=404, detail="No personal record found")

    result = _record_dict(best)
    result["strength_level"] = get_strength_level(best, load_user_profile(db, user_id))
    return result


@router.get("/{user_id}/thresholds")
async def get_level_thresholds(
    user_id: str,
    exercise: str = Query(..., min_length=1),
    unit: WeightUnit = Query(default=WeightUnit.KG),
    db: Session = Depends(get_db)
):
    """
    Weight needed to reach each strength level for this user.

    - **exercise**: Exercise name
    - **unit**: Output unit (kg or lbs)
    """
    profile = load_user_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    thresholds = get_strength_thresholds(exercise, profile, unit)
    if thresholds is None:
        raise HTTPException(
            status_code=404,
            detail=f"No strength standards for {exercise} with this profile"
        )

    return {
        "exercise": exercise,
        "unit": unit,
        "thresholds": thresholds
    }
