"""
Profiles Router
API endpoints for the biometrics strength levels are measured against
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..repository import load_user_profile, save_user_profile
from ..services import FitnessGoal, UserProfile, WeightUnit

router = APIRouter(prefix="/profiles", tags=["Profiles"])


class FitnessGoalIn(BaseModel):
    description: str = Field(..., min_length=1)
    is_primary: bool = False
    achieved: bool = False
    date_achieved: Optional[date] = None
    target_date: Optional[date] = None


class UserProfileIn(BaseModel):
    gender: Optional[str] = Field(default=None, pattern="^(Male|Female)$")
    age: Optional[int] = Field(default=None, ge=1, le=120)
    weight_value: Optional[float] = Field(default=None, gt=0)
    weight_unit: Optional[WeightUnit] = None
    skeletal_muscle_mass_value: Optional[float] = Field(default=None, gt=0)
    skeletal_muscle_mass_unit: Optional[WeightUnit] = None
    height_value: Optional[float] = Field(default=None, gt=0)
    height_unit: Optional[str] = Field(default=None, pattern="^(cm|ft/in)$")
    workouts_per_week: Optional[int] = Field(default=None, ge=0, le=14)
    fitness_goals: List[FitnessGoalIn] = []


def _profile_dict(user_id: str, profile: UserProfile) -> dict:
    return {
        "user_id": user_id,
        "gender": profile.gender,
        "age": profile.age,
        "weight_value": profile.weight_value,
        "weight_unit": profile.weight_unit,
        "skeletal_muscle_mass_value": profile.skeletal_muscle_mass_value,
        "skeletal_muscle_mass_unit": profile.skeletal_muscle_mass_unit,
        "height_value": profile.height_value,
        "height_unit": profile.height_unit,
        "workouts_per_week": profile.workouts_per_week,
        "fitness_goals": [
            {
                "description": goal.description,
                "is_primary": goal.is_primary,
                "achieved": goal.achieved,
                "date_achieved": goal.date_achieved,
                "target_date": goal.target_date,
            }
            for goal in profile.fitness_goals
        ],
    }


@router.get("/{user_id}")
async def get_profile(
    user_id: str,
    db: Session = Depends(get_db)
):
    """Get a user's profile and fitness goals"""
    profile = load_user_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_dict(user_id, profile)


@router.put("/{user_id}")
async def update_profile(
    user_id: str,
    body: UserProfileIn,
    db: Session = Depends(get_db)
):
    """
    Create or replace a user's profile.

    A weight or skeletal muscle mass given without a unit is taken as kg.
    Gender and bodyweight are needed for strength levels; skeletal muscle
    mass is needed for exercises measured against it.
    """
    profile = UserProfile(
        gender=body.gender,
        age=body.age,
        weight_value=body.weight_value,
        weight_unit=(body.weight_unit or WeightUnit.KG) if body.weight_value else None,
        skeletal_muscle_mass_value=body.skeletal_muscle_mass_value,
        skeletal_muscle_mass_unit=((body.skeletal_muscle_mass_unit or WeightUnit.KG)
                                   if body.skeletal_muscle_mass_value else None),
        height_value=body.height_value,
        height_unit=body.height_unit,
        fitness_goals=tuple(FitnessGoal(**goal.model_dump()) for goal in body.fitness_goals),
        workouts_per_week=body.workouts_per_week,
    )

    save_user_profile(db, user_id, profile)
    return _profile_dict(user_id, load_user_profile(db, user_id))
