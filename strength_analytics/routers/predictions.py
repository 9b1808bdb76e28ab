"""
Predictions Router
API endpoints for estimated one-rep maxes
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..repository import load_exercise_library, load_workout_logs
from ..services import calculate_1rm, find_six_week_avg_e1rm

router = APIRouter(prefix="/predictions", tags=["Predictions"])

FORMULAS = ['epley', 'brzycki', 'lombardi', 'oconner', 'mayhew']


@router.get("/1rm/calculate")
async def calculate_one_rep_max(
    weight: float = Query(..., gt=0),
    reps: int = Query(..., ge=1, le=30),
    formula: str = Query(default="epley", pattern="^(epley|brzycki|lombardi|oconner|mayhew|average)$")
):
    """
    Calculate estimated 1RM using various formulas.

    - **weight**: Weight lifted
    - **reps**: Number of reps completed
    - **formula**: Formula to use (epley, brzycki, lombardi, oconner, mayhew, average)
    """
    all_formulas = {
        name: round(calculate_1rm(weight, reps, name), 1)
        for name in FORMULAS
    }

    return {
        "weight": weight,
        "reps": reps,
        "formula": formula,
        "estimated_1rm": round(calculate_1rm(weight, reps, formula), 1),
        "all_formulas": all_formulas
    }


@router.get("/e1rm/{user_id}")
async def get_average_e1rm(
    user_id: str,
    exercise: List[str] = Query(..., description="Exercise name(s) treated as one lift"),
    as_of: Optional[date] = Query(default=None, description="End of the averaging window (default: today)"),
    db: Session = Depends(get_db)
):
    """
    Six-week average estimated 1RM for a lift.

    Every qualifying entry in the window counts once; the result is
    reported in the unit of the most recent entry.

    - **user_id**: Owner of the workout logs
    - **exercise**: One or more names (aliases resolve to the same lift)
    - **as_of**: Reference date closing the window
    """
    as_of = as_of or date.today()
    library = load_exercise_library(db)
    logs = load_workout_logs(db, user_id)

    average = find_six_week_avg_e1rm(logs, exercise, library, as_of, config.AVERAGE_WINDOW_WEEKS)

    if average is None:
        return {
            "as_of": as_of,
            "exercise": exercise,
            "message": f"No qualifying sets in the last {config.AVERAGE_WINDOW_WEEKS} weeks",
            "e1rm": None
        }

    return {
        "as_of": as_of,
        "exercise": average.exercise_name,
        "e1rm": round(average.weight, 1),
        "unit": average.weight_unit,
        "session_count": average.session_count
    }
