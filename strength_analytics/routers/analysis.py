"""
Analysis Router
API endpoints for strength imbalances and lift progression
"""

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..repository import load_exercise_library, load_personal_records, load_user_profile, load_workout_logs
from ..services import (
    StrengthImbalanceAnalyzer,
    WeightUnit,
    analyze_lift_trends,
    build_progression_series,
    classify_trend,
    convert_weight,
    frequently_logged_lifts,
    to_title_case,
)

router = APIRouter(prefix="/analysis", tags=["Analysis"])


def _trend_summary(summary, unit: Optional[WeightUnit] = None) -> dict:
    """Trend fields for a response; the average e1RM is converted to `unit` when given"""
    avg_e1rm, avg_unit = summary.avg_e1rm, summary.avg_e1rm_unit
    if avg_e1rm is not None and unit is not None:
        avg_e1rm, avg_unit = convert_weight(avg_e1rm, avg_unit, unit), unit

    return {
        "current_level": summary.current_level,
        "avg_e1rm": round(avg_e1rm, 1) if avg_e1rm is not None else None,
        "avg_e1rm_unit": avg_unit,
        "e1rm_trend_pct": round(summary.e1rm_trend, 1) if summary.e1rm_trend is not None else None,
        "e1rm_trend": classify_trend(summary.e1rm_trend, config.TREND_THRESHOLD_PCT),
        "volume_trend_pct": round(summary.volume_trend, 1) if summary.volume_trend is not None else None,
        "volume_trend": classify_trend(summary.volume_trend, config.TREND_THRESHOLD_PCT),
    }


@router.get("/{user_id}/imbalances")
async def get_strength_imbalances(
    user_id: str,
    as_of: Optional[date] = Query(default=None, description="End of the averaging window (default: today)"),
    db: Session = Depends(get_db)
):
    """
    Compare paired muscle groups using six-week average e1RM.

    Each comparison reports both lifts' levels, the user's ratio, the
    target ratio and balanced range for the weaker lift's level, and the
    imbalance focus (Level Imbalance, Ratio Imbalance or Balanced).
    Comparisons without recent data on both sides report has_data=false.

    - **user_id**: User to analyze
    - **as_of**: Reference date closing the window
    """
    profile = load_user_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    as_of = as_of or date.today()
    analyzer = StrengthImbalanceAnalyzer(
        exercise_library=load_exercise_library(db),
        weeks=config.AVERAGE_WINDOW_WEEKS
    )
    findings = analyzer.analyze(load_workout_logs(db, user_id), profile, as_of)

    if not findings:
        return {
            "as_of": as_of,
            "message": "Add your gender to your profile to see strength imbalances",
            "findings": []
        }

    return {
        "as_of": as_of,
        "window_weeks": config.AVERAGE_WINDOW_WEEKS,
        "findings": [asdict(finding) for finding in findings]
    }


@router.get("/{user_id}/lifts")
async def get_lift_overview(
    user_id: str,
    as_of: Optional[date] = Query(default=None, description="End of the window (default: today)"),
    db: Session = Depends(get_db)
):
    """
    Trend overview for every lift logged more than once.

    - **user_id**: User to analyze
    - **as_of**: Reference date closing the window
    """
    as_of = as_of or date.today()
    library = load_exercise_library(db)
    logs = load_workout_logs(db, user_id)
    records = load_personal_records(db, user_id)
    profile = load_user_profile(db, user_id)

    lifts = []
    for exercise_name in frequently_logged_lifts(logs, library):
        summary = analyze_lift_trends(logs, records, profile, exercise_name, library,
                                      as_of, config.AVERAGE_WINDOW_WEEKS)
        lifts.append({
            "exercise": to_title_case(exercise_name),
            **_trend_summary(summary)
        })

    return {
        "as_of": as_of,
        "lifts_analyzed": len(lifts),
        "lifts": lifts
    }


@router.get("/{user_id}/lifts/{exercise}")
async def get_lift_progression(
    user_id: str,
    exercise: str,
    as_of: Optional[date] = Query(default=None, description="End of the window (default: today)"),
    unit: WeightUnit = Query(default=WeightUnit.LBS),
    db: Session = Depends(get_db)
):
    """
    Per-session progression for one lift.

    Each session point has the best estimated 1RM and total volume; the
    date of the lift's best PR (when inside the window) is flagged.

    - **user_id**: User to analyze
    - **exercise**: Exercise name (aliases resolve to the same lift)
    - **as_of**: Reference date closing the window
    - **unit**: Output unit (kg or lbs)
    """
    as_of = as_of or date.today()
    library = load_exercise_library(db)
    logs = load_workout_logs(db, user_id)
    records = load_personal_records(db, user_id)

    series = build_progression_series(logs, exercise, library, as_of, records,
                                      config.AVERAGE_WINDOW_WEEKS, unit)

    if not series:
        raise HTTPException(
            status_code=404,
            detail=f"No sets of {exercise} in the last {config.AVERAGE_WINDOW_WEEKS} weeks"
        )

    summary = analyze_lift_trends(logs, records, load_user_profile(db, user_id), exercise, library,
                                  as_of, config.AVERAGE_WINDOW_WEEKS, series=series)

    return {
        "exercise": to_title_case(exercise.strip()),
        "as_of": as_of,
        "unit": unit,
        "sessions": series,
        **_trend_summary(summary, unit)
    }
