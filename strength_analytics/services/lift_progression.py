"""
Lift Progression Service
Estimated 1RM averages, per-session progression series and trend fitting

CONCEPTS DEMONSTRATED:
1. Time Windows - every calculation is anchored on an explicit `as_of` date
2. Aggregation - flattening workout logs into per-entry and per-session frames
3. Trend Fitting - least-squares regression over chronological sessions
"""

import logging
from collections import Counter
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from .exercise_names import resolve_canonical_name, resolve_exercise_keys
from .models import (
    E1RMAverage,
    ExerciseCategory,
    ExerciseDocument,
    LiftTrendSummary,
    PersonalRecord,
    UserProfile,
    WeightUnit,
    WorkoutLog,
    convert_weight,
)
from .personal_records import find_best_pr
from .strength_standards import get_strength_level

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_WEEKS = 6

# Percentage change beyond which a trend counts as improving/declining
TREND_THRESHOLD_PCT = 1.0

ENTRY_COLUMNS = [
    'workout_date', 'log_position', 'entry_position', 'exercise_key',
    'category', 'sets', 'reps', 'weight', 'weight_unit'
]


def calculate_1rm(weight: float, reps: int, formula: str = 'epley') -> float:
    """
    Calculate estimated 1RM using various formulas.

    Args:
        weight: Weight lifted
        reps: Number of reps
        formula: Which formula to use ('epley', 'brzycki', 'lombardi',
                 'oconner', 'mayhew', 'average')

    Returns:
        Estimated 1RM (0 when reps < 1 or weight <= 0)
    """
    if reps < 1 or weight <= 0:
        return 0.0

    formulas = {
        'epley': weight * (1 + reps / 30),
        'brzycki': weight * (36 / (37 - reps)) if reps < 37 else weight * 2,
        'lombardi': weight * (reps ** 0.10),
        'oconner': weight * (1 + reps / 40),
        'mayhew': weight * (100 / (52.2 + 41.9 * np.exp(-0.055 * reps)))
    }

    if formula == 'average':
        return float(np.mean(list(formulas.values())))

    return float(formulas.get(formula, formulas['epley']))


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _window_bounds(as_of, weeks: int):
    end = pd.Timestamp(_as_date(as_of))
    return end - pd.Timedelta(weeks=weeks), end


def _entries_frame(workout_logs: Sequence[WorkoutLog],
                   exercise_library: Sequence[ExerciseDocument]) -> pd.DataFrame:
    """Flatten logs into one row per exercise entry, keyed by canonical name"""
    rows = []
    for log_position, log in enumerate(workout_logs):
        for entry_position, exercise in enumerate(log.exercises):
            rows.append({
                'workout_date': pd.Timestamp(_as_date(log.date)),
                'log_position': log_position,
                'entry_position': entry_position,
                'exercise_key': resolve_canonical_name(exercise.name, exercise_library),
                'category': exercise.category,
                'sets': exercise.sets or 0,
                'reps': exercise.reps or 0,
                'weight': float(exercise.weight or 0),
                'weight_unit': WeightUnit(exercise.weight_unit) if exercise.weight_unit else WeightUnit.KG,
            })
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)


def _windowed_lifts(workout_logs, keys, exercise_library, as_of, weeks) -> pd.DataFrame:
    """Entries in the window for the given keys with sets, reps and weight all positive"""
    df = _entries_frame(workout_logs, exercise_library)
    start, end = _window_bounds(as_of, weeks)

    mask = (
        (df['workout_date'] >= start)
        & (df['workout_date'] <= end)
        & df['exercise_key'].isin(keys)
        & (df['sets'] >= 1)
        & (df['reps'] >= 1)
        & (df['weight'] > 0)
    )
    return df[mask].sort_values(
        ['workout_date', 'log_position', 'entry_position'], kind='mergesort'
    )


def find_six_week_avg_e1rm(workout_logs: Sequence[WorkoutLog],
                           exercise_names: Iterable[str],
                           exercise_library: Sequence[ExerciseDocument],
                           as_of,
                           weeks: int = DEFAULT_WINDOW_WEEKS) -> Optional[E1RMAverage]:
    """
    Average estimated 1RM over the trailing window.

    Every qualifying entry counts once (not per session). Entries logged in
    a different unit are converted to the unit of the most recent
    qualifying entry before averaging.

    Returns:
        E1RMAverage, or None when no entry qualifies
    """
    keys = resolve_exercise_keys(exercise_names, exercise_library)
    lifts = _windowed_lifts(workout_logs, keys, exercise_library, as_of, weeks)

    if lifts.empty:
        return None

    latest = lifts.iloc[-1]
    report_unit = latest['weight_unit']

    e1rms = [
        convert_weight(calculate_1rm(weight, reps), unit, report_unit)
        for weight, reps, unit in zip(lifts['weight'], lifts['reps'], lifts['weight_unit'])
    ]

    result = E1RMAverage(
        exercise_name=latest['exercise_key'],
        weight=float(np.mean(e1rms)),
        weight_unit=report_unit,
        session_count=int(lifts['workout_date'].nunique()),
    )
    logger.debug("Six-week e1RM for %s: %.1f %s over %d entries",
                 result.exercise_name, result.weight, result.weight_unit.value, len(e1rms))
    return result


def build_progression_series(workout_logs: Sequence[WorkoutLog],
                             exercise_name: str,
                             exercise_library: Sequence[ExerciseDocument],
                             as_of,
                             personal_records: Sequence[PersonalRecord] = (),
                             weeks: int = DEFAULT_WINDOW_WEEKS,
                             unit=WeightUnit.LBS) -> List[Dict]:
    """
    Per-session progression points for one lift, oldest first.

    Each session carries its best e1RM and total volume (weight x sets x reps)
    in `unit`. When the lift's best PR falls inside the window, its date is
    flagged with the PR weight (a PR-only date gets e1RM and volume of 0).
    """
    unit = WeightUnit(unit)
    key = resolve_canonical_name(exercise_name, exercise_library)
    lifts = _windowed_lifts(workout_logs, {key}, exercise_library, as_of, weeks).copy()

    lifts['weight_in_unit'] = [
        convert_weight(weight, from_unit, unit)
        for weight, from_unit in zip(lifts['weight'], lifts['weight_unit'])
    ]
    lifts['e1rm'] = [
        calculate_1rm(weight, reps) for weight, reps in zip(lifts['weight_in_unit'], lifts['reps'])
    ]
    lifts['volume'] = lifts['weight_in_unit'] * lifts['sets'] * lifts['reps']

    sessions = lifts.groupby('workout_date').agg({'e1rm': 'max', 'volume': 'sum'})
    sessions['actual_pr'] = np.nan

    best_pr = find_best_pr(personal_records, [key], exercise_library)
    start, end = _window_bounds(as_of, weeks)
    if best_pr is not None and best_pr.weight > 0:
        pr_date = pd.Timestamp(_as_date(best_pr.date))
        if start <= pr_date <= end:
            if pr_date not in sessions.index:
                sessions.loc[pr_date] = [0.0, 0.0, np.nan]
            sessions.loc[pr_date, 'actual_pr'] = convert_weight(best_pr.weight, best_pr.weight_unit, unit)

    sessions = sessions.sort_index()

    series = []
    for session_date, row in sessions.iterrows():
        has_pr = not pd.isna(row['actual_pr'])
        series.append({
            'date': session_date.date(),
            'label': f"{session_date:%b} {session_date.day}",
            'e1rm': int(round(row['e1rm'])),
            'volume': int(round(row['volume'])),
            'actual_pr': int(round(row['actual_pr'])) if has_pr else None,
            'is_actual_pr': has_pr,
            'unit': unit,
        })
    return series


def trend_slope(values: Sequence[float]) -> Optional[float]:
    """
    Percentage change along a least-squares trend line.

    Points are (session index, value); non-positive values are dropped
    before fitting, but the line is evaluated from index 0 to the last
    index of the full series.

    Returns:
        (end - start) / start * 100, or None with fewer than two positive
        points or a non-positive fitted start value
    """
    points = [(i, v) for i, v in enumerate(values) if v is not None and v > 0]
    if len(points) < 2:
        return None

    X = np.array([[i] for i, _ in points], dtype=float)
    y = np.array([v for _, v in points], dtype=float)

    model = LinearRegression()
    model.fit(X, y)

    start_y = float(model.intercept_)
    end_y = float(model.intercept_ + model.coef_[0] * (len(values) - 1))

    if start_y <= 0:
        return None
    return (end_y - start_y) / start_y * 100


def classify_trend(change_pct: Optional[float], threshold: float = TREND_THRESHOLD_PCT) -> Optional[str]:
    """'improving' above +threshold %, 'declining' below -threshold %, else 'flat'"""
    if change_pct is None:
        return None
    if change_pct > threshold:
        return 'improving'
    if change_pct < -threshold:
        return 'declining'
    return 'flat'


def analyze_lift_trends(workout_logs: Sequence[WorkoutLog],
                        personal_records: Sequence[PersonalRecord],
                        profile: Optional[UserProfile],
                        exercise_name: str,
                        exercise_library: Sequence[ExerciseDocument],
                        as_of,
                        weeks: int = DEFAULT_WINDOW_WEEKS,
                        series: Optional[List[Dict]] = None) -> LiftTrendSummary:
    """Strength level, e1RM/volume trends and average e1RM for one lift"""
    if series is None:
        series = build_progression_series(workout_logs, exercise_name, exercise_library,
                                          as_of, personal_records, weeks)

    if len(series) < 2:
        return LiftTrendSummary(current_level=None, e1rm_trend=None, volume_trend=None, avg_e1rm=None)

    current_level = None
    if profile is not None:
        best_pr = find_best_pr(personal_records, [exercise_name], exercise_library)
        if best_pr is not None:
            current_level = get_strength_level(best_pr, profile)

    average = find_six_week_avg_e1rm(workout_logs, [exercise_name], exercise_library, as_of, weeks)

    return LiftTrendSummary(
        current_level=current_level,
        e1rm_trend=trend_slope([point['e1rm'] for point in series]),
        volume_trend=trend_slope([point['volume'] for point in series]),
        avg_e1rm=average.weight if average else None,
        avg_e1rm_unit=average.weight_unit if average else None,
    )


def frequently_logged_lifts(workout_logs: Sequence[WorkoutLog],
                            exercise_library: Sequence[ExerciseDocument]) -> List[str]:
    """Canonical names of weighted, non-cardio lifts logged more than once, most frequent first"""
    counts = Counter()
    for log in workout_logs:
        for exercise in log.exercises:
            if exercise.weight and exercise.weight > 0 and exercise.category != ExerciseCategory.CARDIO:
                counts[resolve_canonical_name(exercise.name, exercise_library)] += 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [name for name, count in ranked if count > 1]
