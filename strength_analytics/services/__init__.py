"""
Analytics Services Package

Contains the core strength analytics logic:
- Exercise name resolution against the exercise library
- Personal record selection
- Six-week e1RM averages, progression series and trend fitting
- Strength-level classification against population standards
- StrengthImbalanceAnalyzer: paired muscle-group comparisons
- Workout log merging and daily summaries
"""

from .models import (
    E1RMAverage,
    Exercise,
    ExerciseCategory,
    ExerciseDocument,
    FitnessGoal,
    ImbalanceFocus,
    ImbalanceType,
    LiftTrendSummary,
    NoDataFinding,
    PersonalRecord,
    StrengthFinding,
    StrengthLevel,
    UserProfile,
    WeightUnit,
    WorkoutDaySummary,
    WorkoutLog,
    convert_weight,
    to_kg,
)
from .exercise_names import find_canonical_exercise, normalize_exercise_name, resolve_canonical_name, to_title_case
from .personal_records import find_best_pr, get_best_records, group_records_by_category, with_strength_levels
from .lift_progression import (
    analyze_lift_trends,
    build_progression_series,
    calculate_1rm,
    classify_trend,
    find_six_week_avg_e1rm,
    frequently_logged_lifts,
    trend_slope,
)
from .strength_standards import get_exercise_category, get_strength_level, get_strength_thresholds
from .imbalance_analyzer import StrengthImbalanceAnalyzer
from .workout_logs import build_exercise, generate_workout_summaries, merge_exercises

__all__ = [
    'E1RMAverage',
    'Exercise',
    'ExerciseCategory',
    'ExerciseDocument',
    'FitnessGoal',
    'ImbalanceFocus',
    'ImbalanceType',
    'LiftTrendSummary',
    'NoDataFinding',
    'PersonalRecord',
    'StrengthFinding',
    'StrengthLevel',
    'UserProfile',
    'WeightUnit',
    'WorkoutDaySummary',
    'WorkoutLog',
    'convert_weight',
    'to_kg',
    'find_canonical_exercise',
    'normalize_exercise_name',
    'resolve_canonical_name',
    'to_title_case',
    'find_best_pr',
    'get_best_records',
    'group_records_by_category',
    'with_strength_levels',
    'analyze_lift_trends',
    'build_progression_series',
    'calculate_1rm',
    'classify_trend',
    'find_six_week_avg_e1rm',
    'frequently_logged_lifts',
    'trend_slope',
    'get_exercise_category',
    'get_strength_level',
    'get_strength_thresholds',
    'StrengthImbalanceAnalyzer',
    'build_exercise',
    'generate_workout_summaries',
    'merge_exercises',
]
