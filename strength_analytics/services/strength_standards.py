"""
Strength Standards
Classifies lifts into strength tiers relative to bodyweight-normalized
population standards, and holds the target ratios used for imbalance checks

Ratios are (weight lifted in kg) / (base value in kg), where the base value
is bodyweight ('bw') or skeletal muscle mass ('smm').
"""

import math
from typing import Dict, Optional

from .exercise_names import standard_exercise_key
from .models import (
    ExerciseCategory,
    ImbalanceType,
    KG_TO_LBS,
    PersonalRecord,
    StrengthLevel,
    UserProfile,
    WeightUnit,
    to_kg,
)


SUPPORTED_GENDERS = ('Male', 'Female')

# Ratio scaling for lifters over 40: +1% per year
AGE_ADJUSTMENT_START = 40
AGE_ADJUSTMENT_PER_YEAR = 0.01

STRENGTH_STANDARDS = {
    'abdominal crunch': {
        'basis': 'bw', 'category': ExerciseCategory.CORE,
        'Male': {'intermediate': 0.75, 'advanced': 1.0, 'elite': 1.3},
        'Female': {'intermediate': 0.60, 'advanced': 0.85, 'elite': 1.15},
    },
    'abductor': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 1.5, 'advanced': 2.0, 'elite': 2.5},
        'Female': {'intermediate': 1.25, 'advanced': 1.75, 'elite': 2.25},
    },
    'adductor': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 1.1, 'advanced': 1.6, 'elite': 2.1},
        'Female': {'intermediate': 1.00, 'advanced': 1.50, 'elite': 2.25},
    },
    'back extension': {
        'basis': 'bw', 'category': ExerciseCategory.CORE,
        'Male': {'intermediate': 0.80, 'advanced': 1.10, 'elite': 1.50},
        'Female': {'intermediate': 0.65, 'advanced': 0.95, 'elite': 1.35},
    },
    'bench press': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 1.0, 'advanced': 1.5, 'elite': 2.0},
        'Female': {'intermediate': 0.75, 'advanced': 1.0, 'elite': 1.25},
    },
    'bicep curl': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.35, 'advanced': 0.5, 'elite': 0.75},
        'Female': {'intermediate': 0.40, 'advanced': 0.70, 'elite': 1.00},
    },
    'butterfly': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.85, 'advanced': 1.15, 'elite': 1.55},
        'Female': {'intermediate': 0.60, 'advanced': 0.90, 'elite': 1.30},
    },
    'chest press': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.80, 'advanced': 1.15, 'elite': 1.50},
        'Female': {'intermediate': 0.55, 'advanced': 0.90, 'elite': 1.25},
    },
    'glutes': {
        'basis': 'smm', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 2.0, 'advanced': 2.5, 'elite': 3.0},
        'Female': {'intermediate': 2.2, 'advanced': 2.8, 'elite': 3.4},
    },
    'hip thrust': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 2.0, 'advanced': 3.0, 'elite': 4.0},
        'Female': {'intermediate': 1.50, 'advanced': 2.25, 'elite': 3.00},
    },
    'lat pulldown': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.9, 'advanced': 1.2, 'elite': 1.5},
        'Female': {'intermediate': 0.70, 'advanced': 0.95, 'elite': 1.30},
    },
    'leg curl': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 0.95, 'advanced': 1.25, 'elite': 1.75},
        'Female': {'intermediate': 0.75, 'advanced': 1.05, 'elite': 1.45},
    },
    'leg extension': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 1.5, 'advanced': 1.75, 'elite': 2.5},
        'Female': {'intermediate': 1.0, 'advanced': 1.25, 'elite': 2.0},
    },
    'leg press': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 2.2, 'advanced': 3.2, 'elite': 4.3},
        'Female': {'intermediate': 2.00, 'advanced': 3.25, 'elite': 4.50},
    },
    'overhead press': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.75, 'advanced': 1.0, 'elite': 1.3},
        'Female': {'intermediate': 0.50, 'advanced': 0.85, 'elite': 1.20},
    },
    'reverse flys': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.25, 'advanced': 0.40, 'elite': 0.60},
        'Female': {'intermediate': 0.20, 'advanced': 0.35, 'elite': 0.55},
    },
    'rotary torso': {
        'basis': 'smm', 'category': ExerciseCategory.CORE,
        'Male': {'intermediate': 0.8, 'advanced': 1.0, 'elite': 1.2},
        'Female': {'intermediate': 0.7, 'advanced': 0.9, 'elite': 1.1},
    },
    'seated row': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 1.0, 'advanced': 1.5, 'elite': 2.0},
        'Female': {'intermediate': 0.75, 'advanced': 1.25, 'elite': 1.75},
    },
    'shoulder press': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.75, 'advanced': 1.0, 'elite': 1.3},
        'Female': {'intermediate': 0.50, 'advanced': 0.85, 'elite': 1.20},
    },
    'squat': {
        'basis': 'bw', 'category': ExerciseCategory.LOWER_BODY,
        'Male': {'intermediate': 1.25, 'advanced': 1.75, 'elite': 2.25},
        'Female': {'intermediate': 1.0, 'advanced': 1.5, 'elite': 2.0},
    },
    'triceps': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 0.50, 'advanced': 0.75, 'elite': 1.0},
        'Female': {'intermediate': 0.75, 'advanced': 1.25, 'elite': 1.50},
    },
}

CLASSIFIED_EXERCISES = sorted(STRENGTH_STANDARDS)


def _push_pull_ratios():
    return {
        'Female': {
            StrengthLevel.BEGINNER: {'target': 0.55, 'lower': 0.50, 'upper': 0.60},
            StrengthLevel.INTERMEDIATE: {'target': 0.62, 'lower': 0.60, 'upper': 0.65},
            StrengthLevel.ADVANCED: {'target': 0.67, 'lower': 0.65, 'upper': 0.70},
            StrengthLevel.ELITE: {'target': 0.67, 'lower': 0.65, 'upper': 0.70},
        },
        'Male': {
            StrengthLevel.BEGINNER: {'target': 0.60, 'lower': 0.55, 'upper': 0.65},
            StrengthLevel.INTERMEDIATE: {'target': 0.70, 'lower': 0.65, 'upper': 0.75},
            StrengthLevel.ADVANCED: {'target': 0.75, 'lower': 0.70, 'upper': 0.80},
            StrengthLevel.ELITE: {'target': 0.75, 'lower': 0.70, 'upper': 0.80},
        },
    }


# Target ratio (lift1 / lift2) and balanced range per comparison, gender and level
STRENGTH_RATIOS = {
    ImbalanceType.VERTICAL_PUSH_PULL: _push_pull_ratios(),
    ImbalanceType.HORIZONTAL_PUSH_PULL: _push_pull_ratios(),
    ImbalanceType.HAMSTRING_QUAD: {
        'Female': {
            StrengthLevel.BEGINNER: {'target': 0.63, 'lower': 0.60, 'upper': 0.67},
            StrengthLevel.INTERMEDIATE: {'target': 0.68, 'lower': 0.65, 'upper': 0.72},
            StrengthLevel.ADVANCED: {'target': 0.74, 'lower': 0.70, 'upper': 0.78},
            StrengthLevel.ELITE: {'target': 0.74, 'lower': 0.70, 'upper': 0.78},
        },
        'Male': {
            StrengthLevel.BEGINNER: {'target': 0.60, 'lower': 0.55, 'upper': 0.65},
            StrengthLevel.INTERMEDIATE: {'target': 0.65, 'lower': 0.60, 'upper': 0.70},
            StrengthLevel.ADVANCED: {'target': 0.71, 'lower': 0.67, 'upper': 0.75},
            StrengthLevel.ELITE: {'target': 0.71, 'lower': 0.67, 'upper': 0.75},
        },
    },
    ImbalanceType.ADDUCTOR_ABDUCTOR: {
        'Female': {
            StrengthLevel.BEGINNER: {'target': 0.75, 'lower': 0.65, 'upper': 0.85},
            StrengthLevel.INTERMEDIATE: {'target': 0.80, 'lower': 0.70, 'upper': 0.90},
            StrengthLevel.ADVANCED: {'target': 0.85, 'lower': 0.75, 'upper': 0.95},
            StrengthLevel.ELITE: {'target': 0.85, 'lower': 0.75, 'upper': 0.95},
        },
        'Male': {
            StrengthLevel.BEGINNER: {'target': 0.75, 'lower': 0.65, 'upper': 0.85},
            StrengthLevel.INTERMEDIATE: {'target': 0.82, 'lower': 0.75, 'upper': 0.90},
            StrengthLevel.ADVANCED: {'target': 0.87, 'lower': 0.80, 'upper': 0.95},
            StrengthLevel.ELITE: {'target': 0.87, 'lower': 0.80, 'upper': 0.95},
        },
    },
}


def get_exercise_category(exercise_name: str, standards: Dict = STRENGTH_STANDARDS) -> Optional[ExerciseCategory]:
    data = standards.get(standard_exercise_key(exercise_name))
    return data['category'] if data else None


def _base_value_kg(basis: str, profile: UserProfile) -> Optional[float]:
    if basis == 'smm':
        return profile.skeletal_muscle_mass_kg
    return profile.bodyweight_kg


def _age_factor(profile: UserProfile) -> float:
    if profile.age and profile.age > AGE_ADJUSTMENT_START:
        return 1 + (profile.age - AGE_ADJUSTMENT_START) * AGE_ADJUSTMENT_PER_YEAR
    return 1.0


def _lookup(exercise_name: str, profile: Optional[UserProfile], standards: Dict):
    """Return (gender ratios, base value in kg) or None when classification is impossible"""
    data = standards.get(standard_exercise_key(exercise_name))
    if data is None or profile is None:
        return None
    if profile.gender not in SUPPORTED_GENDERS:
        return None

    gender_standards = data.get(profile.gender)
    if not gender_standards:
        return None

    base_kg = _base_value_kg(data.get('basis', 'bw'), profile)
    if not base_kg or base_kg <= 0:
        return None

    return gender_standards, base_kg


def get_strength_level(record: PersonalRecord,
                       profile: Optional[UserProfile],
                       standards: Dict = STRENGTH_STANDARDS) -> StrengthLevel:
    """
    Classify a lift (a PR, or a synthetic record built from an e1RM average).

    Args:
        record: Anything with exercise_name, weight and weight_unit
        profile: The lifter's profile; gender and bodyweight (or skeletal
            muscle mass, for 'smm' exercises) are required
        standards: Standards table, keyed by standard exercise name

    Returns:
        The highest tier whose lower-bound ratio is met, or N/A when the
        exercise has no standards or the profile lacks the needed fields
    """
    found = _lookup(record.exercise_name, profile, standards)
    if found is None:
        return StrengthLevel.NA
    gender_standards, base_kg = found

    ratio = to_kg(record.weight, record.weight_unit) / base_kg * _age_factor(profile)

    if ratio >= gender_standards['elite']:
        return StrengthLevel.ELITE
    if ratio >= gender_standards['advanced']:
        return StrengthLevel.ADVANCED
    if ratio >= gender_standards['intermediate']:
        return StrengthLevel.INTERMEDIATE
    return StrengthLevel.BEGINNER


def get_strength_thresholds(exercise_name: str,
                            profile: Optional[UserProfile],
                            output_unit=WeightUnit.KG,
                            standards: Dict = STRENGTH_STANDARDS) -> Optional[Dict[str, int]]:
    """
    Weight needed to reach each tier, rounded up so that lifting the
    returned value always meets the threshold.
    """
    found = _lookup(exercise_name, profile, standards)
    if found is None:
        return None
    gender_standards, base_kg = found
    age_factor = _age_factor(profile)

    def threshold(ratio: float) -> int:
        weight_kg = ratio * base_kg / age_factor
        weight = weight_kg * KG_TO_LBS if output_unit == WeightUnit.LBS else weight_kg
        return math.ceil(weight)

    return {
        'intermediate': threshold(gender_standards['intermediate']),
        'advanced': threshold(gender_standards['advanced']),
        'elite': threshold(gender_standards['elite']),
    }


def get_strength_ratio_standards(imbalance_type: ImbalanceType,
                                 gender: Optional[str],
                                 level: StrengthLevel,
                                 ratios: Dict = STRENGTH_RATIOS) -> Optional[Dict[str, float]]:
    """Target ratio and balanced range, or None for an undefined guiding level"""
    if level == StrengthLevel.NA:
        return None
    return ratios.get(imbalance_type, {}).get(gender, {}).get(level)
