"""
Exercise Name Resolution
Maps free-text exercise names (typed or parsed) to one canonical key

Resolution order:
1. Normalize the raw string (case, prefixes, annotations, whitespace)
2. Match against the exercise library's canonical names and legacy aliases
3. Fall back to the normalized string itself
"""

import re
from typing import Iterable, Optional, Sequence, Set

from .models import ExerciseDocument


_VENDOR_PREFIX = re.compile(r'^(egym|machine)\s+')
_PARENTHETICAL = re.compile(r'\([^)]*\)')
_WHITESPACE = re.compile(r'\s+')

# Spelling variants -> names the strength standards table is keyed by
LIFT_NAME_ALIASES = {
    'lat pull': 'lat pulldown',
    'biceps curl': 'bicep curl',
    'reverse fly': 'reverse flys',
    'tricep extension': 'triceps',
    'tricep pushdown': 'triceps',
    'squats': 'squat',

    # Plurals
    'abdominal crunches': 'abdominal crunch',
    'abductors': 'abductor',
    'adductors': 'adductor',
    'back extensions': 'back extension',
    'bench presses': 'bench press',
    'bicep curls': 'bicep curl',
    'butterflies': 'butterfly',
    'chest presses': 'chest press',
    'hip thrusts': 'hip thrust',
    'lat pulldowns': 'lat pulldown',
    'leg curls': 'leg curl',
    'leg extensions': 'leg extension',
    'leg presses': 'leg press',
    'overhead presses': 'overhead press',
    'rotary torsos': 'rotary torso',
    'seated rows': 'seated row',
    'shoulder presses': 'shoulder press',
    'cable glute kickbacks': 'cable glute kickback',
    'bulgarian split squats': 'bulgarian split squat',
}


def normalize_exercise_name(name: Optional[str]) -> str:
    """
    Normalize a raw exercise name into a lookup key.

    "  EGYM Chest Press (Seated) " -> "chest press"
    """
    if not name:
        return ''
    value = name.strip().lower()
    value = _VENDOR_PREFIX.sub('', value)
    value = _PARENTHETICAL.sub(' ', value)
    value = value.replace('(', ' ').replace(')', ' ')
    return _WHITESPACE.sub(' ', value).strip()


def find_canonical_exercise(name: str,
                            exercise_library: Sequence[ExerciseDocument]) -> Optional[ExerciseDocument]:
    """Find the library entry whose canonical name or any alias matches `name`"""
    normalized = normalize_exercise_name(name)
    if not normalized:
        return None

    for exercise in exercise_library:
        if normalize_exercise_name(exercise.normalized_name) == normalized:
            return exercise
        if any(normalize_exercise_name(legacy) == normalized for legacy in exercise.legacy_names):
            return exercise

    return None


def resolve_canonical_name(name: str, exercise_library: Sequence[ExerciseDocument] = ()) -> str:
    """
    Resolve any exercise name to its canonical key.

    Exercises missing from the library still get a stable key (the
    normalized input), they just have no library metadata.
    """
    exercise = find_canonical_exercise(name, exercise_library)
    if exercise is not None and exercise.normalized_name:
        return exercise.normalized_name
    return normalize_exercise_name(name)


def resolve_exercise_keys(names: Iterable[str],
                          exercise_library: Sequence[ExerciseDocument] = ()) -> Set[str]:
    return {resolve_canonical_name(name, exercise_library) for name in names}


def standard_exercise_key(name: str) -> str:
    """Key used to look an exercise up in the strength standards table"""
    normalized = normalize_exercise_name(name)
    return LIFT_NAME_ALIASES.get(normalized, normalized)


def to_title_case(value: str) -> str:
    if not value:
        return ''
    return ' '.join(word[:1].upper() + word[1:].lower() for word in value.split(' '))
