"""
Personal Records Service
Selects current PRs and prepares record lists for display
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from .exercise_names import normalize_exercise_name, resolve_canonical_name, resolve_exercise_keys
from .models import (
    CATEGORY_ORDER,
    ExerciseCategory,
    ExerciseDocument,
    PersonalRecord,
    UserProfile,
    to_kg,
)
from .strength_standards import get_strength_level


def find_best_pr(records: Sequence[PersonalRecord],
                 exercise_names: Iterable[str],
                 exercise_library: Sequence[ExerciseDocument] = ()) -> Optional[PersonalRecord]:
    """
    Heaviest record (compared in kg) among records for any of `exercise_names`.

    Ties keep the first record encountered. Returns None when no record
    matches.
    """
    keys = resolve_exercise_keys(exercise_names, exercise_library)

    best = None
    best_kg = None
    for record in records:
        if resolve_canonical_name(record.exercise_name, exercise_library) not in keys:
            continue
        weight_kg = to_kg(record.weight, record.weight_unit)
        if best is None or weight_kg > best_kg:
            best, best_kg = record, weight_kg

    return best


def get_best_records(records: Sequence[PersonalRecord],
                     exercise_library: Sequence[ExerciseDocument] = ()) -> List[PersonalRecord]:
    """Current PR per canonical exercise, most recent first"""
    best_by_exercise = {}
    for record in records:
        key = resolve_canonical_name(record.exercise_name, exercise_library)
        current = best_by_exercise.get(key)
        if current is None or to_kg(record.weight, record.weight_unit) > to_kg(current.weight, current.weight_unit):
            best_by_exercise[key] = record

    return sorted(best_by_exercise.values(), key=lambda r: r.date, reverse=True)


def group_records_by_category(records: Iterable[PersonalRecord]) -> Dict[ExerciseCategory, List[PersonalRecord]]:
    """Group records by category in display order; uncategorized records go to Other"""
    grouped = {}
    for record in records:
        category = ExerciseCategory(record.category) if record.category else ExerciseCategory.OTHER
        grouped.setdefault(category, []).append(record)

    return {category: grouped[category] for category in CATEGORY_ORDER if category in grouped}


def deduplicate_parsed_records(existing_records: Iterable[PersonalRecord],
                               parsed_records: Iterable[PersonalRecord]) -> List[PersonalRecord]:
    """Drop parsed records already stored (same exercise and date) or repeated within the batch"""
    seen = {
        (normalize_exercise_name(record.exercise_name), record.date)
        for record in existing_records
    }

    new_records = []
    for record in parsed_records:
        key = (normalize_exercise_name(record.exercise_name), record.date)
        if key in seen:
            continue
        seen.add(key)
        new_records.append(record)

    return new_records


def with_strength_levels(records: Iterable[PersonalRecord],
                         profile: Optional[UserProfile]) -> List[PersonalRecord]:
    return [replace(record, strength_level=get_strength_level(record, profile)) for record in records]
