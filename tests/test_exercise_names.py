"""
Tests for exercise name normalization and canonical resolution
"""
import pytest

from strength_analytics.services.exercise_names import (
    find_canonical_exercise,
    normalize_exercise_name,
    resolve_canonical_name,
    resolve_exercise_keys,
    standard_exercise_key,
    to_title_case,
)
from strength_analytics.services.models import ExerciseDocument


LIBRARY = [
    ExerciseDocument(name="Lat Pulldown", normalized_name="lat pulldown", legacy_names=("Lat Pull", "Pulldown")),
    ExerciseDocument(name="Seated Row", normalized_name="seated row", legacy_names=("Cable Row",)),
]


class TestNormalizeExerciseName:
    """Raw names reduce to a single lookup key"""

    def test_vendor_prefix_and_annotation_removed(self):
        assert normalize_exercise_name("  EGYM Chest Press (Seated) ") == "chest press"

    def test_machine_prefix_with_extra_spaces(self):
        assert normalize_exercise_name("Machine   Leg Curl") == "leg curl"

    def test_prefix_only_stripped_at_start(self):
        assert normalize_exercise_name("Smith machine squat") == "smith machine squat"

    def test_whitespace_collapsed(self):
        assert normalize_exercise_name("Bench\t  Press") == "bench press"

    @pytest.mark.parametrize("name", ["", None, "   "])
    def test_empty_input(self, name):
        assert normalize_exercise_name(name) == ""

    def test_equivalent_spellings_share_a_key(self):
        names = ["Chest Press", "chest press (machine)", "EGYM chest press", "  CHEST   PRESS "]
        assert len({normalize_exercise_name(name) for name in names}) == 1


class TestCanonicalResolution:
    """Library lookups by canonical name or legacy alias"""

    def test_alias_resolves_to_canonical_name(self):
        assert resolve_canonical_name("PULLDOWN", LIBRARY) == "lat pulldown"
        assert resolve_canonical_name("egym lat pull", LIBRARY) == "lat pulldown"

    def test_canonical_name_matches(self):
        exercise = find_canonical_exercise("Seated Row (Plate Loaded)", LIBRARY)
        assert exercise is not None
        assert exercise.name == "Seated Row"

    def test_unknown_exercise_falls_back_to_normalized_name(self):
        assert find_canonical_exercise("Cable Fly", LIBRARY) is None
        assert resolve_canonical_name("Cable Fly", LIBRARY) == "cable fly"

    def test_empty_library(self):
        assert resolve_canonical_name("Lat Pull") == "lat pull"

    def test_key_set_merges_aliases(self):
        keys = resolve_exercise_keys(["Cable Row", "seated row", "Lat Pull"], LIBRARY)
        assert keys == {"seated row", "lat pulldown"}


class TestStandardKeys:
    """Spelling variants used for strength standards lookups"""

    def test_plural_maps_to_singular(self):
        assert standard_exercise_key("Squats") == "squat"
        assert standard_exercise_key("EGYM Leg Extensions") == "leg extension"

    def test_unaliased_name_is_normalized(self):
        assert standard_exercise_key("Bench Press (Barbell)") == "bench press"


class TestTitleCase:

    def test_title_case(self):
        assert to_title_case("lat pulldown") == "Lat Pulldown"
        assert to_title_case("") == ""
