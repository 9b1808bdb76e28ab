"""
Tests for strength level classification and ratio standards
"""
from datetime import date

import pytest

from strength_analytics.services.models import (
    ExerciseCategory,
    ImbalanceType,
    PersonalRecord,
    StrengthLevel,
    UserProfile,
    WeightUnit,
)
from strength_analytics.services.strength_standards import (
    CLASSIFIED_EXERCISES,
    get_exercise_category,
    get_strength_level,
    get_strength_ratio_standards,
    get_strength_thresholds,
)


def pr(name, weight, unit=WeightUnit.KG):
    return PersonalRecord(exercise_name=name, weight=weight, weight_unit=unit, date=date(2024, 1, 1))


CUSTOM_STANDARDS = {
    'bench press': {
        'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY,
        'Male': {'intermediate': 1.0, 'advanced': 1.25, 'elite': 1.5},
    },
}


class TestGetStrengthLevel:
    """Bodyweight-normalized tiers"""

    def test_threshold_met_exactly_with_injected_table(self, male_profile):
        """80 kg male, 100 kg bench -> ratio 1.25 meets Advanced"""
        assert get_strength_level(pr("Bench Press", 100), male_profile, CUSTOM_STANDARDS) == StrengthLevel.ADVANCED

    def test_default_table(self, male_profile):
        assert get_strength_level(pr("Bench Press", 100), male_profile) == StrengthLevel.INTERMEDIATE
        assert get_strength_level(pr("Bench Press", 60), male_profile) == StrengthLevel.BEGINNER
        assert get_strength_level(pr("Bench Press", 160), male_profile) == StrengthLevel.ELITE

    def test_lbs_record(self, male_profile):
        assert get_strength_level(pr("Bench Press", 265, WeightUnit.LBS), male_profile) == StrengthLevel.ADVANCED

    def test_name_variants_resolve(self, male_profile):
        assert get_strength_level(pr("EGYM Squats", 100), male_profile) == StrengthLevel.INTERMEDIATE

    def test_unknown_exercise(self, male_profile):
        assert get_strength_level(pr("Cable Fly", 50), male_profile) == StrengthLevel.NA

    @pytest.mark.parametrize("profile", [
        None,
        UserProfile(weight_value=80, weight_unit=WeightUnit.KG),
        UserProfile(gender="Other", weight_value=80, weight_unit=WeightUnit.KG),
        UserProfile(gender="Male"),
        UserProfile(gender="Male", weight_value=0, weight_unit=WeightUnit.KG),
    ])
    def test_incomplete_profile(self, profile):
        assert get_strength_level(pr("Bench Press", 100), profile) == StrengthLevel.NA

    def test_skeletal_muscle_mass_basis(self, female_profile):
        # 60 kg / 25 kg smm = 2.4 -> Intermediate (2.2..2.8)
        assert get_strength_level(pr("Glutes", 60), female_profile) == StrengthLevel.INTERMEDIATE

    def test_smm_basis_without_smm(self, male_profile):
        assert get_strength_level(pr("Glutes", 200), male_profile) == StrengthLevel.NA

    def test_age_adjustment_over_forty(self):
        profile = UserProfile(gender="Male", age=50, weight_value=80, weight_unit=WeightUnit.KG)
        # 110 / 80 = 1.375, x 1.10 = 1.5125 -> Advanced
        assert get_strength_level(pr("Bench Press", 110), profile) == StrengthLevel.ADVANCED

    def test_no_age_adjustment_at_forty(self):
        profile = UserProfile(gender="Male", age=40, weight_value=80, weight_unit=WeightUnit.KG)
        assert get_strength_level(pr("Bench Press", 110), profile) == StrengthLevel.INTERMEDIATE


class TestStrengthThresholds:

    def test_kg_thresholds(self, male_profile):
        assert get_strength_thresholds("Bench Press", male_profile) == {
            'intermediate': 80, 'advanced': 120, 'elite': 160
        }

    def test_lbs_thresholds_round_up(self, male_profile):
        assert get_strength_thresholds("Bench Press", male_profile, WeightUnit.LBS) == {
            'intermediate': 177, 'advanced': 265, 'elite': 353
        }

    def test_unknown_exercise(self, male_profile):
        assert get_strength_thresholds("Cable Fly", male_profile) is None


class TestRatioStandards:

    def test_lookup(self):
        standards = get_strength_ratio_standards(ImbalanceType.HORIZONTAL_PUSH_PULL, "Male", StrengthLevel.INTERMEDIATE)
        assert standards == {'target': 0.70, 'lower': 0.65, 'upper': 0.75}

    def test_undefined_level(self):
        assert get_strength_ratio_standards(ImbalanceType.HAMSTRING_QUAD, "Male", StrengthLevel.NA) is None

    def test_unknown_gender(self):
        assert get_strength_ratio_standards(ImbalanceType.HAMSTRING_QUAD, None, StrengthLevel.BEGINNER) is None


class TestExerciseCategory:

    def test_category_lookup(self):
        assert get_exercise_category("Leg Press") == ExerciseCategory.LOWER_BODY
        assert get_exercise_category("Cable Fly") is None

    def test_classified_exercises_sorted(self):
        assert CLASSIFIED_EXERCISES == sorted(CLASSIFIED_EXERCISES)
        assert "bench press" in CLASSIFIED_EXERCISES
