"""
Tests for paired muscle-group imbalance findings
"""
from datetime import date

import pytest

from strength_analytics.services.imbalance_analyzer import StrengthImbalanceAnalyzer
from strength_analytics.services.models import (
    Exercise,
    ExerciseCategory,
    ExerciseDocument,
    ImbalanceFocus,
    ImbalanceType,
    NoDataFinding,
    StrengthFinding,
    StrengthLevel,
    UserProfile,
    WeightUnit,
    WorkoutLog,
)

AS_OF = date(2024, 3, 1)


def lift(name, weight, reps=3, sets=3, unit=WeightUnit.KG):
    return Exercise(name=name, category=ExerciseCategory.UPPER_BODY, sets=sets, reps=reps,
                    weight=weight, weight_unit=unit)


def push_pull_log(press_weight, row_weight, day=date(2024, 2, 20)):
    """Chest press and seated row with e1RM = weight x 1.1"""
    return WorkoutLog(date=day, exercises=(lift("Chest Press", press_weight), lift("Seated Row", row_weight)))


def standards(press_levels, row_levels):
    return {
        'chest press': {'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY, 'Male': press_levels},
        'seated row': {'basis': 'bw', 'category': ExerciseCategory.UPPER_BODY, 'Male': row_levels},
    }


# Reachable only at very light loads / never reachable for an 80 kg lifter
EASY = {'intermediate': 0.5, 'advanced': 0.6, 'elite': 5.0}
HARD = {'intermediate': 5.0, 'advanced': 6.0, 'elite': 7.0}


def horizontal(findings):
    return next(f for f in findings if f.imbalance_type == ImbalanceType.HORIZONTAL_PUSH_PULL)


class TestAnalyze:
    """One finding per comparison"""

    def test_one_entry_per_comparison_in_order(self, male_profile):
        findings = StrengthImbalanceAnalyzer().analyze([push_pull_log(60, 100)], male_profile, AS_OF)
        assert [f.imbalance_type for f in findings] == StrengthImbalanceAnalyzer.IMBALANCE_TYPES

    def test_missing_side_gives_no_data(self, male_profile):
        findings = StrengthImbalanceAnalyzer().analyze([push_pull_log(60, 100)], male_profile, AS_OF)
        adductor = findings[-1]
        assert isinstance(adductor, NoDataFinding)
        assert adductor.imbalance_type == ImbalanceType.ADDUCTOR_ABDUCTOR
        assert adductor.has_data is False

    def test_only_one_side_logged(self, male_profile):
        logs = [WorkoutLog(date=date(2024, 2, 20), exercises=(lift("Leg Curl", 50),))]
        findings = StrengthImbalanceAnalyzer().analyze(logs, male_profile, AS_OF)
        assert all(isinstance(f, NoDataFinding) for f in findings)

    def test_data_outside_window_gives_no_data(self, male_profile):
        findings = StrengthImbalanceAnalyzer().analyze([push_pull_log(60, 100, day=date(2023, 12, 1))],
                                                       male_profile, AS_OF)
        assert isinstance(horizontal(findings), NoDataFinding)

    @pytest.mark.parametrize("profile", [None, UserProfile(weight_value=80, weight_unit=WeightUnit.KG)])
    def test_no_gender_gives_empty_list(self, profile):
        assert StrengthImbalanceAnalyzer().analyze([push_pull_log(60, 100)], profile, AS_OF) == []


class TestImbalanceFocus:
    """Level Imbalance > Ratio Imbalance > Balanced"""

    def test_level_imbalance_wins_over_in_range_ratio(self, male_profile):
        """Advanced press vs Beginner row with ratio 0.60 (inside the Beginner range)"""
        analyzer = StrengthImbalanceAnalyzer(standards=standards(EASY, HARD))
        finding = horizontal(analyzer.analyze([push_pull_log(60, 100)], male_profile, AS_OF))

        assert isinstance(finding, StrengthFinding)
        assert finding.lift1_level == StrengthLevel.ADVANCED
        assert finding.lift2_level == StrengthLevel.BEGINNER
        assert finding.imbalance_focus == ImbalanceFocus.LEVEL_IMBALANCE
        assert finding.user_ratio == "0.60:1"
        assert finding.target_ratio == "0.60:1"
        assert finding.balanced_range == "0.55-0.65:1"

    def test_ratio_imbalance(self, male_profile):
        analyzer = StrengthImbalanceAnalyzer(standards=standards(HARD, HARD))
        finding = horizontal(analyzer.analyze([push_pull_log(100, 100)], male_profile, AS_OF))
        assert finding.imbalance_focus == ImbalanceFocus.RATIO_IMBALANCE
        assert finding.ratio == pytest.approx(1.0)

    def test_balanced(self, male_profile):
        analyzer = StrengthImbalanceAnalyzer(standards=standards(HARD, HARD))
        finding = horizontal(analyzer.analyze([push_pull_log(60, 100)], male_profile, AS_OF))
        assert finding.imbalance_focus == ImbalanceFocus.BALANCED

    def test_undefined_level_has_no_target(self, male_profile):
        analyzer = StrengthImbalanceAnalyzer(standards={})
        finding = horizontal(analyzer.analyze([push_pull_log(100, 100)], male_profile, AS_OF))
        assert finding.lift1_level == StrengthLevel.NA
        assert finding.target_ratio == "N/A"
        assert finding.balanced_range == "N/A"
        assert finding.imbalance_focus == ImbalanceFocus.BALANCED


class TestFindingDetails:

    def test_display_fields(self, male_profile):
        logs = [
            WorkoutLog(date=date(2024, 2, 10), exercises=(lift("EGYM Chest Press", 60),)),
            push_pull_log(60, 100),
        ]
        finding = horizontal(StrengthImbalanceAnalyzer().analyze(logs, male_profile, AS_OF))

        assert finding.lift1_name == "Chest Press"
        assert finding.lift2_name == "Seated Row"
        assert finding.lift1_weight == 66.0
        assert finding.lift2_weight == 110.0
        assert finding.lift1_session_count == 2
        assert finding.lift2_session_count == 1
        assert finding.lift1_unit == WeightUnit.KG
        assert finding.has_data is True

    def test_ratio_computed_in_kg(self, male_profile):
        logs = [WorkoutLog(date=date(2024, 2, 20), exercises=(
            lift("Leg Curl", 50),
            lift("Leg Extension", 220, unit=WeightUnit.LBS),
        ))]
        findings = StrengthImbalanceAnalyzer().analyze(logs, male_profile, AS_OF)
        hamstring = next(f for f in findings if f.imbalance_type == ImbalanceType.HAMSTRING_QUAD)
        assert hamstring.ratio == pytest.approx(round(50 / (220 * 0.453592), 2))
        assert hamstring.lift2_unit == WeightUnit.LBS

    def test_library_aliases_used(self, male_profile):
        library = [ExerciseDocument(name="Lat Pulldown", normalized_name="lat pulldown", legacy_names=("Pulldown",))]
        logs = [WorkoutLog(date=date(2024, 2, 20), exercises=(
            lift("Shoulder Press", 40),
            lift("Pulldown", 60),
        ))]
        findings = StrengthImbalanceAnalyzer(exercise_library=library).analyze(logs, male_profile, AS_OF)
        vertical = next(f for f in findings if f.imbalance_type == ImbalanceType.VERTICAL_PUSH_PULL)
        assert isinstance(vertical, StrengthFinding)
        assert vertical.lift2_name == "Lat Pulldown"


class TestLevelRules:

    def test_guiding_level_is_weaker(self):
        assert StrengthImbalanceAnalyzer.guiding_level(StrengthLevel.ELITE, StrengthLevel.INTERMEDIATE) == \
            StrengthLevel.INTERMEDIATE

    def test_guiding_level_undefined_with_na(self):
        assert StrengthImbalanceAnalyzer.guiding_level(StrengthLevel.NA, StrengthLevel.ELITE) == StrengthLevel.NA

    def test_na_side_is_not_a_level_imbalance(self):
        assert StrengthImbalanceAnalyzer.imbalance_focus(StrengthLevel.NA, StrengthLevel.ELITE, True) == \
            ImbalanceFocus.RATIO_IMBALANCE
