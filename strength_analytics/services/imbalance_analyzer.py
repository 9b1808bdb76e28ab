"""
Strength Imbalance Analysis
Compares functionally paired muscle groups using six-week average e1RM

CONCEPTS DEMONSTRATED:
1. Table-driven Rules - comparisons and target ratios live in lookup tables
2. Rule Precedence - a strength-level gap outranks an off-target ratio
3. Explicit Absence - missing data is its own result, never a zero-valued finding
"""

import logging
from operator import truediv
from typing import Dict, List, Optional, Sequence, Union

from .exercise_names import resolve_exercise_keys, to_title_case
from .lift_progression import DEFAULT_WINDOW_WEEKS, find_six_week_avg_e1rm
from .models import (
    E1RMAverage,
    ExerciseDocument,
    ImbalanceComparison,
    ImbalanceFocus,
    ImbalanceType,
    NoDataFinding,
    PersonalRecord,
    StrengthFinding,
    StrengthLevel,
    UserProfile,
    WorkoutLog,
    to_kg,
)
from .strength_standards import (
    STRENGTH_RATIOS,
    STRENGTH_STANDARDS,
    get_strength_level,
    get_strength_ratio_standards,
)

logger = logging.getLogger(__name__)

Finding = Union[StrengthFinding, NoDataFinding]


class StrengthImbalanceAnalyzer:
    """
    Produces one finding per paired comparison:
    - Horizontal push vs pull (chest press : seated row)
    - Vertical push vs pull (shoulder press : lat pulldown)
    - Hamstring vs quad (leg curl : leg extension)
    - Adductor vs abductor
    """

    IMBALANCE_TYPES = [
        ImbalanceType.HORIZONTAL_PUSH_PULL,
        ImbalanceType.VERTICAL_PUSH_PULL,
        ImbalanceType.HAMSTRING_QUAD,
        ImbalanceType.ADDUCTOR_ABDUCTOR,
    ]

    IMBALANCE_CONFIG = {
        ImbalanceType.HORIZONTAL_PUSH_PULL: ImbalanceComparison(('chest press',), ('seated row',), truediv),
        ImbalanceType.VERTICAL_PUSH_PULL: ImbalanceComparison(('shoulder press',), ('lat pulldown',), truediv),
        ImbalanceType.HAMSTRING_QUAD: ImbalanceComparison(('leg curl',), ('leg extension',), truediv),
        ImbalanceType.ADDUCTOR_ABDUCTOR: ImbalanceComparison(('adductor',), ('abductor',), truediv),
    }

    def __init__(self,
                 exercise_library: Sequence[ExerciseDocument] = (),
                 standards: Dict = STRENGTH_STANDARDS,
                 ratios: Dict = STRENGTH_RATIOS,
                 weeks: int = DEFAULT_WINDOW_WEEKS):
        self.exercise_library = exercise_library
        self.standards = standards
        self.ratios = ratios
        self.weeks = weeks

    def analyze(self,
                workout_logs: Sequence[WorkoutLog],
                profile: Optional[UserProfile],
                as_of) -> List[Finding]:
        """
        Run every comparison.

        Args:
            workout_logs: The user's workout history
            profile: The user's profile; without a gender nothing can be
                     classified and an empty list is returned
            as_of: Reference date closing the averaging window

        Returns:
            One StrengthFinding or NoDataFinding per comparison, in
            IMBALANCE_TYPES order
        """
        if profile is None or not profile.gender:
            logger.info("Skipping imbalance analysis: profile has no gender")
            return []

        return [
            self.compare(imbalance_type, workout_logs, profile, as_of)
            for imbalance_type in self.IMBALANCE_TYPES
        ]

    def compare(self,
                imbalance_type: ImbalanceType,
                workout_logs: Sequence[WorkoutLog],
                profile: UserProfile,
                as_of) -> Finding:
        config = self.IMBALANCE_CONFIG[imbalance_type]

        lift1 = self._average(config.lift1_options, workout_logs, as_of)
        lift2 = self._average(config.lift2_options, workout_logs, as_of)
        if lift1 is None or lift2 is None:
            return NoDataFinding(imbalance_type=imbalance_type)

        lift1_kg = to_kg(lift1.weight, lift1.weight_unit)
        lift2_kg = to_kg(lift2.weight, lift2.weight_unit)
        if lift2_kg == 0:
            return NoDataFinding(imbalance_type=imbalance_type)

        ratio = config.ratio(lift1_kg, lift2_kg)

        lift1_level = self._level(lift1, profile)
        lift2_level = self._level(lift2, profile)
        guiding_level = self.guiding_level(lift1_level, lift2_level)

        ratio_standards = get_strength_ratio_standards(imbalance_type, profile.gender, guiding_level, self.ratios)
        ratio_unbalanced = False
        if ratio_standards:
            ratio_unbalanced = ratio < ratio_standards['lower'] or ratio > ratio_standards['upper']

        focus = self.imbalance_focus(lift1_level, lift2_level, ratio_unbalanced)

        return StrengthFinding(
            imbalance_type=imbalance_type,
            lift1_name=to_title_case(lift1.exercise_name),
            lift1_weight=round(lift1.weight, 1),
            lift1_unit=lift1.weight_unit,
            lift1_session_count=lift1.session_count,
            lift1_level=lift1_level,
            lift2_name=to_title_case(lift2.exercise_name),
            lift2_weight=round(lift2.weight, 1),
            lift2_unit=lift2.weight_unit,
            lift2_session_count=lift2.session_count,
            lift2_level=lift2_level,
            ratio=round(ratio, 2),
            user_ratio=f"{ratio:.2f}:1",
            target_ratio=f"{ratio_standards['target']:.2f}:1" if ratio_standards else 'N/A',
            balanced_range=(f"{ratio_standards['lower']:.2f}-{ratio_standards['upper']:.2f}:1"
                            if ratio_standards else 'N/A'),
            imbalance_focus=focus,
        )

    @staticmethod
    def guiding_level(level1: StrengthLevel, level2: StrengthLevel) -> StrengthLevel:
        """The weaker of the two levels; N/A if either side is unclassified"""
        if level1 == StrengthLevel.NA or level2 == StrengthLevel.NA:
            return StrengthLevel.NA
        return StrengthLevel.from_rank(min(level1.rank, level2.rank))

    @staticmethod
    def imbalance_focus(level1: StrengthLevel, level2: StrengthLevel, ratio_unbalanced: bool) -> ImbalanceFocus:
        """Known but different levels win over an out-of-range ratio"""
        if level1 != StrengthLevel.NA and level2 != StrengthLevel.NA and level1 != level2:
            return ImbalanceFocus.LEVEL_IMBALANCE
        if ratio_unbalanced:
            return ImbalanceFocus.RATIO_IMBALANCE
        return ImbalanceFocus.BALANCED

    def _average(self, options, workout_logs, as_of) -> Optional[E1RMAverage]:
        keys = resolve_exercise_keys(options, self.exercise_library)
        return find_six_week_avg_e1rm(workout_logs, keys, self.exercise_library, as_of, self.weeks)

    def _level(self, lift: E1RMAverage, profile: UserProfile) -> StrengthLevel:
        synthetic = PersonalRecord(
            exercise_name=lift.exercise_name,
            weight=lift.weight,
            weight_unit=lift.weight_unit,
            date=None,
        )
        return get_strength_level(synthetic, profile, self.standards)
