"""
Domain Models
Plain dataclasses and enums shared by the analytics services

The services treat every instance as read-only input and build new
instances for derived results.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Optional, Tuple


LBS_TO_KG = 0.453592
KG_TO_LBS = 1 / LBS_TO_KG


class WeightUnit(str, Enum):
    KG = "kg"
    LBS = "lbs"


class ExerciseCategory(str, Enum):
    UPPER_BODY = "Upper Body"
    LOWER_BODY = "Lower Body"
    FULL_BODY = "Full Body"
    CARDIO = "Cardio"
    CORE = "Core"
    OTHER = "Other"


# Display order for grouped personal records
CATEGORY_ORDER = [
    ExerciseCategory.UPPER_BODY,
    ExerciseCategory.LOWER_BODY,
    ExerciseCategory.CORE,
    ExerciseCategory.FULL_BODY,
    ExerciseCategory.CARDIO,
    ExerciseCategory.OTHER,
]


class StrengthLevel(str, Enum):
    """Strength tiers, ordered from weakest to strongest"""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    ELITE = "Elite"
    NA = "N/A"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]

    @classmethod
    def from_rank(cls, rank: int) -> "StrengthLevel":
        for level, level_rank in _LEVEL_RANKS.items():
            if level_rank == rank:
                return level
        return cls.NA


_LEVEL_RANKS = {
    StrengthLevel.BEGINNER: 0,
    StrengthLevel.INTERMEDIATE: 1,
    StrengthLevel.ADVANCED: 2,
    StrengthLevel.ELITE: 3,
    StrengthLevel.NA: -1,
}


class ImbalanceType(str, Enum):
    HORIZONTAL_PUSH_PULL = "Horizontal Push vs. Pull"
    VERTICAL_PUSH_PULL = "Vertical Push vs. Pull"
    HAMSTRING_QUAD = "Hamstring vs. Quad"
    ADDUCTOR_ABDUCTOR = "Adductor vs. Abductor"


class ImbalanceFocus(str, Enum):
    BALANCED = "Balanced"
    LEVEL_IMBALANCE = "Level Imbalance"
    RATIO_IMBALANCE = "Ratio Imbalance"


def to_kg(weight: float, unit) -> float:
    """Convert a weight in the given unit to kilograms"""
    return weight * LBS_TO_KG if unit == WeightUnit.LBS else weight


def convert_weight(weight: float, from_unit, to_unit) -> float:
    """Convert a weight between kg and lbs (no-op when the units match)"""
    if from_unit == to_unit:
        return weight
    if to_unit == WeightUnit.LBS:
        return weight * KG_TO_LBS
    return weight * LBS_TO_KG


@dataclass(frozen=True)
class Exercise:
    """One exercise entry inside a workout log"""
    name: str
    category: ExerciseCategory = ExerciseCategory.OTHER
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    weight_unit: Optional[WeightUnit] = None
    distance: Optional[float] = None
    distance_unit: Optional[str] = None  # 'mi', 'km', 'ft', 'm'
    duration: Optional[float] = None
    duration_unit: Optional[str] = None  # 'sec', 'min', 'hr'
    calories: Optional[float] = None


@dataclass(frozen=True)
class WorkoutLog:
    """All exercises logged by one user on one calendar day"""
    date: date
    exercises: Tuple[Exercise, ...] = ()
    id: Optional[str] = None


@dataclass(frozen=True)
class PersonalRecord:
    exercise_name: str
    weight: float
    weight_unit: WeightUnit
    date: date
    id: Optional[str] = None
    user_id: Optional[str] = None
    category: Optional[ExerciseCategory] = None
    strength_level: Optional[StrengthLevel] = None


@dataclass(frozen=True)
class FitnessGoal:
    description: str
    is_primary: bool = False
    achieved: bool = False
    date_achieved: Optional[date] = None
    target_date: Optional[date] = None


@dataclass(frozen=True)
class UserProfile:
    """Biometrics used as the normalization basis for strength standards"""
    gender: Optional[str] = None
    age: Optional[int] = None
    weight_value: Optional[float] = None
    weight_unit: Optional[WeightUnit] = None
    skeletal_muscle_mass_value: Optional[float] = None
    skeletal_muscle_mass_unit: Optional[WeightUnit] = None
    height_value: Optional[float] = None
    height_unit: Optional[str] = None  # 'cm' or 'ft/in'
    fitness_goals: Tuple[FitnessGoal, ...] = ()
    workouts_per_week: Optional[int] = None

    @property
    def bodyweight_kg(self) -> Optional[float]:
        if not self.weight_value or not self.weight_unit:
            return None
        return to_kg(self.weight_value, self.weight_unit)

    @property
    def skeletal_muscle_mass_kg(self) -> Optional[float]:
        if not self.skeletal_muscle_mass_value or not self.skeletal_muscle_mass_unit:
            return None
        return to_kg(self.skeletal_muscle_mass_value, self.skeletal_muscle_mass_unit)


@dataclass(frozen=True)
class ExerciseDocument:
    """An exercise library entry: canonical name plus legacy aliases"""
    name: str
    normalized_name: str
    legacy_names: Tuple[str, ...] = ()
    id: Optional[str] = None
    category: Optional[ExerciseCategory] = None
    equipment: Optional[str] = None


@dataclass(frozen=True)
class E1RMAverage:
    """Six-week average estimated 1RM for one exercise group"""
    exercise_name: str
    weight: float
    weight_unit: WeightUnit
    session_count: int


@dataclass(frozen=True)
class ImbalanceComparison:
    lift1_options: Tuple[str, ...]
    lift2_options: Tuple[str, ...]
    ratio: Callable[[float, float], float]


@dataclass(frozen=True)
class StrengthFinding:
    imbalance_type: ImbalanceType
    lift1_name: str
    lift1_weight: float
    lift1_unit: WeightUnit
    lift1_session_count: int
    lift1_level: StrengthLevel
    lift2_name: str
    lift2_weight: float
    lift2_unit: WeightUnit
    lift2_session_count: int
    lift2_level: StrengthLevel
    ratio: float
    user_ratio: str
    target_ratio: str
    balanced_range: str
    imbalance_focus: ImbalanceFocus
    has_data: bool = True


@dataclass(frozen=True)
class NoDataFinding:
    """Marker for a comparison with no six-week data on one side"""
    imbalance_type: ImbalanceType
    has_data: bool = False


@dataclass
class WorkoutDaySummary:
    date: date
    total_exercises: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_duration_minutes: float = 0.0
    total_calories_burned: float = 0.0
    categories: dict = field(default_factory=dict)


@dataclass(frozen=True)
class LiftTrendSummary:
    current_level: Optional[StrengthLevel]
    e1rm_trend: Optional[float]
    volume_trend: Optional[float]
    avg_e1rm: Optional[float]
    avg_e1rm_unit: Optional[WeightUnit] = None
