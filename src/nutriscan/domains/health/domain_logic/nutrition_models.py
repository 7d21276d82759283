"""Nutrition entry, rule and profile types."""

from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class MicronutrientKind(str, Enum):
    VITAMIN = "Vitamin"
    MINERAL = "Mineral"


class MicronutrientLevel(str, Enum):
    DEFICIENT = "Deficient"
    LOW = "Low"
    OPTIMAL = "Optimal"
    HIGH = "High"


class GoalAlignmentStatus(str, Enum):
    """How well the current intake serves a health goal, best first."""

    NEUTRAL = "Neutral"
    PARTIALLY_ALIGNED = "Partially Aligned"
    MISALIGNED = "Misaligned"

    @property
    def rank(self) -> int:
        return list(GoalAlignmentStatus).index(self)


# Energy per gram
PROTEIN_KCAL_PER_G = 4
CARB_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

# (upper bound on current/recommended ratio, level); above the last -> HIGH
MICRONUTRIENT_LEVEL_BANDS: tuple[tuple[float, MicronutrientLevel], ...] = (
    (0.5, MicronutrientLevel.DEFICIENT),
    (0.8, MicronutrientLevel.LOW),
    (1.5, MicronutrientLevel.OPTIMAL),
)

MICRONUTRIENT_RATIO_PREFIX = "micronutrient_ratio:"

# Fewer entries than this yields no intake trend prediction
MIN_TREND_ENTRIES = 10

PROFILE_METRICS = frozenset({
    "avg_calories",
    "avg_protein",
    "avg_carbohydrates",
    "avg_fat",
    "avg_sugar",
    "avg_fiber",
    "protein_percentage",
    "carb_percentage",
    "fat_percentage",
})

COMPARISONS: Mapping[str, Callable[[float, float], bool]] = MappingProxyType({
    "gt": operator.gt,
    "ge": operator.ge,
    "lt": operator.lt,
    "le": operator.le,
})


@dataclass(frozen=True)
class NutritionEntry:
    """One logged food entry. Missing nutrients are recorded as 0."""

    calories: float = 0.0
    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0
    sugar: float = 0.0
    fiber: float = 0.0
    micronutrients: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MicronutrientReference:
    name: str
    kind: MicronutrientKind
    recommended_value: float

    def __post_init__(self) -> None:
        if self.recommended_value <= 0:
            raise ValueError(
                f"Recommended value for {self.name!r} must be positive, "
                f"got {self.recommended_value}"
            )


@dataclass(frozen=True)
class MetricCondition:
    """``metric <comparison> threshold`` over a nutrition profile."""

    metric: str
    comparison: str
    threshold: float

    def __post_init__(self) -> None:
        if self.comparison not in COMPARISONS:
            raise ValueError(
                f"Unknown comparison {self.comparison!r}; expected one of {sorted(COMPARISONS)}"
            )
        is_ratio = (
            self.metric.startswith(MICRONUTRIENT_RATIO_PREFIX)
            and len(self.metric) > len(MICRONUTRIENT_RATIO_PREFIX)
        )
        if self.metric not in PROFILE_METRICS and not is_ratio:
            raise ValueError(f"Unknown nutrition metric {self.metric!r}")

    def holds(self, value: float) -> bool:
        return COMPARISONS[self.comparison](value, self.threshold)


@dataclass(frozen=True)
class NutritionRiskRule:
    condition: MetricCondition
    risk_type: str
    severity: str
    details: str = ""
    recommended_actions: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendationRule:
    condition: MetricCondition
    category: str
    recommendation: str
    rationale: str = ""
    confidence_score: float = 0.0


@dataclass(frozen=True)
class GoalAlignmentRule:
    """Flags a goal as off track when its condition holds."""

    goal_type: str
    condition: MetricCondition
    alignment: GoalAlignmentStatus
    adjustment: str


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NutrientAverages:
    calories: float
    protein: float
    carbohydrates: float
    fat: float
    sugar: float
    fiber: float


@dataclass(frozen=True)
class MacronutrientBalance:
    protein_percentage: int
    carb_percentage: int
    fat_percentage: int


@dataclass(frozen=True)
class MicronutrientStatus:
    name: str
    kind: MicronutrientKind
    level: MicronutrientLevel
    current_value: float
    recommended_value: float


@dataclass(frozen=True)
class NutritionRisk:
    type: str
    severity: str
    details: str
    recommended_actions: tuple[str, ...]


@dataclass(frozen=True)
class NutritionRecommendation:
    category: str
    recommendation: str
    rationale: str
    confidence_score: float


@dataclass(frozen=True)
class GoalAlignment:
    goal_type: str
    alignment: GoalAlignmentStatus
    recommended_adjustments: tuple[str, ...]


@dataclass(frozen=True)
class MacroTrend:
    """Line fitted over entry index 0..n-1; ``next_value`` is its value at n."""

    slope: float
    intercept: float
    next_value: float


@dataclass(frozen=True)
class NutritionTrends:
    calories: MacroTrend
    protein: MacroTrend
    carbohydrates: MacroTrend
    fat: MacroTrend


@dataclass(frozen=True)
class NutritionProfile:
    entry_count: int
    average_intake: NutrientAverages
    macronutrient_balance: MacronutrientBalance
    micronutrient_status: tuple[MicronutrientStatus, ...] = ()
    health_risks: tuple[NutritionRisk, ...] = ()
    recommendations: tuple[NutritionRecommendation, ...] = ()
    goal_alignment: tuple[GoalAlignment, ...] = ()
    predicted_trends: NutritionTrends | None = None

    def metric(self, name: str) -> float | None:
        """Resolve a rule metric; ``None`` when the metric was not measured."""
        if name.startswith(MICRONUTRIENT_RATIO_PREFIX):
            wanted = name[len(MICRONUTRIENT_RATIO_PREFIX):]
            for status in self.micronutrient_status:
                if status.name == wanted:
                    return status.current_value / status.recommended_value
            return None
        if name.startswith("avg_"):
            return getattr(self.average_intake, name[len("avg_"):])
        return getattr(self.macronutrient_balance, name)
