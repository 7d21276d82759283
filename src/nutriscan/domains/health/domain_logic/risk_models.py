"""Health risk value types and domain constants.

Every result type here is a frozen dataclass: the engine creates them fresh
on each call and never mutates them afterwards. Enums subclass ``str`` so
``dataclasses.asdict`` output serializes directly with ``json.dumps``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Union


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class IndicatorKind(str, Enum):
    BLOOD_PRESSURE = "BloodPressure"
    CHOLESTEROL = "Cholesterol"
    BLOOD_SUGAR = "BloodSugar"
    BMI = "BMI"
    WAIST_CIRCUMFERENCE = "WaistCircumference"
    BODY_FAT_PERCENTAGE = "BodyFatPercentage"
    RESTING_HEART_RATE = "RestingHeartRate"
    SLEEP_QUALITY = "SleepQuality"
    STRESS_LEVEL = "StressLevel"
    NUTRIENT_DEFICIENCY = "NutrientDeficiency"


class IndicatorStatus(str, Enum):
    NORMAL = "Normal"
    BORDERLINE = "Borderline"
    ABNORMAL = "Abnormal"


class RiskLevel(str, Enum):
    """Ordered risk bands. Compare with ``rank``, never with ``<`` on values."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _RISK_LEVEL_ORDER.index(self)


_RISK_LEVEL_ORDER = (RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.CRITICAL)


class RiskCategory(str, Enum):
    CARDIOVASCULAR = "Cardiovascular"
    METABOLIC = "Metabolic"
    NUTRITIONAL = "Nutritional"
    LIFESTYLE = "Lifestyle"
    GENETIC = "Genetic"
    MENTAL_HEALTH = "Mental Health"
    CHRONIC_DISEASE = "Chronic Disease"


class TrendDirection(str, Enum):
    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    STABLE = "Stable"


# ---------------------------------------------------------------------------
# Domain constants (read-only, process-wide)
# ---------------------------------------------------------------------------

# Kinds missing from this table contribute zero risk. SleepQuality and
# StressLevel are weighted but have no default range, so they only score
# when the caller supplies one. NutrientDeficiency is deliberately absent.
DEFAULT_RISK_WEIGHTS: MappingProxyType[IndicatorKind, float] = MappingProxyType({
    IndicatorKind.BLOOD_PRESSURE: 0.15,
    IndicatorKind.CHOLESTEROL: 0.15,
    IndicatorKind.BLOOD_SUGAR: 0.20,
    IndicatorKind.BMI: 0.10,
    IndicatorKind.WAIST_CIRCUMFERENCE: 0.10,
    IndicatorKind.BODY_FAT_PERCENTAGE: 0.10,
    IndicatorKind.RESTING_HEART_RATE: 0.10,
    IndicatorKind.SLEEP_QUALITY: 0.05,
    IndicatorKind.STRESS_LEVEL: 0.05,
})

# Only five of the seven categories carry a proportion; Genetic and
# Chronic Disease are declared but never scored.
CATEGORY_PROPORTIONS: tuple[tuple[RiskCategory, float], ...] = (
    (RiskCategory.CARDIOVASCULAR, 0.30),
    (RiskCategory.METABOLIC, 0.25),
    (RiskCategory.NUTRITIONAL, 0.20),
    (RiskCategory.LIFESTYLE, 0.15),
    (RiskCategory.MENTAL_HEALTH, 0.10),
)

# Inclusive lower bounds, highest first.
DEFAULT_RISK_BREAKPOINTS: tuple[tuple[float, RiskLevel], ...] = (
    (75.0, RiskLevel.CRITICAL),
    (50.0, RiskLevel.HIGH),
    (25.0, RiskLevel.MODERATE),
)

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Raw (unweighted) risk values assigned by indicator evaluation
RAW_RISK_ABOVE_RANGE = 80.0
RAW_RISK_BELOW_RANGE = 60.0
RAW_RISK_BP_HYPERTENSIVE = 80.0
RAW_RISK_BP_ELEVATED = 50.0

# Insight probability bands
PROBABILITY_HIGH = 80
PROBABILITY_MODERATE = 50
PROBABILITY_LOW = 25


# ---------------------------------------------------------------------------
# Indicator inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScalarRange:
    min: float
    max: float


@dataclass(frozen=True)
class PairRange:
    """Reference range for paired readings such as [systolic, diastolic]."""

    min: tuple[float, float]
    max: tuple[float, float]


ReferenceRange = Union[ScalarRange, PairRange]


@dataclass(frozen=True)
class IndicatorReading:
    """One measured value at assessment time.

    ``value`` is a number for every kind except BloodPressure, which takes a
    ``(systolic, diastolic)`` pair. Shape is checked by the evaluator, not here.
    """

    kind: IndicatorKind
    value: float | tuple[float, float]
    reference_range: ReferenceRange | None = None


DEFAULT_REFERENCE_RANGES: MappingProxyType[IndicatorKind, ReferenceRange] = MappingProxyType({
    IndicatorKind.BLOOD_PRESSURE: PairRange(min=(90.0, 60.0), max=(140.0, 90.0)),
    IndicatorKind.CHOLESTEROL: ScalarRange(min=0.0, max=200.0),
    IndicatorKind.BLOOD_SUGAR: ScalarRange(min=70.0, max=140.0),
    IndicatorKind.BMI: ScalarRange(min=18.5, max=25.0),
    IndicatorKind.WAIST_CIRCUMFERENCE: ScalarRange(min=0.0, max=40.0),
    IndicatorKind.BODY_FAT_PERCENTAGE: ScalarRange(min=10.0, max=30.0),
    IndicatorKind.RESTING_HEART_RATE: ScalarRange(min=60.0, max=100.0),
})


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IndicatorEvaluation:
    kind: IndicatorKind
    raw_risk: float
    risk_contribution: float     # raw_risk x weight, in [0, 80]
    status: IndicatorStatus


@dataclass(frozen=True)
class CompositeScore:
    """Bounded composite score. ``level`` is always ``classify(value)``."""

    value: int
    level: RiskLevel


@dataclass(frozen=True)
class CategoryRisk:
    category: RiskCategory
    level: RiskLevel
    score: int


@dataclass(frozen=True)
class RecommendedAction:
    type: str
    description: str
    priority: int = 0


@dataclass(frozen=True)
class RiskThresholds:
    low: float
    moderate: float
    high: float

    def __post_init__(self) -> None:
        if not self.low <= self.moderate <= self.high:
            raise ValueError(
                "Risk thresholds must satisfy low <= moderate <= high, "
                f"got {self.low}/{self.moderate}/{self.high}"
            )


@dataclass(frozen=True)
class ConditionRule:
    condition: str
    thresholds: RiskThresholds
    recommended_actions: tuple[RecommendedAction, ...] = ()


@dataclass(frozen=True)
class PredictiveInsight:
    condition: str
    probability_of_development: int     # one of 25, 50, 80
    recommended_actions: tuple[RecommendedAction, ...]


@dataclass(frozen=True)
class CategoryRecommendation:
    category: RiskCategory
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class TrendProjection:
    direction: TrendDirection
    rate: float
    current_score: float
    projected_score: float
    projected_level: RiskLevel


@dataclass(frozen=True)
class HealthTrajectory:
    overall: TrendProjection
    categories: dict[RiskCategory, TrendProjection] = field(default_factory=dict)


@dataclass(frozen=True)
class HealthRiskAssessment:
    """Everything computed for one subject at one assessment time."""

    composite: CompositeScore
    categories: tuple[CategoryRisk, ...]
    indicators: tuple[IndicatorEvaluation, ...]
    predictive_insights: tuple[PredictiveInsight, ...]
    category_recommendations: tuple[CategoryRecommendation, ...] = ()
