"""Category-weighted engagement scoring.

score = min(round(sum(interactions x weight) / sum(interactions) x 100), 100)

Weights above 1.0 reward engagement with high-value features, so a user
who mostly touches goals or nutrition reaches the cap quickly while one who
only authenticates sits near 50.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from nutriscan.domains.health.domain_logic.numeric import round_half_up

DEFAULT_ENGAGEMENT_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "HealthGoals": 1.5,
    "Nutrition": 1.3,
    "Fitness": 1.3,
    "Community": 1.2,
    "Recommendations": 1.1,
    "Profile": 1.0,
    "Rewards": 1.0,
    "Authentication": 0.5,
})

UNWEIGHTED_CATEGORY_WEIGHT = 1.0
ENGAGEMENT_SCORE_CAP = 100
LOW_ENGAGEMENT_THRESHOLD = 10


@dataclass(frozen=True)
class EngagementPattern:
    category: str
    total_interactions: int


@dataclass(frozen=True)
class EngagementSummary:
    score: int
    total_interactions: int
    low_engagement_categories: tuple[str, ...]


def score_engagement(
    patterns: Sequence[EngagementPattern],
    weights: Mapping[str, float] = DEFAULT_ENGAGEMENT_WEIGHTS,
) -> EngagementSummary:
    """Score a user's interaction patterns. No interactions scores 0."""
    total = sum(p.total_interactions for p in patterns)
    weighted = sum(
        p.total_interactions * weights.get(p.category, UNWEIGHTED_CATEGORY_WEIGHT)
        for p in patterns
    )

    if total > 0:
        score = min(round_half_up(weighted / total * 100), ENGAGEMENT_SCORE_CAP)
    else:
        score = 0

    return EngagementSummary(
        score=score,
        total_interactions=total,
        low_engagement_categories=tuple(
            p.category for p in patterns if p.total_interactions < LOW_ENGAGEMENT_THRESHOLD
        ),
    )


@dataclass(frozen=True)
class EngagementAdvice:
    """Per low-engagement category: features to try and motivational tips."""

    suggested_features: dict[str, tuple[str, ...]]
    motivational_tips: dict[str, tuple[str, ...]]


def advise_low_engagement(
    categories: Sequence[str],
    feature_suggestions: Mapping[str, Sequence[str]],
    motivational_tips: Mapping[str, Sequence[str]],
) -> EngagementAdvice:
    """Look up advice for each category; unknown categories map to empty tuples."""
    return EngagementAdvice(
        suggested_features={c: tuple(feature_suggestions.get(c, ())) for c in categories},
        motivational_tips={c: tuple(motivational_tips.get(c, ())) for c in categories},
    )
