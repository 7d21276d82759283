"""Threshold-rule insights over a composite score.

The engine knows nothing about specific conditions: the caller passes the
rule table (see ``catalogs/health_risk.yaml`` for the bundled one).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from nutriscan.domains.health.domain_logic.risk_models import (
    PROBABILITY_HIGH,
    PROBABILITY_LOW,
    PROBABILITY_MODERATE,
    CategoryRecommendation,
    CategoryRisk,
    ConditionRule,
    PredictiveInsight,
    RiskCategory,
)

logger = logging.getLogger(__name__)


def probability_for(score: float, rule: ConditionRule) -> int:
    """Banded probability for one rule; 0 means the rule did not fire."""
    thresholds = rule.thresholds
    if score >= thresholds.high:
        return PROBABILITY_HIGH
    if score >= thresholds.moderate:
        return PROBABILITY_MODERATE
    if score >= thresholds.low:
        return PROBABILITY_LOW
    return 0


def evaluate_insights(
    score: float, rules: Iterable[ConditionRule]
) -> list[PredictiveInsight]:
    """Return insights for every rule that fires, in rule-table order."""
    insights = []
    for rule in rules:
        probability = probability_for(score, rule)
        if probability == 0:
            continue
        logger.debug("Rule %r fired at score %s (p=%d)", rule.condition, score, probability)
        insights.append(PredictiveInsight(
            condition=rule.condition,
            probability_of_development=probability,
            recommended_actions=rule.recommended_actions,
        ))
    return insights


def recommend_for_categories(
    breakdown: Iterable[CategoryRisk],
    advice: Mapping[RiskCategory, Iterable[str]],
) -> list[CategoryRecommendation]:
    """Attach improvement advice to each category that has any, in breakdown order."""
    return [
        CategoryRecommendation(
            category=item.category,
            recommendations=tuple(advice[item.category]),
        )
        for item in breakdown
        if item.category in advice
    ]
