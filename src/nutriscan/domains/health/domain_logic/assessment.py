"""Health risk assessment orchestrator.

Runs one subject's readings through the full current-state pipeline:
indicator evaluation -> composite score -> category breakdown ->
predictive insights -> category advice. Pure; persisting the result is
the caller's job.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from nutriscan.domains.health.domain_logic.composite_scorer import CompositeScorer
from nutriscan.domains.health.domain_logic.predictive_insights import (
    evaluate_insights,
    recommend_for_categories,
)
from nutriscan.domains.health.domain_logic.risk_models import (
    ConditionRule,
    HealthRiskAssessment,
    IndicatorReading,
    RiskCategory,
)


def assess_health_risk(
    readings: Sequence[IndicatorReading],
    condition_rules: Iterable[ConditionRule] = (),
    category_advice: Mapping[RiskCategory, Iterable[str]] | None = None,
    *,
    scorer: CompositeScorer | None = None,
) -> HealthRiskAssessment:
    """Assess one subject's readings.

    Raises:
        InvalidIndicatorShape: if any reading's shape does not match its kind.
    """
    scorer = scorer or CompositeScorer()

    evaluations = scorer.evaluate_all(readings)
    composite = scorer.score_evaluations(evaluations)
    categories = scorer.category_breakdown(composite.value)

    return HealthRiskAssessment(
        composite=composite,
        categories=categories,
        indicators=tuple(evaluations),
        predictive_insights=tuple(evaluate_insights(composite.value, condition_rules)),
        category_recommendations=tuple(
            recommend_for_categories(categories, category_advice or {})
        ),
    )
