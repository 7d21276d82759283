"""Weighted composite risk scoring and category breakdown."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from nutriscan.domains.health.domain_logic.indicator_evaluator import IndicatorEvaluator
from nutriscan.domains.health.domain_logic.numeric import clamp, round_half_up
from nutriscan.domains.health.domain_logic.risk_classifier import (
    DEFAULT_CLASSIFIER,
    RiskClassifier,
)
from nutriscan.domains.health.domain_logic.risk_models import (
    CATEGORY_PROPORTIONS,
    SCORE_MAX,
    SCORE_MIN,
    CategoryRisk,
    CompositeScore,
    IndicatorEvaluation,
    IndicatorReading,
    RiskCategory,
)

logger = logging.getLogger(__name__)


class CompositeScorer:
    """Combines weighted indicator risks into one 0-100 score.

    Usage::

        scorer = CompositeScorer()
        composite = scorer.score(readings)
        categories = scorer.category_breakdown(composite.value)

    The level on every returned score comes from the injected classifier,
    so the value and its level cannot disagree.
    """

    def __init__(
        self,
        evaluator: IndicatorEvaluator | None = None,
        classifier: RiskClassifier = DEFAULT_CLASSIFIER,
        category_proportions: Sequence[tuple[RiskCategory, float]] = CATEGORY_PROPORTIONS,
    ) -> None:
        self._evaluator = evaluator or IndicatorEvaluator()
        self._classifier = classifier
        self._proportions = tuple(category_proportions)

    @property
    def evaluator(self) -> IndicatorEvaluator:
        return self._evaluator

    @property
    def classifier(self) -> RiskClassifier:
        return self._classifier

    def evaluate_all(self, readings: Iterable[IndicatorReading]) -> list[IndicatorEvaluation]:
        return [self._evaluator.evaluate(r) for r in readings]

    def score(self, readings: Iterable[IndicatorReading]) -> CompositeScore:
        """Sum risk contributions, clamp to [0, 100] and round half up.

        An empty list scores 0 (Low).
        """
        return self.score_evaluations(self.evaluate_all(readings))

    def score_evaluations(self, evaluations: Iterable[IndicatorEvaluation]) -> CompositeScore:
        total = sum(e.risk_contribution for e in evaluations)
        value = round_half_up(clamp(total, SCORE_MIN, SCORE_MAX))
        composite = CompositeScore(value=value, level=self._classifier.classify(value))
        logger.debug("Composite risk %.2f -> %d (%s)", total, value, composite.level.value)
        return composite

    def category_breakdown(self, score: float) -> tuple[CategoryRisk, ...]:
        """Split a composite score into its fixed category proportions.

        Each level is classified from the unrounded proportional score; the
        reported scores are rounded independently and need not sum to
        ``score``.
        """
        return tuple(
            CategoryRisk(
                category=category,
                level=self._classifier.classify(score * proportion),
                score=round_half_up(score * proportion),
            )
            for category, proportion in self._proportions
        )
