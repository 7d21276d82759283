"""Longitudinal trend fitting and one-step risk projection.

Scores are regressed against their 1-based position (ordinary least
squares), the slope sign gives the direction, and the next value is the
last score moved by one slope, clamped to [0, 100].
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from nutriscan.domains.health.domain_logic.exceptions import (
    InconsistentCategorySetError,
    InsufficientHistoryError,
)
from nutriscan.domains.health.domain_logic.numeric import clamp
from nutriscan.domains.health.domain_logic.risk_classifier import (
    DEFAULT_CLASSIFIER,
    RiskClassifier,
)
from nutriscan.domains.health.domain_logic.risk_models import (
    SCORE_MAX,
    SCORE_MIN,
    CategoryRisk,
    HealthRiskAssessment,
    HealthTrajectory,
    RiskCategory,
    TrendDirection,
    TrendProjection,
)

logger = logging.getLogger(__name__)

MIN_HISTORY_POINTS = 2


def fit_line(values: Sequence[float], *, start: int = 1) -> tuple[float, float]:
    """OLS ``(slope, intercept)`` of ``values`` against x = start, start+1, ...

    Works from raw sums so that an integer series whose numerator
    ``nΣxy - ΣxΣy`` is exactly 0 yields a slope of exactly 0.
    """
    n = len(values)
    if n < MIN_HISTORY_POINTS:
        raise InsufficientHistoryError(
            f"At least {MIN_HISTORY_POINTS} points are needed for a trend, got {n}"
        )
    sum_x = sum_y = sum_xy = sum_xx = 0
    for x, y in enumerate(values, start=start):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_xx += x * x

    numerator = n * sum_xy - sum_x * sum_y
    denominator = n * sum_xx - sum_x * sum_x
    slope = numerator / denominator if numerator else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def fit_slope(values: Sequence[float]) -> float:
    """OLS slope of ``values`` against x = 1..n."""
    slope, _intercept = fit_line(values)
    return slope


class TrendProjector:
    """Fits score trends and projects the next value.

    Usage::

        projector = TrendProjector()
        projection = projector.project([20, 30, 40, 50, 60])
        projection.projected_score   # 70.0
        projection.projected_level   # RiskLevel.HIGH
    """

    def __init__(self, classifier: RiskClassifier = DEFAULT_CLASSIFIER) -> None:
        self._classifier = classifier

    def project(self, series: Sequence[float]) -> TrendProjection:
        """Project one step ahead from an oldest-to-newest score series."""
        slope = fit_slope(series)

        if slope > 0:
            direction = TrendDirection.INCREASING
        elif slope < 0:
            direction = TrendDirection.DECREASING
        else:
            direction = TrendDirection.STABLE

        current = float(series[-1])
        projected = clamp(current + slope, SCORE_MIN, SCORE_MAX)
        logger.debug(
            "Trend over %d points: slope=%.4f projected=%.2f", len(series), slope, projected
        )
        return TrendProjection(
            direction=direction,
            rate=abs(slope),
            current_score=current,
            projected_score=projected,
            projected_level=self._classifier.classify(projected),
        )

    def project_categories(
        self, breakdowns: Sequence[Sequence[CategoryRisk]]
    ) -> dict[RiskCategory, TrendProjection]:
        """Project each category independently across a series of breakdowns.

        Every breakdown must carry exactly the categories of the first one.
        """
        if len(breakdowns) < MIN_HISTORY_POINTS:
            raise InsufficientHistoryError(
                f"At least {MIN_HISTORY_POINTS} breakdowns are needed for a trend, "
                f"got {len(breakdowns)}"
            )

        expected = _category_keys(breakdowns[0], index=0)
        series: dict[RiskCategory, list[float]] = {category: [] for category in expected}

        for index, breakdown in enumerate(breakdowns):
            keys = _category_keys(breakdown, index=index)
            if keys != expected:
                missing = sorted(c.value for c in expected - keys)
                extra = sorted(c.value for c in keys - expected)
                raise InconsistentCategorySetError(
                    f"Breakdown {index} differs from the first: "
                    f"missing={missing} unexpected={extra}"
                )
            for item in breakdown:
                series[item.category].append(item.score)

        # Preserve the first breakdown's ordering
        return {
            item.category: self.project(series[item.category])
            for item in breakdowns[0]
        }

    def trajectory(self, assessments: Sequence[HealthRiskAssessment]) -> HealthTrajectory:
        """Overall and per-category projections from ordered assessments."""
        overall = self.project([a.composite.value for a in assessments])
        categories = self.project_categories([a.categories for a in assessments])
        return HealthTrajectory(overall=overall, categories=categories)


def _category_keys(breakdown: Sequence[CategoryRisk], *, index: int) -> frozenset[RiskCategory]:
    keys = [item.category for item in breakdown]
    unique = frozenset(keys)
    if len(unique) != len(keys):
        raise InconsistentCategorySetError(f"Breakdown {index} repeats a category")
    return unique
