"""Score -> risk level classification.

One breakpoint table serves the composite score, every category score and
every trend projection. Callers clamp before classifying.
"""

from __future__ import annotations

from collections.abc import Sequence

from nutriscan.domains.health.domain_logic.risk_models import (
    DEFAULT_RISK_BREAKPOINTS,
    RiskLevel,
)


class RiskClassifier:
    """Maps a numeric score to a :class:`RiskLevel` via inclusive lower bounds.

    Usage::

        classifier = RiskClassifier()
        classifier.classify(50)        # RiskLevel.HIGH
        classifier.classify(24.999)    # RiskLevel.LOW

    Scores below every breakpoint (including NaN) are ``floor_level``.
    """

    def __init__(
        self,
        breakpoints: Sequence[tuple[float, RiskLevel]] = DEFAULT_RISK_BREAKPOINTS,
        floor_level: RiskLevel = RiskLevel.LOW,
    ) -> None:
        bounds = [b for b, _ in breakpoints]
        if bounds != sorted(bounds, reverse=True):
            raise ValueError(f"Breakpoints must be ordered highest first, got {bounds}")
        self._breakpoints = tuple(breakpoints)
        self._floor = floor_level

    @property
    def breakpoints(self) -> tuple[tuple[float, RiskLevel], ...]:
        return self._breakpoints

    def classify(self, score: float) -> RiskLevel:
        for lower_bound, level in self._breakpoints:
            if score >= lower_bound:
                return level
        return self._floor


DEFAULT_CLASSIFIER = RiskClassifier()


def classify_risk(score: float) -> RiskLevel:
    """Classify with the default breakpoint table."""
    return DEFAULT_CLASSIFIER.classify(score)
