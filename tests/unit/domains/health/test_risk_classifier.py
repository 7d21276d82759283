"""Tests for score -> risk level classification."""

from __future__ import annotations

import math

import pytest

from nutriscan.domains.health.domain_logic.risk_classifier import (
    DEFAULT_CLASSIFIER,
    RiskClassifier,
    classify_risk,
)
from nutriscan.domains.health.domain_logic.risk_models import RiskLevel


class TestBoundaries:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (24.999, RiskLevel.LOW),
            (25, RiskLevel.MODERATE),
            (49.999, RiskLevel.MODERATE),
            (50, RiskLevel.HIGH),
            (74.999, RiskLevel.HIGH),
            (75, RiskLevel.CRITICAL),
        ],
    )
    def test_breakpoints_are_inclusive_lower_bounds(self, score, expected):
        assert classify_risk(score) == expected

    def test_zero_is_low(self):
        assert classify_risk(0) == RiskLevel.LOW

    def test_hundred_is_critical(self):
        assert classify_risk(100) == RiskLevel.CRITICAL


class TestTotality:
    def test_negative_scores_are_not_clamped_but_still_classified(self):
        assert classify_risk(-40) == RiskLevel.LOW

    def test_overflow_scores_are_critical(self):
        assert classify_risk(1e9) == RiskLevel.CRITICAL

    def test_nan_falls_through_to_low(self):
        assert classify_risk(math.nan) == RiskLevel.LOW


class TestRiskLevelOrder:
    def test_levels_are_totally_ordered(self):
        ranks = [level.rank for level in (
            RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.CRITICAL
        )]
        assert ranks == [0, 1, 2, 3]


class TestCustomBreakpoints:
    def test_alternate_table_is_used(self):
        classifier = RiskClassifier(
            breakpoints=((90, RiskLevel.CRITICAL), (10, RiskLevel.MODERATE))
        )
        assert classifier.classify(50) == RiskLevel.MODERATE
        assert classifier.classify(95) == RiskLevel.CRITICAL
        assert classifier.classify(5) == RiskLevel.LOW

    def test_default_table_is_untouched_by_alternates(self):
        RiskClassifier(breakpoints=((10, RiskLevel.CRITICAL),))
        assert DEFAULT_CLASSIFIER.classify(50) == RiskLevel.HIGH

    def test_unordered_breakpoints_rejected(self):
        with pytest.raises(ValueError, match="highest first"):
            RiskClassifier(breakpoints=((25, RiskLevel.MODERATE), (75, RiskLevel.CRITICAL)))
