"""Tests for tool payload conversion."""

from __future__ import annotations

import json

import pytest

from nutriscan.domains.health.domain_logic.risk_models import (
    CategoryRisk,
    HealthTrajectory,
    IndicatorKind,
    PairRange,
    RiskCategory,
    RiskLevel,
    ScalarRange,
    TrendDirection,
    TrendProjection,
)
from nutriscan.domains.health.tools.payloads import (
    PayloadError,
    assessment_from_dict,
    entry_from_dict,
    error_payload,
    reading_from_dict,
    to_payload,
)


class TestReadingFromDict:
    def test_scalar_reading_with_range(self):
        reading = reading_from_dict(
            {"type": "Cholesterol", "value": 210, "referenceRange": {"min": 0, "max": 200}}
        )
        assert reading.kind == IndicatorKind.CHOLESTEROL
        assert reading.reference_range == ScalarRange(min=0, max=200)

    def test_blood_pressure_lists_become_pairs(self):
        reading = reading_from_dict({
            "kind": "BloodPressure",
            "value": [130, 85],
            "reference_range": {"min": [90, 60], "max": [140, 90]},
        })
        assert reading.value == (130, 85)
        assert reading.reference_range == PairRange(min=(90, 60), max=(140, 90))

    def test_no_range(self):
        assert reading_from_dict({"type": "BMI", "value": 24}).reference_range is None

    def test_unknown_type(self):
        with pytest.raises(PayloadError, match="Invalid health indicator type"):
            reading_from_dict({"type": "Cortisol", "value": 12})

    def test_missing_value(self):
        with pytest.raises(PayloadError, match="has no value"):
            reading_from_dict({"type": "BMI"})

    def test_half_open_range(self):
        with pytest.raises(PayloadError, match="min and max"):
            reading_from_dict({"type": "BMI", "value": 24, "referenceRange": {"min": 18.5}})

    def test_range_given_as_list(self):
        with pytest.raises(PayloadError, match="must be an object"):
            reading_from_dict({"type": "BMI", "value": 30, "referenceRange": [18.5, 25]})


class TestEntryFromDict:
    def test_nested_nutritional_info(self):
        entry = entry_from_dict({
            "foodName": "Oatmeal",
            "nutritionalInfo": {"calories": 150, "protein": 5, "fiber": 4,
                                "micronutrients": {"Iron": 1.7}},
        })
        assert entry.calories == 150
        assert entry.fat == 0
        assert entry.micronutrients == {"Iron": 1.7}

    def test_flat_entry_with_nulls(self):
        entry = entry_from_dict({"calories": 90, "sugar": None})
        assert entry.sugar == 0

    def test_non_numeric_value(self):
        with pytest.raises(PayloadError):
            entry_from_dict({"calories": "lots"})


class TestAssessmentFromDict:
    def test_levels_recomputed(self):
        assessment = assessment_from_dict({
            "score": 60,
            "level": "Low",
            "categories": [{"category": "Cardiovascular", "score": 18, "level": "Critical"}],
        })
        assert assessment.composite.level == RiskLevel.HIGH
        assert assessment.categories[0].level == RiskLevel.LOW

    def test_scores_clamped_and_rounded(self):
        assessment = assessment_from_dict({
            "score": 120,
            "categories": [
                {"category": "Metabolic", "score": -5},
                {"category": "Lifestyle", "score": 12.5},
            ],
        })
        assert assessment.composite.value == 100
        assert isinstance(assessment.composite.value, int)
        assert assessment.composite.level == RiskLevel.CRITICAL
        assert [c.score for c in assessment.categories] == [0, 13]

    @pytest.mark.parametrize("raw", ["nan", float("inf"), float("-inf")])
    def test_non_finite_score(self, raw):
        with pytest.raises(PayloadError, match="finite"):
            assessment_from_dict({"score": raw})

    def test_non_finite_category_score(self):
        with pytest.raises(PayloadError):
            assessment_from_dict({"score": 10, "categories": [{"category": "Metabolic", "score": "nan"}]})

    def test_missing_score(self):
        with pytest.raises(PayloadError):
            assessment_from_dict({"categories": []})

    def test_unknown_category(self):
        with pytest.raises(PayloadError):
            assessment_from_dict({"score": 10, "categories": [{"category": "Dental", "score": 1}]})


class TestToPayload:
    def test_enums_flattened_to_values(self):
        payload = to_payload(CategoryRisk(RiskCategory.MENTAL_HEALTH, RiskLevel.LOW, 5))
        assert payload == {"category": "Mental Health", "level": "Low", "score": 5}

    def test_enum_dict_keys_flattened(self):
        projection = TrendProjection(
            direction=TrendDirection.STABLE,
            rate=0.0,
            current_score=12.0,
            projected_score=12.0,
            projected_level=RiskLevel.LOW,
        )
        payload = to_payload(HealthTrajectory(
            overall=projection, categories={RiskCategory.METABOLIC: projection}
        ))
        assert list(payload["categories"]) == ["Metabolic"]
        assert payload["overall"]["direction"] == "Stable"
        json.dumps(payload)

    def test_error_payload(self):
        payload = error_payload(ValueError("bad input"), error_type="ValidationError")
        assert payload == {
            "status": "error",
            "error_type": "ValidationError",
            "message": "bad input",
        }
        assert error_payload(KeyError("x"))["error_type"] == "KeyError"
