"""Payload conversion between tool JSON and engine value types.

Tools receive whatever the persistence layer hands them (plain dicts and
lists); these helpers turn that into the frozen engine inputs and turn
engine results back into JSON-ready dicts.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from nutriscan.domains.health.domain_logic.numeric import clamp, round_half_up
from nutriscan.domains.health.domain_logic.nutrition_models import NutritionEntry
from nutriscan.domains.health.domain_logic.risk_models import (
    SCORE_MAX,
    SCORE_MIN,
    CategoryRisk,
    CompositeScore,
    HealthRiskAssessment,
    IndicatorKind,
    IndicatorReading,
    PairRange,
    ReferenceRange,
    RiskCategory,
    ScalarRange,
)
from nutriscan.domains.health.domain_logic.risk_classifier import classify_risk


class PayloadError(ValueError):
    """Raised when a tool payload is missing fields or names unknown values."""


def _tupled(val: Any) -> Any:
    return tuple(val) if isinstance(val, list) else val


def reading_from_dict(data: Mapping[str, Any]) -> IndicatorReading:
    """Build an IndicatorReading from ``{"type"|"kind", "value", "referenceRange"?}``.

    Only the container shape is converted here; whether the value fits the
    kind is checked by the evaluator.
    """
    kind_name = data.get("kind", data.get("type"))
    try:
        kind = IndicatorKind(kind_name)
    except ValueError:
        raise PayloadError(f"Invalid health indicator type: {kind_name!r}") from None
    if "value" not in data:
        raise PayloadError(f"Indicator {kind.value} has no value")

    return IndicatorReading(
        kind=kind,
        value=_tupled(data["value"]),
        reference_range=_range_from_dict(data.get("reference_range", data.get("referenceRange"))),
    )


def _range_from_dict(data: Mapping[str, Any] | None) -> ReferenceRange | None:
    if not data:
        return None
    if not isinstance(data, Mapping):
        raise PayloadError(f"Reference range must be an object with min and max, got {data!r}")
    if "min" not in data or "max" not in data:
        raise PayloadError(f"Reference range needs both min and max, got {data!r}")
    low, high = _tupled(data["min"]), _tupled(data["max"])
    if isinstance(low, tuple) or isinstance(high, tuple):
        return PairRange(min=low, max=high)
    return ScalarRange(min=low, max=high)


def entry_from_dict(data: Mapping[str, Any]) -> NutritionEntry:
    """Build a NutritionEntry; accepts a nested ``nutritionalInfo`` block."""
    info = data.get("nutritionalInfo", data)
    try:
        return NutritionEntry(
            calories=float(info.get("calories") or 0),
            protein=float(info.get("protein") or 0),
            carbohydrates=float(info.get("carbohydrates") or 0),
            fat=float(info.get("fat") or 0),
            sugar=float(info.get("sugar") or 0),
            fiber=float(info.get("fiber") or 0),
            micronutrients={
                str(name): float(amount)
                for name, amount in (info.get("micronutrients") or {}).items()
            },
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise PayloadError(f"Invalid nutrition entry: {exc}") from exc


def assessment_from_dict(data: Mapping[str, Any]) -> HealthRiskAssessment:
    """Rebuild the scored parts of a stored assessment for trend fitting.

    Accepts ``{"score", "categories": [{"category", "score"}]}``; levels are
    recomputed rather than trusted from storage, and scores are clamped to
    [0, 100] and rounded first.
    """
    try:
        score = _stored_score(data["score"])
        categories = tuple(
            _category_from_dict(c) for c in data.get("categories", [])
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise PayloadError(f"Invalid stored assessment: {exc!r}") from exc

    return HealthRiskAssessment(
        composite=CompositeScore(value=score, level=classify_risk(score)),
        categories=categories,
        indicators=(),
        predictive_insights=(),
    )


def _stored_score(raw: Any) -> int:
    score = float(raw)
    if not math.isfinite(score):
        raise ValueError(f"Stored score must be finite, got {raw!r}")
    return round_half_up(clamp(score, SCORE_MIN, SCORE_MAX))


def _category_from_dict(data: Mapping[str, Any]) -> CategoryRisk:
    score = _stored_score(data["score"])
    return CategoryRisk(
        category=RiskCategory(data["category"]),
        level=classify_risk(score),
        score=score,
    )


def to_payload(result: Any) -> dict[str, Any]:
    """Serialize an engine result dataclass to a JSON-ready dict."""
    return _plain(dataclasses.asdict(result))


def _plain(value: Any) -> Any:
    # asdict leaves enums (including dict keys) in place
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def error_payload(exc: Exception, *, error_type: str | None = None) -> dict[str, Any]:
    return {
        "status": "error",
        "error_type": error_type or type(exc).__name__,
        "message": str(exc),
    }
