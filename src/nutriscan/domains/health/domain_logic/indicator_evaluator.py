"""Per-indicator risk evaluation.

Each reading maps to a raw risk (0, 50, 60 or 80), a weighted risk
contribution and a Normal/Borderline/Abnormal status. BloodPressure uses
fixed hypertension bands and ignores its reference range for risk; every
other kind is scored against its reference range when one is present.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from numbers import Real

from nutriscan.domains.health.domain_logic.exceptions import InvalidIndicatorShape
from nutriscan.domains.health.domain_logic.risk_models import (
    DEFAULT_REFERENCE_RANGES,
    DEFAULT_RISK_WEIGHTS,
    RAW_RISK_ABOVE_RANGE,
    RAW_RISK_BELOW_RANGE,
    RAW_RISK_BP_ELEVATED,
    RAW_RISK_BP_HYPERTENSIVE,
    IndicatorEvaluation,
    IndicatorKind,
    IndicatorReading,
    IndicatorStatus,
    PairRange,
    ReferenceRange,
    ScalarRange,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shape checks
# ---------------------------------------------------------------------------

def _is_number(val: object) -> bool:
    return isinstance(val, Real) and not isinstance(val, bool)


def _is_pair(val: object) -> bool:
    return (
        isinstance(val, (tuple, list))
        and len(val) == 2
        and all(_is_number(v) for v in val)
    )


def _require_pair_reading(reading: IndicatorReading) -> tuple[float, float]:
    if not _is_pair(reading.value):
        raise InvalidIndicatorShape(
            f"{reading.kind.value} expects a [systolic, diastolic] pair, got {reading.value!r}"
        )
    rng = reading.reference_range
    if rng is not None and not (
        isinstance(rng, PairRange) and _is_pair(rng.min) and _is_pair(rng.max)
    ):
        raise InvalidIndicatorShape(
            f"{reading.kind.value} expects a paired reference range, got {rng!r}"
        )
    systolic, diastolic = reading.value  # type: ignore[misc]
    return float(systolic), float(diastolic)


def _require_scalar_reading(reading: IndicatorReading) -> float:
    if not _is_number(reading.value):
        raise InvalidIndicatorShape(
            f"{reading.kind.value} expects a scalar value, got {reading.value!r}"
        )
    rng = reading.reference_range
    if rng is not None and not (
        isinstance(rng, ScalarRange) and _is_number(rng.min) and _is_number(rng.max)
    ):
        raise InvalidIndicatorShape(
            f"{reading.kind.value} expects a scalar reference range, got {rng!r}"
        )
    return float(reading.value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------

class IndicatorEvaluator:
    """Evaluates single readings against a kind -> weight table.

    Kinds absent from ``weights`` are still classified but contribute
    zero risk.
    """

    def __init__(self, weights: Mapping[IndicatorKind, float] = DEFAULT_RISK_WEIGHTS) -> None:
        self._weights = weights

    def weight_for(self, kind: IndicatorKind) -> float:
        return self._weights.get(kind, 0.0)

    def evaluate(self, reading: IndicatorReading) -> IndicatorEvaluation:
        if reading.kind is IndicatorKind.BLOOD_PRESSURE:
            raw_risk, status = self._evaluate_blood_pressure(reading)
        else:
            raw_risk, status = self._evaluate_scalar(reading)

        contribution = raw_risk * self.weight_for(reading.kind)
        logger.debug(
            "Evaluated %s: raw_risk=%s contribution=%.2f status=%s",
            reading.kind.value, raw_risk, contribution, status.value,
        )
        return IndicatorEvaluation(
            kind=reading.kind,
            raw_risk=raw_risk,
            risk_contribution=contribution,
            status=status,
        )

    @staticmethod
    def _evaluate_blood_pressure(reading: IndicatorReading) -> tuple[float, IndicatorStatus]:
        systolic, diastolic = _require_pair_reading(reading)

        if systolic > 140 or diastolic > 90:
            raw_risk = RAW_RISK_BP_HYPERTENSIVE
        elif systolic > 130 or diastolic > 85:
            raw_risk = RAW_RISK_BP_ELEVATED
        else:
            raw_risk = 0.0

        rng = reading.reference_range
        if isinstance(rng, PairRange):
            if systolic > rng.max[0] or diastolic > rng.max[1]:
                status = IndicatorStatus.ABNORMAL
            elif systolic < rng.min[0] or diastolic < rng.min[1]:
                status = IndicatorStatus.BORDERLINE
            else:
                status = IndicatorStatus.NORMAL
        elif raw_risk == RAW_RISK_BP_HYPERTENSIVE:
            status = IndicatorStatus.ABNORMAL
        elif raw_risk == RAW_RISK_BP_ELEVATED:
            status = IndicatorStatus.BORDERLINE
        else:
            status = IndicatorStatus.NORMAL

        return raw_risk, status

    @staticmethod
    def _evaluate_scalar(reading: IndicatorReading) -> tuple[float, IndicatorStatus]:
        value = _require_scalar_reading(reading)
        rng = reading.reference_range
        if rng is None:
            return 0.0, IndicatorStatus.NORMAL
        if value > rng.max:
            return RAW_RISK_ABOVE_RANGE, IndicatorStatus.ABNORMAL
        if value < rng.min:
            return RAW_RISK_BELOW_RANGE, IndicatorStatus.BORDERLINE
        return 0.0, IndicatorStatus.NORMAL


def with_default_ranges(
    readings: Iterable[IndicatorReading],
    ranges: Mapping[IndicatorKind, ReferenceRange] = DEFAULT_REFERENCE_RANGES,
) -> list[IndicatorReading]:
    """Return readings with a reference range filled in where none was given.

    Readings that already carry a range are returned as-is.
    """
    filled = []
    for reading in readings:
        if reading.reference_range is None and reading.kind in ranges:
            reading = dataclasses.replace(reading, reference_range=ranges[reading.kind])
        filled.append(reading)
    return filled
