"""MCP tools for health risk assessment and trajectory projection.

Readings and stored assessments arrive as plain JSON from the persistence
layer; scoring happens entirely in the deterministic engine and nothing
is stored here.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from nutriscan.domains.health.domain_logic.assessment import assess_health_risk
from nutriscan.domains.health.domain_logic.exceptions import ScoringError
from nutriscan.domains.health.domain_logic.indicator_evaluator import with_default_ranges
from nutriscan.domains.health.domain_logic.trend_projector import TrendProjector
from nutriscan.domains.health.tools.payloads import (
    PayloadError,
    assessment_from_dict,
    error_payload,
    reading_from_dict,
    to_payload,
)

if TYPE_CHECKING:
    from nutriscan.core.catalog.models import RuleCatalog
    from nutriscan.domains.health.domain_logic.composite_scorer import CompositeScorer

logger = logging.getLogger(__name__)


def register_risk_assessment_tools(
    mcp: FastMCP,
    catalog: RuleCatalog,
    scorer: CompositeScorer,
    projector: TrendProjector,
) -> None:
    """Register health risk assessment tools on the MCP server."""

    @mcp.tool(name="assess_health_risk")
    def assess_health_risk_tool(
        indicators: list[dict[str, Any]],
        use_default_ranges: bool = True,
    ) -> str:
        """Score a set of health indicator readings.

        Returns the composite risk score and level, the per-category
        breakdown, per-indicator status, predictive condition insights and
        category improvement recommendations.

        Args:
            indicators: Readings like ``{"type": "BloodSugar", "value": 150}``.
                BloodPressure takes ``[systolic, diastolic]``. Each may carry a
                ``referenceRange`` with ``min`` and ``max``.
            use_default_ranges: Fill in standard reference ranges for readings
                that do not carry one.
        """
        try:
            readings = [reading_from_dict(d) for d in indicators]
        except PayloadError as exc:
            logger.warning("Rejected indicator payload: %s", exc)
            return json.dumps(error_payload(exc, error_type="ValidationError"))

        if use_default_ranges:
            readings = with_default_ranges(readings)

        try:
            assessment = assess_health_risk(
                readings,
                catalog.condition_rules,
                catalog.category_advice,
                scorer=scorer,
            )
        except ScoringError as exc:
            logger.warning("Health risk assessment failed: %s", exc)
            return json.dumps(error_payload(exc))

        return json.dumps({"status": "ok", "assessment": to_payload(assessment)}, indent=2)

    @mcp.tool
    def project_health_trajectory(assessments: list[dict[str, Any]]) -> str:
        """Project the next risk score from stored assessments.

        Requires at least 2 assessments, ordered oldest to newest, each with
        the same set of categories.

        Args:
            assessments: Items like ``{"score": 40, "categories":
                [{"category": "Cardiovascular", "score": 12}, ...]}``.
        """
        try:
            history = [assessment_from_dict(d) for d in assessments]
        except PayloadError as exc:
            logger.warning("Rejected assessment history payload: %s", exc)
            return json.dumps(error_payload(exc, error_type="ValidationError"))

        try:
            trajectory = projector.trajectory(history)
        except ScoringError as exc:
            logger.warning("Trajectory projection failed: %s", exc)
            return json.dumps(error_payload(exc))

        return json.dumps({"status": "ok", "trajectory": to_payload(trajectory)}, indent=2)
