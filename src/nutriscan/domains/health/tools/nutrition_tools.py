"""MCP tool for nutrition insights over a window of logged entries."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from nutriscan.domains.health.domain_logic.exceptions import ScoringError
from nutriscan.domains.health.tools.payloads import (
    PayloadError,
    entry_from_dict,
    error_payload,
    to_payload,
)

if TYPE_CHECKING:
    from nutriscan.domains.health.domain_logic.nutrition_aggregator import NutritionAggregator

logger = logging.getLogger(__name__)


def register_nutrition_tools(mcp: FastMCP, aggregator: NutritionAggregator) -> None:
    """Register nutrition insight tools on the MCP server."""

    @mcp.tool
    def nutrition_insights(
        entries: list[dict[str, Any]],
        goals: list[str] | None = None,
    ) -> str:
        """Summarize nutrition entries into averages, macro balance and advice.

        With 10 or more entries (oldest first) the profile also carries a
        one-step intake trend per macro.

        Args:
            entries: Items with calories, protein, carbohydrates, fat, sugar and
                fiber (grams), optionally nested under ``nutritionalInfo`` and
                optionally carrying a ``micronutrients`` name -> amount map.
            goals: Active health goal types, e.g. ``["Weight Loss"]``, checked
                against the goal-alignment rules.
        """
        try:
            parsed = [entry_from_dict(d) for d in entries]
        except PayloadError as exc:
            logger.warning("Rejected nutrition payload: %s", exc)
            return json.dumps(error_payload(exc, error_type="ValidationError"))

        try:
            profile = aggregator.aggregate(parsed, goals=goals or ())
        except ScoringError as exc:
            logger.warning("Nutrition aggregation failed: %s", exc)
            return json.dumps(error_payload(exc))

        return json.dumps({"status": "ok", "profile": to_payload(profile)}, indent=2)
