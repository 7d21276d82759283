"""MCP tool for engagement scoring."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from nutriscan.domains.engagement.domain_logic.engagement_scorer import (
    EngagementPattern,
    advise_low_engagement,
    score_engagement,
)
from nutriscan.domains.health.tools.payloads import error_payload, to_payload

if TYPE_CHECKING:
    from nutriscan.core.catalog.models import RuleCatalog

logger = logging.getLogger(__name__)


def register_engagement_tools(mcp: FastMCP, catalog: RuleCatalog) -> None:
    """Register engagement scoring tools on the MCP server."""

    @mcp.tool
    def engagement_score(patterns: list[dict[str, Any]]) -> str:
        """Score a user's engagement from per-category interaction counts.

        Also suggests features and motivational tips for every category with
        fewer than 10 interactions.

        Args:
            patterns: Items like ``{"category": "Nutrition", "totalInteractions": 12}``.
        """
        try:
            parsed = [
                EngagementPattern(
                    category=str(p["category"]),
                    total_interactions=int(p.get("totalInteractions", p.get("total_interactions", 0))),
                )
                for p in patterns
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Rejected engagement payload: %r", exc)
            return json.dumps(error_payload(exc, error_type="ValidationError"))

        summary = score_engagement(parsed)
        advice = advise_low_engagement(
            summary.low_engagement_categories,
            catalog.feature_suggestions,
            catalog.motivational_tips,
        )
        return json.dumps({
            "status": "ok",
            "engagement": to_payload(summary),
            "advice": to_payload(advice),
        })
