"""NutriScan scoring MCP server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastmcp import FastMCP

from nutriscan.core.catalog.loader import load_bundled_catalog, load_catalog_directory
from nutriscan.core.catalog.models import RuleCatalog
from nutriscan.core.config.settings import get_settings
from nutriscan.domains.engagement.tools.engagement_tools import register_engagement_tools
from nutriscan.domains.health.domain_logic.composite_scorer import CompositeScorer
from nutriscan.domains.health.domain_logic.nutrition_aggregator import NutritionAggregator
from nutriscan.domains.health.domain_logic.trend_projector import TrendProjector
from nutriscan.domains.health.tools.nutrition_tools import register_nutrition_tools
from nutriscan.domains.health.tools.risk_assessment_tools import (
    register_risk_assessment_tools,
)

logger = logging.getLogger(__name__)

SERVER_VERSION = "0.1.0"


def create_app(*, catalog_override: RuleCatalog | None = None) -> FastMCP:
    """Create and configure the NutriScan scoring MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the rule catalog (bundled or from CATALOG_DIR)
    3. Builds the scoring engines
    4. Registers all tools
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "NutriScan Scoring",
        instructions=(
            "Deterministic health risk scoring, trend projection, nutrition "
            "insights and engagement scoring over caller-supplied records."
        ),
    )

    # --- Rule catalog ---
    if catalog_override is not None:
        catalog = catalog_override
        catalog_source = "override"
    elif settings.catalog_dir:
        catalog_dir = Path(settings.catalog_dir).expanduser()
        catalog = load_catalog_directory(catalog_dir)
        catalog_source = str(catalog_dir)
    else:
        catalog = load_bundled_catalog()
        catalog_source = "bundled"
    logger.info(
        "Rule catalog from %s: %d condition rules, %d nutrition rules",
        catalog_source,
        len(catalog.condition_rules),
        len(catalog.nutrition_risk_rules) + len(catalog.recommendation_rules),
    )

    # --- Engines ---
    scorer = CompositeScorer()
    projector = TrendProjector(classifier=scorer.classifier)
    aggregator = NutritionAggregator(
        risk_rules=catalog.nutrition_risk_rules,
        recommendation_rules=catalog.recommendation_rules,
        micronutrient_references=catalog.micronutrient_references,
        goal_alignment_rules=catalog.goal_alignment_rules,
    )

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "NutriScan Scoring",
            "version": SERVER_VERSION,
            "catalog_source": catalog_source,
            "condition_rules_loaded": len(catalog.condition_rules),
            "nutrition_risk_rules_loaded": len(catalog.nutrition_risk_rules),
            "recommendation_rules_loaded": len(catalog.recommendation_rules),
            "goal_alignment_rules_loaded": len(catalog.goal_alignment_rules),
        }

    register_risk_assessment_tools(server, catalog, scorer, projector)
    register_nutrition_tools(server, aggregator)
    register_engagement_tools(server, catalog)
    logger.info("Scoring tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
