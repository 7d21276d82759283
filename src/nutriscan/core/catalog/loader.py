"""Rule catalog loader: reads YAML rule definitions from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from nutriscan.core.catalog.models import RuleCatalog
from nutriscan.domains.health.domain_logic.nutrition_models import (
    GoalAlignmentRule,
    GoalAlignmentStatus,
    MetricCondition,
    MicronutrientKind,
    MicronutrientReference,
    NutritionRiskRule,
    RecommendationRule,
)
from nutriscan.domains.health.domain_logic.risk_models import (
    ConditionRule,
    RecommendedAction,
    RiskCategory,
    RiskThresholds,
)

logger = logging.getLogger(__name__)

# Catalogs shipped with the package, one directory per domain
_DOMAINS_DIR = Path(__file__).resolve().parent.parent.parent / "domains"
BUNDLED_CATALOG_DIRS = (
    _DOMAINS_DIR / "health" / "catalogs",
    _DOMAINS_DIR / "engagement" / "catalogs",
)


class CatalogError(ValueError):
    """Raised when a catalog file cannot be parsed into rules."""


def load_catalog_directory(directory: str | Path) -> RuleCatalog:
    """Load and merge every YAML catalog in a directory (recursively).

    Files are read in sorted path order, so rule order within the merged
    catalog is deterministic. Skips files starting with underscore.
    """
    directory = Path(directory)
    catalog = RuleCatalog()
    if not directory.is_dir():
        logger.warning("Catalog directory does not exist: %s", directory)
        return catalog

    for path in sorted(directory.rglob("*.yaml")):
        if path.name.startswith("_"):
            continue
        part = load_catalog_file(path)
        try:
            catalog.merge(part)
        except ValueError as exc:
            raise CatalogError(f"{path}: {exc}") from exc
        logger.info(
            "Loaded catalog %s: %d condition rules, %d nutrition risk rules, "
            "%d recommendation rules",
            path.name,
            len(part.condition_rules),
            len(part.nutrition_risk_rules),
            len(part.recommendation_rules),
        )
    return catalog


def load_bundled_catalog() -> RuleCatalog:
    """Merge the catalogs shipped with every domain package."""
    catalog = RuleCatalog()
    for directory in BUNDLED_CATALOG_DIRS:
        part = load_catalog_directory(directory)
        try:
            catalog.merge(part)
        except ValueError as exc:
            raise CatalogError(f"{directory}: {exc}") from exc
    return catalog


def load_catalog_file(path: Path) -> RuleCatalog:
    """Parse one YAML file into a RuleCatalog."""
    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    try:
        return RuleCatalog(
            condition_rules=[_condition_rule(d) for d in data.get("condition_rules", [])],
            nutrition_risk_rules=[
                _nutrition_risk_rule(d) for d in data.get("nutrition_risk_rules", [])
            ],
            recommendation_rules=[
                _recommendation_rule(d) for d in data.get("recommendation_rules", [])
            ],
            goal_alignment_rules=[
                _goal_alignment_rule(d) for d in data.get("goal_alignment_rules", [])
            ],
            category_advice={
                RiskCategory(name): list(advice)
                for name, advice in (data.get("category_recommendations") or {}).items()
            },
            micronutrient_references=[
                MicronutrientReference(
                    name=d["name"],
                    kind=MicronutrientKind(d["kind"]),
                    recommended_value=float(d["recommended_value"]),
                )
                for d in data.get("micronutrient_references", [])
            ],
            feature_suggestions=_advice_map(data.get("engagement_feature_suggestions")),
            motivational_tips=_advice_map(data.get("engagement_motivational_tips")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Invalid catalog {path}: {exc!r}") from exc


def _condition(data: dict[str, Any]) -> MetricCondition:
    return MetricCondition(
        metric=data["metric"],
        comparison=data["comparison"],
        threshold=float(data["threshold"]),
    )


def _condition_rule(data: dict[str, Any]) -> ConditionRule:
    thresholds = data["thresholds"]
    return ConditionRule(
        condition=data["condition"],
        thresholds=RiskThresholds(
            low=float(thresholds["low"]),
            moderate=float(thresholds["moderate"]),
            high=float(thresholds["high"]),
        ),
        recommended_actions=tuple(
            RecommendedAction(
                type=a["type"],
                description=a["description"],
                priority=int(a.get("priority", 0)),
            )
            for a in data.get("recommended_actions", [])
        ),
    )


def _nutrition_risk_rule(data: dict[str, Any]) -> NutritionRiskRule:
    return NutritionRiskRule(
        condition=_condition(data["when"]),
        risk_type=data["type"],
        severity=data["severity"],
        details=data.get("details", ""),
        recommended_actions=tuple(data.get("recommended_actions", [])),
    )


def _recommendation_rule(data: dict[str, Any]) -> RecommendationRule:
    return RecommendationRule(
        condition=_condition(data["when"]),
        category=data["category"],
        recommendation=data["recommendation"],
        rationale=data.get("rationale", ""),
        confidence_score=float(data.get("confidence_score", 0.0)),
    )


def _goal_alignment_rule(data: dict[str, Any]) -> GoalAlignmentRule:
    return GoalAlignmentRule(
        goal_type=data["goal"],
        condition=_condition(data["when"]),
        alignment=GoalAlignmentStatus(data["alignment"]),
        adjustment=data["adjustment"],
    )


def _advice_map(data: dict[str, Any] | None) -> dict[str, list[str]]:
    return {
        str(category): [str(item) for item in items]
        for category, items in (data or {}).items()
    }
