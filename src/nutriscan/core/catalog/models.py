"""Rule catalog container."""

from __future__ import annotations

from dataclasses import dataclass, field

from nutriscan.domains.health.domain_logic.nutrition_models import (
    GoalAlignmentRule,
    MicronutrientReference,
    NutritionRiskRule,
    RecommendationRule,
)
from nutriscan.domains.health.domain_logic.risk_models import ConditionRule, RiskCategory


@dataclass
class RuleCatalog:
    """All rule data the engines consume, as loaded from YAML."""

    condition_rules: list[ConditionRule] = field(default_factory=list)
    nutrition_risk_rules: list[NutritionRiskRule] = field(default_factory=list)
    recommendation_rules: list[RecommendationRule] = field(default_factory=list)
    goal_alignment_rules: list[GoalAlignmentRule] = field(default_factory=list)
    category_advice: dict[RiskCategory, list[str]] = field(default_factory=dict)
    micronutrient_references: list[MicronutrientReference] = field(default_factory=list)
    # Engagement category -> advice for users who rarely use it
    feature_suggestions: dict[str, list[str]] = field(default_factory=dict)
    motivational_tips: dict[str, list[str]] = field(default_factory=dict)

    def merge(self, other: RuleCatalog) -> None:
        """Append another catalog's rules after this one's.

        A category or micronutrient defined twice is a configuration error.
        """
        duplicate_categories = self.category_advice.keys() & other.category_advice.keys()
        if duplicate_categories:
            names = sorted(c.value for c in duplicate_categories)
            raise ValueError(f"Category advice defined more than once: {names}")

        known = {ref.name for ref in self.micronutrient_references}
        duplicate_refs = sorted(known & {ref.name for ref in other.micronutrient_references})
        if duplicate_refs:
            raise ValueError(f"Micronutrient reference defined more than once: {duplicate_refs}")

        for section in ("feature_suggestions", "motivational_tips"):
            duplicates = sorted(getattr(self, section).keys() & getattr(other, section).keys())
            if duplicates:
                raise ValueError(f"Engagement {section} defined more than once: {duplicates}")

        self.condition_rules.extend(other.condition_rules)
        self.nutrition_risk_rules.extend(other.nutrition_risk_rules)
        self.recommendation_rules.extend(other.recommendation_rules)
        self.goal_alignment_rules.extend(other.goal_alignment_rules)
        self.category_advice.update(other.category_advice)
        self.micronutrient_references.extend(other.micronutrient_references)
        self.feature_suggestions.update(other.feature_suggestions)
        self.motivational_tips.update(other.motivational_tips)
