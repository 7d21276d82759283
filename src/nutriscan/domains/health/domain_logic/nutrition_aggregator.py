"""Nutrition insights aggregation.

Rolls a window of nutrition entries up into averages, a calorie-weighted
macronutrient split and micronutrient status, then runs the caller's
risk, recommendation and goal-alignment rules against the result.
With enough entries it also projects each macro one entry ahead.
"""

from __future__ import annotations

import dataclasses
import logging
import statistics
from collections.abc import Iterable, Sequence

from nutriscan.domains.health.domain_logic.exceptions import EmptyEntrySetError
from nutriscan.domains.health.domain_logic.numeric import round_half_up
from nutriscan.domains.health.domain_logic.nutrition_models import (
    CARB_KCAL_PER_G,
    FAT_KCAL_PER_G,
    MICRONUTRIENT_LEVEL_BANDS,
    MIN_TREND_ENTRIES,
    PROTEIN_KCAL_PER_G,
    GoalAlignment,
    GoalAlignmentRule,
    GoalAlignmentStatus,
    MacronutrientBalance,
    MacroTrend,
    MicronutrientLevel,
    MicronutrientReference,
    MicronutrientStatus,
    NutrientAverages,
    NutritionEntry,
    NutritionProfile,
    NutritionRecommendation,
    NutritionRisk,
    NutritionRiskRule,
    NutritionTrends,
    RecommendationRule,
)
from nutriscan.domains.health.domain_logic.trend_projector import fit_line

logger = logging.getLogger(__name__)


def average_intake(entries: Sequence[NutritionEntry]) -> NutrientAverages:
    if not entries:
        raise EmptyEntrySetError("Cannot average an empty set of nutrition entries")
    return NutrientAverages(
        calories=statistics.fmean(e.calories for e in entries),
        protein=statistics.fmean(e.protein for e in entries),
        carbohydrates=statistics.fmean(e.carbohydrates for e in entries),
        fat=statistics.fmean(e.fat for e in entries),
        sugar=statistics.fmean(e.sugar for e in entries),
        fiber=statistics.fmean(e.fiber for e in entries),
    )


def macronutrient_balance(entries: Iterable[NutritionEntry]) -> MacronutrientBalance:
    """Percent of macro calories from protein, carbohydrate and fat.

    Grams are summed across all entries first and divided once. Zero macro
    calories yields 0/0/0.
    """
    protein_kcal = carb_kcal = fat_kcal = 0.0
    for entry in entries:
        protein_kcal += entry.protein * PROTEIN_KCAL_PER_G
        carb_kcal += entry.carbohydrates * CARB_KCAL_PER_G
        fat_kcal += entry.fat * FAT_KCAL_PER_G

    total_kcal = protein_kcal + carb_kcal + fat_kcal
    if total_kcal == 0:
        return MacronutrientBalance(protein_percentage=0, carb_percentage=0, fat_percentage=0)

    return MacronutrientBalance(
        protein_percentage=round_half_up(protein_kcal / total_kcal * 100),
        carb_percentage=round_half_up(carb_kcal / total_kcal * 100),
        fat_percentage=round_half_up(fat_kcal / total_kcal * 100),
    )


def micronutrient_level(current: float, recommended: float) -> MicronutrientLevel:
    ratio = current / recommended
    for upper_bound, level in MICRONUTRIENT_LEVEL_BANDS:
        if ratio < upper_bound:
            return level
    return MicronutrientLevel.HIGH


def assess_micronutrients(
    entries: Sequence[NutritionEntry],
    references: Iterable[MicronutrientReference],
) -> list[MicronutrientStatus]:
    """Status for every referenced micronutrient reported by at least one entry.

    Entries that do not report a nutrient count as zero intake for it.
    """
    statuses = []
    for ref in references:
        if not any(ref.name in e.micronutrients for e in entries):
            continue
        current = statistics.fmean(e.micronutrients.get(ref.name, 0.0) for e in entries)
        statuses.append(MicronutrientStatus(
            name=ref.name,
            kind=ref.kind,
            level=micronutrient_level(current, ref.recommended_value),
            current_value=current,
            recommended_value=ref.recommended_value,
        ))
    return statuses


def predict_intake_trends(entries: Sequence[NutritionEntry]) -> NutritionTrends | None:
    """Fit a line per macro over entry order (oldest first) and extend it one step.

    Returns ``None`` for fewer than ``MIN_TREND_ENTRIES`` entries.
    """
    if len(entries) < MIN_TREND_ENTRIES:
        return None

    def _trend(values: Sequence[float]) -> MacroTrend:
        slope, intercept = fit_line(values, start=0)
        return MacroTrend(
            slope=slope,
            intercept=intercept,
            next_value=slope * len(values) + intercept,
        )

    return NutritionTrends(
        calories=_trend([e.calories for e in entries]),
        protein=_trend([e.protein for e in entries]),
        carbohydrates=_trend([e.carbohydrates for e in entries]),
        fat=_trend([e.fat for e in entries]),
    )


class NutritionAggregator:
    """Aggregates nutrition entries against injected rule lists.

    Usage::

        aggregator = NutritionAggregator(risk_rules=catalog.nutrition_risk_rules)
        profile = aggregator.aggregate(entries, goals=["Weight Loss"])
    """

    def __init__(
        self,
        risk_rules: Iterable[NutritionRiskRule] = (),
        recommendation_rules: Iterable[RecommendationRule] = (),
        micronutrient_references: Iterable[MicronutrientReference] = (),
        goal_alignment_rules: Iterable[GoalAlignmentRule] = (),
    ) -> None:
        self._risk_rules = tuple(risk_rules)
        self._recommendation_rules = tuple(recommendation_rules)
        self._references = tuple(micronutrient_references)
        self._goal_rules = tuple(goal_alignment_rules)

    def aggregate(
        self, entries: Sequence[NutritionEntry], goals: Iterable[str] = ()
    ) -> NutritionProfile:
        """Build a full nutrition profile.

        ``goals`` are the subject's active health goal types, e.g. "Weight Loss".

        Raises:
            EmptyEntrySetError: if ``entries`` is empty.
        """
        profile = NutritionProfile(
            entry_count=len(entries),
            average_intake=average_intake(entries),
            macronutrient_balance=macronutrient_balance(entries),
            micronutrient_status=tuple(assess_micronutrients(entries, self._references)),
            predicted_trends=predict_intake_trends(entries),
        )
        return dataclasses.replace(
            profile,
            health_risks=tuple(self.identify_risks(profile)),
            recommendations=tuple(self.recommend(profile)),
            goal_alignment=tuple(self.align_goals(profile, goals)),
        )

    def identify_risks(self, profile: NutritionProfile) -> list[NutritionRisk]:
        risks = []
        for rule in self._risk_rules:
            value = profile.metric(rule.condition.metric)
            if value is None or not rule.condition.holds(value):
                continue
            logger.debug("Nutrition risk %r flagged (%s=%s)", rule.risk_type, rule.condition.metric, value)
            risks.append(NutritionRisk(
                type=rule.risk_type,
                severity=rule.severity,
                details=rule.details,
                recommended_actions=rule.recommended_actions,
            ))
        return risks

    def recommend(self, profile: NutritionProfile) -> list[NutritionRecommendation]:
        recommendations = []
        for rule in self._recommendation_rules:
            value = profile.metric(rule.condition.metric)
            if value is None or not rule.condition.holds(value):
                continue
            recommendations.append(NutritionRecommendation(
                category=rule.category,
                recommendation=rule.recommendation,
                rationale=rule.rationale,
                confidence_score=rule.confidence_score,
            ))
        return recommendations

    def align_goals(
        self, profile: NutritionProfile, goals: Iterable[str]
    ) -> list[GoalAlignment]:
        """Check each active goal against the goal-alignment rules.

        A goal with no firing rule is Neutral; otherwise it takes the worst
        alignment among its firing rules and collects their adjustments.
        """
        alignments = []
        for goal in goals:
            status = GoalAlignmentStatus.NEUTRAL
            adjustments = []
            for rule in self._goal_rules:
                if rule.goal_type != goal:
                    continue
                value = profile.metric(rule.condition.metric)
                if value is None or not rule.condition.holds(value):
                    continue
                if rule.alignment.rank > status.rank:
                    status = rule.alignment
                adjustments.append(rule.adjustment)
            alignments.append(GoalAlignment(
                goal_type=goal,
                alignment=status,
                recommended_adjustments=tuple(adjustments),
            ))
        return alignments
