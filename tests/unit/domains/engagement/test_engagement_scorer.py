"""Tests for category-weighted engagement scoring."""

from __future__ import annotations

from nutriscan.domains.engagement.domain_logic.engagement_scorer import (
    EngagementPattern,
    advise_low_engagement,
    score_engagement,
)


def test_authentication_only_sits_at_half():
    summary = score_engagement([EngagementPattern("Authentication", 10)])
    assert summary.score == 50
    assert summary.total_interactions == 10


def test_weighted_mix():
    summary = score_engagement([
        EngagementPattern("Authentication", 10),
        EngagementPattern("Profile", 10),
    ])
    assert summary.score == 75


def test_score_is_capped():
    summary = score_engagement([EngagementPattern("HealthGoals", 40)])
    assert summary.score == 100


def test_rounds_half_up():
    # (1 x 0.5 + 2 x 1.0) / 3 = 0.8333
    summary = score_engagement([
        EngagementPattern("Authentication", 1),
        EngagementPattern("Profile", 2),
    ])
    assert summary.score == 83


def test_no_interactions_scores_zero():
    assert score_engagement([]).score == 0
    assert score_engagement([EngagementPattern("Nutrition", 0)]).score == 0


def test_unknown_category_uses_neutral_weight():
    assert score_engagement([EngagementPattern("Marketplace", 5)]).score == 100


def test_low_engagement_categories():
    summary = score_engagement([
        EngagementPattern("Nutrition", 25),
        EngagementPattern("Community", 3),
        EngagementPattern("Rewards", 9),
    ])
    assert summary.low_engagement_categories == ("Community", "Rewards")


def test_custom_weights():
    summary = score_engagement(
        [EngagementPattern("Nutrition", 4)],
        weights={"Nutrition": 0.25},
    )
    assert summary.score == 25


def test_advice_for_low_categories():
    advice = advise_low_engagement(
        ["Community", "Rewards"],
        feature_suggestions={"Community": ["Social Challenges"], "Nutrition": ["Meal Plans"]},
        motivational_tips={"Community": ["Together, we are stronger."]},
    )
    assert advice.suggested_features == {"Community": ("Social Challenges",), "Rewards": ()}
    assert advice.motivational_tips == {
        "Community": ("Together, we are stronger.",),
        "Rewards": (),
    }


def test_no_low_categories_means_no_advice():
    advice = advise_low_engagement([], {"Community": ["Social Challenges"]}, {})
    assert advice.suggested_features == {}
    assert advice.motivational_tips == {}


def test_bundled_advice(bundled_catalog):
    summary = score_engagement([
        EngagementPattern("Nutrition", 4),
        EngagementPattern("Fitness", 30),
    ])
    advice = advise_low_engagement(
        summary.low_engagement_categories,
        bundled_catalog.feature_suggestions,
        bundled_catalog.motivational_tips,
    )
    assert list(advice.suggested_features) == ["Nutrition"]
    assert "Meal Plan Generator" in advice.suggested_features["Nutrition"]
    assert len(advice.motivational_tips["Nutrition"]) == 2
