"""Tests for the weighted health risk scorer."""

import pytest

from app.models.ingredient import Additive, ScoringWeights
from app.services.health_risk_scorer import HealthRiskScorer


def make_additive(name, additive_type, risk_level):
    return Additive(
        name=name,
        type=additive_type,
        risk_level=risk_level,
        description="",
        matched_keywords=[name.lower()],
    )


def test_empty_inputs(scorer):
    breakdown = scorer.calculate_health_risk([], [], ScoringWeights())
    assert breakdown.score == 100
    assert breakdown.risk_level == "low"
    assert breakdown.factors == []
    assert breakdown.additive_count == 0


def test_long_list_one_band(scorer):
    ingredients = [f"item {i}" for i in range(20)]
    breakdown = scorer.calculate_health_risk(ingredients, [])
    assert breakdown.score == 97
    assert breakdown.risk_level == "low"
    assert len(breakdown.factors) == 1
    factor = breakdown.factors[0]
    assert factor.ingredient == "20 ingredients"
    assert factor.points == -3
    assert factor.impact == "caution"


def test_long_list_factor_recorded_with_zero_bands(scorer):
    breakdown = scorer.calculate_health_risk([f"item {i}" for i in range(16)], [])
    assert breakdown.score == 100
    assert [(f.ingredient, f.points) for f in breakdown.factors] == [("16 ingredients", 0)]


def test_long_list_bands_capped(scorer):
    breakdown = scorer.calculate_health_risk([f"item {i}" for i in range(60)], [])
    assert breakdown.score == 91


def test_additive_penalties_and_impacts(scorer, additive_detector, processor):
    text = "Wheat Flour, Sugar, Palm Oil, Red 40, Sodium Benzoate"
    breakdown = scorer.calculate_health_risk(
        processor.parse_ingredients(text),
        additive_detector.detect_additives(text),
    )
    # color high: 4 x 2.0 = 8, preservative medium: 5 x 1.0 = 5,
    # "oat" inside "sodium benzoate": +2
    assert breakdown.score == 89
    assert breakdown.additive_count == 2
    assert [(f.ingredient, f.points, f.impact, f.reason) for f in breakdown.factors] == [
        ("Allura Red (Red 40)", -8, "negative", "color (high risk)"),
        ("Sodium Benzoate", -5, "caution", "preservative (medium risk)"),
        ("oat", 2, "positive", "Whole/natural ingredient"),
    ]


def test_whole_food_marker_matches_inside_other_words(scorer):
    breakdown = scorer.calculate_health_risk(["sodium benzoate"], [])
    assert breakdown.score == 100
    assert [(f.ingredient, f.points, f.impact) for f in breakdown.factors] == [
        ("oat", 2, "positive"),
    ]


def test_low_risk_multiplier_rounds_half_up(scorer):
    additives = [
        make_additive("Potassium Sorbate", "preservative", "low"),  # 5 x 0.5 = 2.5 -> 3
        make_additive("Xanthan Gum", "stabilizer", "low"),  # 1 x 0.5 = 0.5 -> 1
    ]
    breakdown = scorer.calculate_health_risk([], additives)
    assert [f.points for f in breakdown.factors] == [-3, -1]
    assert all(f.impact == "neutral" for f in breakdown.factors)
    assert breakdown.score == 96


def test_unknown_additive_type_uses_fallback_weight(scorer):
    breakdown = scorer.calculate_health_risk([], [make_additive("Mystery", "thickener", "medium")])
    assert breakdown.factors[0].points == -2


def test_zero_category_weight_uses_fallback_weight(scorer):
    additive = make_additive("Allura Red (Red 40)", "color", "high")
    breakdown = scorer.calculate_health_risk([], [additive], ScoringWeights(color=0))
    assert breakdown.factors[0].points == -4
    assert breakdown.score == 96


def test_whole_food_bonus_per_marker(scorer):
    ingredients = ["organic whole wheat", "honey", "sea salt"]
    breakdown = scorer.calculate_health_risk(ingredients, [])
    assert breakdown.score == 100
    assert [(f.ingredient, f.points, f.impact) for f in breakdown.factors] == [
        ("organic", 2, "positive"),
        ("whole", 2, "positive"),
        ("honey", 2, "positive"),
    ]


def test_factors_sorted_most_negative_first(scorer):
    additives = [
        make_additive("Guar Gum", "stabilizer", "low"),
        make_additive("Sodium Nitrite", "preservative", "high"),
        make_additive("MSG", "flavor", "medium"),
    ]
    breakdown = scorer.calculate_health_risk(["rolled oats", "sodium nitrite"], additives)
    assert [f.points for f in breakdown.factors] == [-10, -3, -1, 2]
    assert breakdown.factors[-1].ingredient == "oat"


def test_custom_weights(scorer):
    additive = make_additive("Allura Red (Red 40)", "color", "high")
    weights = ScoringWeights(**{"color": 10, "highRiskMultiplier": 3})
    breakdown = scorer.calculate_health_risk([], [additive], weights)
    assert breakdown.factors[0].points == -30
    assert breakdown.score == 70
    assert breakdown.risk_level == "moderate"


def test_default_weights_from_constructor():
    scorer = HealthRiskScorer(ScoringWeights(whole_ingredient_bonus=5))
    assert scorer.calculate_health_risk(["honey"], []).factors[0].points == 5


def test_score_clamped_at_zero(scorer):
    additives = [make_additive(f"Color {i}", "color", "high") for i in range(20)]
    breakdown = scorer.calculate_health_risk([], additives)
    assert breakdown.score == 0
    assert breakdown.risk_level == "very-high"


@pytest.mark.parametrize("score,level", [
    (100, "low"),
    (75, "low"),
    (74, "moderate"),
    (50, "moderate"),
    (49, "high"),
    (25, "high"),
    (24, "very-high"),
    (0, "very-high"),
])
def test_risk_level_thresholds(scorer, score, level):
    assert scorer.assign_risk_level(score) == level


def test_risk_levels_monotonic(scorer):
    order = ["very-high", "high", "moderate", "low"]
    ranks = [order.index(scorer.assign_risk_level(score)) for score in range(101)]
    assert ranks == sorted(ranks)
