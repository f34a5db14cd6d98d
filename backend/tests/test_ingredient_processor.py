"""Tests for ingredient parsing, statistics, and the clean label score."""

import pytest

from app.utils.constants import NEGATIVE_MARKERS


def test_parse_basic_label(processor):
    assert processor.parse_ingredients("Wheat Flour, Sugar, Palm Oil, Red 40, Sodium Benzoate") == [
        "wheat flour", "sugar", "palm oil", "red 40", "sodium benzoate"
    ]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_parse_empty_text(processor, text):
    assert processor.parse_ingredients(text) == []


def test_parse_removes_parentheses_and_brackets(processor):
    text = "Sugar, Enriched Flour (Wheat Flour, Niacin), Salt; Cocoa [Processed with Alkali]"
    assert processor.parse_ingredients(text) == ["sugar", "enriched flour", "salt", "cocoa"]


def test_parse_nested_parentheses_single_pass(processor):
    # The inner ")" closes the first match; the tail of the outer span survives
    assert processor.parse_ingredients("Chocolate (Sugar (Cane), Cocoa), Milk") == [
        "chocolate", "cocoa", "milk"
    ]


def test_parse_strips_punctuation(processor):
    assert processor.parse_ingredients("Vitamin B12*, Natural Flavors., Baker's Yeast, Semi-Sweet Chips!") == [
        "vitamin b12", "natural flavors", "baker's yeast", "semi-sweet chips"
    ]


def test_parse_drops_short_and_empty_fragments(processor):
    assert processor.parse_ingredients("A, Salt, , %!, B") == ["salt"]


def test_parse_deduplicates_keeping_first_seen_order(processor):
    assert processor.parse_ingredients("Salt, sugar, SALT, Water, Sugar") == ["salt", "sugar", "water"]


def test_parse_is_idempotent(processor):
    text = "Sugar, Enriched Flour (Wheat Flour, Niacin); Salt, Cocoa [Alkali], Soy Lecithin, salt"
    first = processor.parse_ingredients(text)
    second = processor.parse_ingredients(", ".join(first))
    assert set(second) == set(first)


def test_stats_empty(processor):
    assert processor.calculate_ingredient_stats([]) == []


def test_stats_counts_and_percentages(processor):
    stats = processor.calculate_ingredient_stats(["salt", "sugar", "salt", "flour", "sugar", "salt"])
    assert [(s.name, s.count, s.percentage) for s in stats] == [
        ("salt", 3, 50),
        ("sugar", 2, 33),
        ("flour", 1, 17),
    ]


def test_stats_ties_keep_first_seen_order(processor):
    stats = processor.calculate_ingredient_stats(["b", "a", "b", "a", "c"])
    assert [s.name for s in stats] == ["b", "a", "c"]
    assert [s.percentage for s in stats] == [40, 40, 20]


def test_stats_percentage_rounds_half_up(processor):
    stats = processor.calculate_ingredient_stats(list("abcdefgh"))
    assert all(s.percentage == 13 for s in stats)


def test_clean_label_empty_is_zero(processor):
    assert processor.calculate_clean_label_score([]) == 0


def test_clean_label_whole_food_short_list(processor):
    ingredients = processor.parse_ingredients("Organic Whole Wheat, Honey, Sea Salt")
    # 70 base + 2 positive markers x 3 + 10 short-list bonus
    assert processor.calculate_clean_label_score(ingredients) == 86


def test_clean_label_negative_markers(processor):
    ingredients = processor.parse_ingredients("Wheat Flour, Sugar, Palm Oil, Red 40, Sodium Benzoate")
    # 70 - 2 x 5 + 10
    assert processor.calculate_clean_label_score(ingredients) == 70


def test_clean_label_substring_marker(processor):
    # "high fructose" matches inside "high fructose corn syrup"
    assert processor.calculate_clean_label_score(["high fructose corn syrup"]) == 75


def test_clean_label_long_list_penalties(processor):
    medium = [f"item {i}" for i in range(20)]
    long = [f"item {i}" for i in range(30)]
    middle = [f"item {i}" for i in range(10)]
    assert processor.calculate_clean_label_score(middle) == 70
    assert processor.calculate_clean_label_score(medium) == 65
    assert processor.calculate_clean_label_score(long) == 60


def test_clean_label_clamped_low(processor):
    assert processor.calculate_clean_label_score(list(NEGATIVE_MARKERS)) == 0


def test_clean_label_clamped_high(processor):
    ingredients = [
        "organic whole vitamin mineral iron",
        "calcium fiber probiotic natural fresh unprocessed",
    ]
    assert processor.calculate_clean_label_score(ingredients) == 100


@pytest.mark.parametrize("score,rating", [
    (100, "Excellent"),
    (80, "Excellent"),
    (79, "Good"),
    (65, "Good"),
    (50, "Fair"),
    (35, "Poor"),
    (34, "Very Poor"),
    (0, "Very Poor"),
])
def test_clean_label_rating(processor, score, rating):
    assert processor.get_clean_label_rating(score) == rating
