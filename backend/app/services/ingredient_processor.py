"""
Ingredient text processing service.

This module turns free-form ingredient-list text, as printed on a product
label, into a clean list of normalized ingredient names. It also computes
ingredient frequency statistics and a heuristic "clean label" score.

Normalization rules (applied to the whole text before splitting):
1. Sub-ingredient spans in parentheses are removed
2. Bracketed spans are removed
3. Semicolons are treated as commas
4. Fragments are trimmed, lowercased, and stripped of punctuation

Note: parentheses and brackets are removed in a single non-greedy pass, so
nested spans such as "(a (b) c)" leave a trailing " c)" fragment behind.
Existing outputs depend on this, so it is kept as is.
"""

import logging
import re
from typing import Dict, List

from app.models.ingredient import IngredientStat
from app.utils.constants import (
    NEGATIVE_MARKERS,
    POSITIVE_MARKERS,
    CLEAN_LABEL_BASE_SCORE,
    CLEAN_LABEL_NEGATIVE_POINTS,
    CLEAN_LABEL_POSITIVE_POINTS,
    CLEAN_LABEL_SHORT_LIST_BONUS,
    CLEAN_LABEL_LONG_LIST_PENALTY,
    SHORT_LIST_MAX,
    LONG_LIST_THRESHOLD,
    VERY_LONG_LIST_THRESHOLD,
    CLEAN_LABEL_RATINGS,
    CLEAN_LABEL_LOWEST_RATING,
)
from app.utils.helpers import (
    clamp_score,
    find_substring_matches,
    join_ingredients,
    label_for_score,
    round_half_up,
)

# Configure logging
logger = logging.getLogger(__name__)

_PARENTHESES_PATTERN = re.compile(r'\([^)]*\)')
_BRACKETS_PATTERN = re.compile(r'\[[^\]]*\]')
_DISALLOWED_CHARS_PATTERN = re.compile(r"[^a-z0-9\s\-']")


class IngredientProcessor:
    """
    Service class for parsing and summarizing ingredient lists.

    Stateless apart from the fixed marker lists; a single instance can be
    shared across requests.

    Attributes:
        negative_markers: Artificial/additive terms that lower the clean label score
        positive_markers: Whole/nutritive terms that raise the clean label score
    """

    def __init__(self):
        """Initialize the processor with the clean label marker lists."""
        self.negative_markers = NEGATIVE_MARKERS
        self.positive_markers = POSITIVE_MARKERS

        logger.info(
            f"IngredientProcessor initialized with {len(self.negative_markers)} "
            f"negative and {len(self.positive_markers)} positive markers"
        )

    def parse_ingredients(self, raw_text: str) -> List[str]:
        """
        Parse raw ingredient-list text into normalized ingredient names.

        Args:
            raw_text: Ingredient list as printed on a label
                Example: "Sugar, Enriched Flour (Wheat Flour, Niacin); Salt"

        Returns:
            List[str]: Distinct normalized ingredients in first-seen order.
                       Empty list for empty or whitespace-only text.

        Example:
            processor = IngredientProcessor()
            processor.parse_ingredients("Sugar, Enriched Flour (Wheat Flour, Niacin); Salt")
            # Returns: ["sugar", "enriched flour", "salt"]
        """
        if not raw_text or not raw_text.strip():
            return []

        # Remove sub-ingredients in parentheses, then bracketed spans
        cleaned = _PARENTHESES_PATTERN.sub('', raw_text)
        cleaned = _BRACKETS_PATTERN.sub('', cleaned)

        # Normalize separators
        cleaned = cleaned.replace(';', ',')

        ingredients = []
        for fragment in cleaned.split(','):
            fragment = fragment.strip().lower()
            if len(fragment) <= 1:
                continue

            fragment = _DISALLOWED_CHARS_PATTERN.sub('', fragment).strip()
            if fragment:
                ingredients.append(fragment)

        # dict keeps first-seen order while dropping duplicates
        unique = list(dict.fromkeys(ingredients))

        logger.debug(
            f"Parsed {len(unique)} unique ingredient(s) "
            f"from {len(ingredients)} fragment(s)"
        )

        return unique

    def calculate_ingredient_stats(self, ingredients: List[str]) -> List[IngredientStat]:
        """
        Count occurrences of each ingredient.

        Percentages are shares of the total list length, rounded half up.
        Results are ordered by count (highest first); equal counts keep the
        order in which the ingredients were first seen.

        Args:
            ingredients: Ingredient names (duplicates allowed)

        Returns:
            List[IngredientStat]: One stat per distinct ingredient.
                                  Empty list for empty input.
        """
        total = len(ingredients)
        if total == 0:
            return []

        frequency: Dict[str, int] = {}
        for ingredient in ingredients:
            frequency[ingredient] = frequency.get(ingredient, 0) + 1

        stats = [
            IngredientStat(
                name=name,
                count=count,
                percentage=round_half_up(count / total * 100)
            )
            for name, count in frequency.items()
        ]

        # sorted() is stable, so ties stay in first-seen order
        return sorted(stats, key=lambda stat: stat.count, reverse=True)

    def calculate_clean_label_score(self, ingredients: List[str]) -> int:
        """
        Calculate the clean label score of an ingredient list.

        Scoring rules (base 70):
        - Each negative marker found in the list: -5
        - Each positive marker found in the list: +3
        - More than 15 ingredients: -5, more than 25: another -5
        - 5 ingredients or fewer: +10

        Markers are matched as plain substrings of the space-joined list, so
        "high fructose" also matches "high fructose corn syrup".

        Args:
            ingredients: Normalized ingredient names

        Returns:
            int: Score clamped to 0-100. An empty list scores 0.
        """
        if not ingredients:
            return 0

        joined_text = join_ingredients(ingredients)
        count = len(ingredients)

        negative_hits = find_substring_matches(joined_text, self.negative_markers)
        positive_hits = find_substring_matches(joined_text, self.positive_markers)

        score = CLEAN_LABEL_BASE_SCORE
        score -= CLEAN_LABEL_NEGATIVE_POINTS * len(negative_hits)
        score += CLEAN_LABEL_POSITIVE_POINTS * len(positive_hits)

        # Penalty for very long ingredient lists (processed food indicator)
        if count > LONG_LIST_THRESHOLD:
            score -= CLEAN_LABEL_LONG_LIST_PENALTY
        if count > VERY_LONG_LIST_THRESHOLD:
            score -= CLEAN_LABEL_LONG_LIST_PENALTY

        # Bonus for short lists
        if count <= SHORT_LIST_MAX:
            score += CLEAN_LABEL_SHORT_LIST_BONUS

        final_score = clamp_score(score)

        logger.debug(
            f"Clean label score {final_score} "
            f"(negative: {negative_hits}, positive: {positive_hits}, count: {count})"
        )

        return final_score

    @staticmethod
    def get_clean_label_rating(score: float) -> str:
        """
        Map a clean label score to its display rating.

        Returns:
            str: "Excellent" (>=80), "Good" (>=65), "Fair" (>=50),
                 "Poor" (>=35), otherwise "Very Poor"
        """
        return label_for_score(score, CLEAN_LABEL_RATINGS, CLEAN_LABEL_LOWEST_RATING)
