"""
Common utility helper functions.

This module provides small reusable functions for rounding, clamping,
substring marker matching, and threshold lookups used by the analysis
services.
"""

import math
import logging
from typing import Iterable, List, Sequence, Tuple

# Configure logging
logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """
    Round a number to the nearest integer, with halves rounded up.

    Python's built-in round() uses banker's rounding (round(2.5) == 2).
    Scores are rounded the conventional way instead so that, for example,
    a 5-point preservative at the 0.5 low-risk multiplier costs 3 points.

    Args:
        value: Number to round

    Returns:
        int: Rounded integer

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(0.5)
        1
    """
    return int(math.floor(value + 0.5))


def clamp_score(score: float, min_val: float = 0, max_val: float = 100) -> float:
    """
    Clamp a score into the [min_val, max_val] range.

    Args:
        score: Raw score
        min_val: Lower bound (default: 0)
        max_val: Upper bound (default: 100)

    Returns:
        float: Clamped score (type of the input is preserved for ints)
    """
    return max(min_val, min(max_val, score))


def join_ingredients(ingredients: Iterable[str]) -> str:
    """Join ingredients with single spaces for marker substring checks."""
    return " ".join(ingredients)


def find_substring_matches(text: str, keywords: Sequence[str]) -> List[str]:
    """
    Return the keywords that occur in text, in keyword order.

    Matching is case-insensitive plain substring containment; there is no
    word-boundary logic, so "corn syrup" matches "high fructose corn syrup".

    Args:
        text: Text to scan (any case)
        keywords: Keywords to look for

    Returns:
        List[str]: Matched keywords, in the order they were given
    """
    haystack = text.lower()
    return [keyword for keyword in keywords if keyword.lower() in haystack]


def label_for_score(
    score: float,
    thresholds: Sequence[Tuple[float, str]],
    fallback: str
) -> str:
    """
    Map a score onto a label using descending (threshold, label) pairs.

    The first pair whose threshold the score reaches wins; scores below
    every threshold get the fallback label.

    Example:
        >>> label_for_score(60, [(75, "low"), (50, "moderate")], "high")
        "moderate"
    """
    for threshold, label in thresholds:
        if score >= threshold:
            return label
    return fallback
