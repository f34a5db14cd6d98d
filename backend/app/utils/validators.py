"""
Input validation utilities.

This module provides validation functions for user input at the HTTP
boundary. The analysis services themselves accept any string; these checks
only keep oversized or hostile payloads out of the API.
"""

import re
import logging
from typing import List

# Configure logging
logger = logging.getLogger(__name__)


DANGEROUS_PATTERNS: List[str] = [
    r'<script',  # Script tags
    r'javascript:',  # JavaScript protocol
    r'on\w+\s*=',  # Event handlers (onclick, onload, etc)
]


def validate_ingredient_text(text: str, max_length: int = 10000) -> bool:
    """
    Validate raw ingredient-list text.

    Ensures the text:
    - Is not empty or whitespace only
    - Does not exceed the maximum length
    - Does not contain script-injection patterns

    Args:
        text: Ingredient text as pasted from a product label
        max_length: Maximum number of characters allowed

    Returns:
        bool: True if valid

    Raises:
        ValueError: If validation fails with specific error message
    """
    if not text or not text.strip():
        raise ValueError("Ingredient text cannot be empty")

    if len(text) > max_length:
        raise ValueError(
            f"Ingredient text cannot exceed {max_length} characters "
            f"(got {len(text)})"
        )

    for pattern in DANGEROUS_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            raise ValueError("Ingredient text contains invalid characters or patterns")

    logger.debug(f"Ingredient text validated ({len(text)} characters)")
    return True


def validate_ingredient_list(ingredients: List[str], max_items: int = 500) -> bool:
    """
    Validate an already-parsed ingredient list.

    Empty lists are allowed (the scorers handle them); the list size and the
    element types are checked.

    Args:
        ingredients: List of normalized ingredient strings
        max_items: Maximum number of ingredients allowed

    Returns:
        bool: True if valid

    Raises:
        ValueError: If validation fails with specific error message
    """
    if len(ingredients) > max_items:
        raise ValueError(
            "Ingredient list cannot exceed {} items "
            "(got {})".format(max_items, len(ingredients))
        )

    for i, ingredient in enumerate(ingredients):
        if not isinstance(ingredient, str):
            raise ValueError(
                f"Ingredient at index {i} must be a string, "
                f"got {type(ingredient).__name__}"
            )

    logger.debug(f"Ingredient list validated: {len(ingredients)} ingredients")
    return True
