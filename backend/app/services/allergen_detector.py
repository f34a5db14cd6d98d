"""
Allergen detection service.

This module identifies common food allergens in ingredient-list text using
keyword matching against a fixed allergen table. Every allergen group is
reported on each analysis, detected or not, so the UI can state "not
detected" explicitly.

The table covers the major allergen groups:
1. Wheat/Gluten
2. Milk/Dairy
3. Soy
4. Egg
5. Tree Nuts
6. Peanut
7. Fish
8. Shellfish
9. Sesame
10. Sulfites

Note: matching is plain case-insensitive substring containment over the raw
text (no word boundaries), trading precision for recall. "buckwheat" is
reported as wheat; that is accepted for a label-screening tool.
"""

import logging
from typing import Dict, List

from app.models.ingredient import Allergen
from app.utils.constants import ALLERGEN_DATABASE, SEVERITY_LEVELS
from app.utils.helpers import find_substring_matches

# Configure logging
logger = logging.getLogger(__name__)


class AllergenDetector:
    """
    Service class for detecting allergens in ingredient text.

    Attributes:
        allergen_table: Ordered allergen entries (name, keywords, severity)
    """

    def __init__(self):
        """Initialize allergen detector with keyword database."""
        self.allergen_table = ALLERGEN_DATABASE

        logger.info(
            f"AllergenDetector initialized with {len(self.allergen_table)} "
            f"allergen groups"
        )

    def detect_allergens(self, ingredient_text: str) -> List[Allergen]:
        """
        Scan raw ingredient text for every allergen group.

        The raw text is scanned rather than the parsed ingredient list, so
        keywords inside removed parentheses (sub-ingredients) still count.

        Args:
            ingredient_text: Raw ingredient list text (any case)
                Example: "Enriched Flour (Wheat Flour, Niacin), Milk"

        Returns:
            List[Allergen]: One entry per allergen group, in table order.
                            matched_keywords keeps table keyword order.

        Example:
            detector = AllergenDetector()
            for allergen in detector.detect_allergens("wheat flour, milk"):
                if allergen.detected:
                    print(f"Found {allergen.name}: {allergen.matched_keywords}")
        """
        text = ingredient_text or ""
        detections = []

        for entry in self.allergen_table:
            matched_keywords = find_substring_matches(text, entry["keywords"])

            detections.append(
                Allergen(
                    name=entry["name"],
                    keywords=list(entry["keywords"]),
                    detected=bool(matched_keywords),
                    matched_keywords=matched_keywords,
                    severity=entry["severity"],
                )
            )

            if matched_keywords:
                logger.debug(
                    f"Detected {entry['name']} (severity: {entry['severity']}) "
                    f"via {matched_keywords}"
                )

        detected_count = sum(1 for allergen in detections if allergen.detected)
        logger.info(f"Found {detected_count} allergen group(s)")

        return detections

    @staticmethod
    def get_detected_allergens(detections: List[Allergen]) -> List[Allergen]:
        """
        Keep only the allergen groups that were detected.

        Args:
            detections: Output of detect_allergens()

        Returns:
            List[Allergen]: Detected groups, in table order
        """
        return [allergen for allergen in detections if allergen.detected]

    def get_allergen_table(self) -> List[Dict]:
        """
        Get the allergen reference table.

        Returns:
            List[Dict]: Copies of the allergen entries, in table order
        """
        return [
            {
                "name": entry["name"],
                "keywords": list(entry["keywords"]),
                "severity": entry["severity"],
            }
            for entry in self.allergen_table
        ]

    def get_statistics(self) -> Dict:
        """
        Get statistics about the allergen detection system.

        Useful for monitoring and reporting.

        Returns:
            Dict: Statistics about allergen groups and keywords
        """
        total_keywords = sum(len(entry["keywords"]) for entry in self.allergen_table)

        severity_counts = {severity: 0 for severity in SEVERITY_LEVELS}
        for entry in self.allergen_table:
            severity_counts[entry["severity"]] += 1

        return {
            "total_allergen_groups": len(self.allergen_table),
            "total_keywords": total_keywords,
            "severity_distribution": severity_counts,
            "groups": [entry["name"] for entry in self.allergen_table]
        }
