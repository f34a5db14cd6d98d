"""
Food additive detection service.

This module identifies preservatives, colors, flavor enhancers, sweeteners,
emulsifiers, stabilizers, and antioxidants in ingredient-list text using the
same keyword matching as the allergen detector, against a fixed additive
table with risk tiers.

Unlike allergen detection, only additives that were actually found are
returned.
"""

import logging
from typing import List, Optional

from app.models.ingredient import Additive, AdditiveEntry, AdditiveSummary
from app.utils.constants import ADDITIVE_DATABASE, SEVERITY_LEVELS
from app.utils.helpers import find_substring_matches

# Configure logging
logger = logging.getLogger(__name__)


class AdditiveDetector:
    """
    Service class for detecting food additives in ingredient text.

    Attributes:
        additive_table: Ordered additive entries (name, type, risk, keywords)
    """

    def __init__(self):
        """Initialize additive detector with keyword database."""
        self.additive_table = ADDITIVE_DATABASE

        logger.info(
            f"AdditiveDetector initialized with {len(self.additive_table)} additives"
        )

    def detect_additives(self, ingredient_text: str) -> List[Additive]:
        """
        Scan raw ingredient text for known additives.

        Args:
            ingredient_text: Raw ingredient list text (any case)
                Example: "Sugar, Red 40, Sodium Benzoate (Preservative)"

        Returns:
            List[Additive]: Matched additives in table order. Additives with
                            no matching keyword are omitted.
        """
        text = ingredient_text or ""
        additives = []

        for entry in self.additive_table:
            matched_keywords = find_substring_matches(text, entry["keywords"])
            if not matched_keywords:
                continue

            additives.append(
                Additive(
                    name=entry["name"],
                    type=entry["type"],
                    risk_level=entry["risk_level"],
                    description=entry["description"],
                    matched_keywords=matched_keywords,
                )
            )

            logger.debug(
                f"Detected {entry['name']} ({entry['type']}, "
                f"{entry['risk_level']} risk) via {matched_keywords}"
            )

        logger.info(f"Found {len(additives)} additive(s)")

        return additives

    @staticmethod
    def get_additive_summary(additives: List[Additive]) -> AdditiveSummary:
        """
        Count additive detections by type and by risk tier.

        Args:
            additives: Output of detect_additives()

        Returns:
            AdditiveSummary: by_type holds only the categories present;
                             by_risk always holds high/medium/low.
        """
        by_type = {}
        by_risk = {level: 0 for level in SEVERITY_LEVELS}

        for additive in additives:
            by_type[additive.type] = by_type.get(additive.type, 0) + 1
            by_risk[additive.risk_level] = by_risk.get(additive.risk_level, 0) + 1

        return AdditiveSummary(by_type=by_type, by_risk=by_risk, total=len(additives))

    def list_additives(
        self,
        search: Optional[str] = None,
        additive_type: Optional[str] = None,
        risk_level: Optional[str] = None
    ) -> List[AdditiveEntry]:
        """
        Browse the additive reference table.

        Args:
            search: Case-insensitive text matched against name and description
            additive_type: Only additives of this category
            risk_level: Only additives of this risk tier

        Returns:
            List[AdditiveEntry]: Matching entries, in table order
        """
        query = (search or "").strip().lower()
        entries = []

        for entry in self.additive_table:
            if additive_type and entry["type"] != additive_type.lower():
                continue
            if risk_level and entry["risk_level"] != risk_level.lower():
                continue
            if query and query not in entry["name"].lower() \
                    and query not in entry["description"].lower():
                continue

            entries.append(
                AdditiveEntry(
                    name=entry["name"],
                    type=entry["type"],
                    risk_level=entry["risk_level"],
                    description=entry["description"],
                    keywords=list(entry["keywords"]),
                )
            )

        return entries
