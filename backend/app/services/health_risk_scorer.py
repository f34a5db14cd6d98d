"""
Weighted health risk scoring engine.

This module combines additive detections, ingredient-list length, and
whole-food marker terms into a single 0-100 score (higher is healthier) with
an itemized list of contributing factors.

The scoring system is:
- Transparent: every point change is recorded as a factor
- Configurable: category penalties and multipliers come from ScoringWeights
- Deterministic: same inputs always give the same score and factor order

Score = 100 - additive penalties - long-list penalty + whole-food bonuses,
clamped to 0-100.
"""

import logging
from typing import List, Optional

from app.models.ingredient import (
    Additive,
    HealthRiskBreakdown,
    HealthRiskFactor,
    ScoringWeights,
)
from app.utils.constants import (
    FALLBACK_TYPE_WEIGHT,
    LOW_RISK_MULTIPLIER,
    LONG_LIST_THRESHOLD,
    LONG_LIST_BAND_SIZE,
    LONG_LIST_MAX_BANDS,
    WHOLE_FOOD_MARKERS,
    RISK_LEVEL_THRESHOLDS,
    LOWEST_RISK_LEVEL,
    IMPACT_BY_RISK_LEVEL,
    DEFAULT_IMPACT,
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


class HealthRiskScorer:
    """
    Weighted scoring engine for ingredient health risk.

    Attributes:
        weights: Default ScoringWeights used when a call passes none
        whole_food_markers: Terms that earn the whole-ingredient bonus
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        """
        Initialize the scorer.

        Args:
            weights: Default weights (ScoringWeights() defaults if omitted)
        """
        self.weights = weights or ScoringWeights()
        self.whole_food_markers = WHOLE_FOOD_MARKERS

        logger.info(
            f"HealthRiskScorer initialized with weights: "
            f"{self.weights.model_dump()}"
        )

    def calculate_health_risk(
        self,
        ingredients: List[str],
        additives: List[Additive],
        weights: Optional[ScoringWeights] = None
    ) -> HealthRiskBreakdown:
        """
        Calculate the health risk breakdown of an ingredient list.

        Algorithm:
        1. Each additive costs round(category weight x risk multiplier)
           points (multiplier 2.0 high, 1.0 medium, fixed 0.5 low)
        2. Lists over 15 ingredients cost long_list_penalty per full band
           of 5 extra ingredients, at most 3 bands
        3. Each whole-food marker found earns whole_ingredient_bonus
        4. Score = clamp(100 - penalty + bonus, 0, 100)
        5. Factors are sorted by points, most negative first

        Args:
            ingredients: Normalized ingredient names
            additives: Additive detections for the same text
            weights: Optional per-call weights (overrides the defaults)

        Returns:
            HealthRiskBreakdown: score, risk_level, factors, additive_count

        Example:
            scorer = HealthRiskScorer()
            breakdown = scorer.calculate_health_risk([], [])
            # breakdown.score == 100, breakdown.risk_level == "low"
        """
        weights = weights or self.weights
        factors: List[HealthRiskFactor] = []

        # Step 1: Additive penalties
        penalty = 0
        for additive in additives:
            points = self.score_additive(additive, weights)
            penalty += points

            factors.append(
                HealthRiskFactor(
                    ingredient=additive.name,
                    impact=IMPACT_BY_RISK_LEVEL.get(additive.risk_level, DEFAULT_IMPACT),
                    points=-points,
                    reason=f"{additive.type} ({additive.risk_level} risk)",
                )
            )

        # Step 2: Long ingredient list penalty
        count = len(ingredients)
        if count > LONG_LIST_THRESHOLD:
            points = self.score_list_length(count, weights)
            penalty += points

            factors.append(
                HealthRiskFactor(
                    ingredient=f"{count} ingredients",
                    impact="caution",
                    points=-points,
                    reason="Long ingredient list indicates processing",
                )
            )

        # Step 3: Whole ingredient bonuses
        bonus = 0
        marker_points = round_half_up(weights.whole_ingredient_bonus)
        for marker in find_substring_matches(join_ingredients(ingredients), self.whole_food_markers):
            bonus += marker_points

            factors.append(
                HealthRiskFactor(
                    ingredient=marker,
                    impact="positive",
                    points=marker_points,
                    reason="Whole/natural ingredient",
                )
            )

        # Steps 4-5: Clamp and rank
        score = clamp_score(100 - penalty + bonus)
        risk_level = self.assign_risk_level(score)

        # sorted() is stable: equal points keep insertion order
        factors = sorted(factors, key=lambda factor: factor.points)

        logger.info(
            f"Health risk score: {score} ({risk_level}); "
            f"penalty={penalty}, bonus={bonus}, additives={len(additives)}"
        )

        return HealthRiskBreakdown(
            score=score,
            risk_level=risk_level,
            factors=factors,
            additive_count=len(additives),
        )

    @staticmethod
    def score_additive(additive: Additive, weights: ScoringWeights) -> int:
        """
        Penalty points for a single additive.

        Unknown categories and categories weighted 0 fall back to a base
        of 2. Low-risk (or unknown risk) additives use the fixed 0.5
        multiplier.

        Returns:
            int: Positive number of points to subtract
        """
        base_penalty = weights.weight_for_type(additive.type)
        if not base_penalty:
            base_penalty = FALLBACK_TYPE_WEIGHT

        if additive.risk_level == "high":
            multiplier = weights.high_risk_multiplier
        elif additive.risk_level == "medium":
            multiplier = weights.medium_risk_multiplier
        else:
            multiplier = LOW_RISK_MULTIPLIER

        return round_half_up(base_penalty * multiplier)

    @staticmethod
    def score_list_length(count: int, weights: ScoringWeights) -> int:
        """
        Penalty points for a long ingredient list.

        One band per full 5 ingredients beyond 15, capped at 3 bands:
        20 ingredients -> 1 band, 16-19 -> 0 bands, 30+ -> 3 bands.

        Returns:
            int: Positive number of points to subtract (0 if count <= 15)
        """
        if count <= LONG_LIST_THRESHOLD:
            return 0

        bands = min((count - LONG_LIST_THRESHOLD) // LONG_LIST_BAND_SIZE, LONG_LIST_MAX_BANDS)
        return round_half_up(bands * weights.long_list_penalty)

    @staticmethod
    def assign_risk_level(score: float) -> str:
        """
        Assign risk tier based on score.

        Risk tiers:
        - 75-100: low
        - 50-74: moderate
        - 25-49: high
        - 0-24: very-high

        Args:
            score: Health risk score (0-100)

        Returns:
            str: Risk tier
        """
        return label_for_score(score, RISK_LEVEL_THRESHOLDS, LOWEST_RISK_LEVEL)
