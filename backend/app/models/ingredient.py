"""
Pydantic models for ingredient analysis.

This module defines the data models produced and consumed by the analysis
services: allergen and additive detections, ingredient statistics, the
health risk breakdown, scoring weights, and the top-level analysis result.

Fields are snake_case in Python and camelCase on the wire (matchedKeywords,
riskLevel, ...). Every model accepts either spelling on input.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional

from app.config import settings
from app.utils.constants import ADDITIVE_TYPES, DEFAULT_SCORING_WEIGHTS, SEVERITY_LEVELS
from app.utils.validators import validate_ingredient_list, validate_ingredient_text

_DEFAULTS = DEFAULT_SCORING_WEIGHTS


class AnalysisModel(BaseModel):
    """Base model: accept both field names and camelCase aliases."""
    model_config = {"populate_by_name": True}


class AnalysisRequest(AnalysisModel):
    """
    Request model for the ingredient analysis endpoints.

    Attributes:
        ingredient_text: Raw ingredient list as printed on a product label
    """
    ingredient_text: str = Field(
        ...,
        alias="ingredientText",
        description="Raw ingredient list text",
        examples=["Wheat Flour, Sugar, Palm Oil, Red 40, Sodium Benzoate"]
    )

    @field_validator('ingredient_text')
    @classmethod
    def check_ingredient_text(cls, v: str) -> str:
        """Reject empty, oversized, or script-bearing text."""
        validate_ingredient_text(v, max_length=settings.MAX_INGREDIENT_TEXT_LENGTH)
        return v.strip()


class Allergen(AnalysisModel):
    """
    Allergen detection for one allergen group.

    One instance is produced per allergen group on every analysis, so
    "not detected" is reported explicitly.

    Attributes:
        name: Allergen group (e.g., "Wheat/Gluten")
        keywords: All keywords of the group, in table order
        detected: Whether any keyword matched
        matched_keywords: Keywords found in the text, in table order
        severity: Severity tier ("high", "medium", "low")
    """
    name: str
    keywords: List[str] = Field(default_factory=list)
    detected: bool = False
    matched_keywords: List[str] = Field(default_factory=list, alias="matchedKeywords")
    severity: str

    @field_validator('severity')
    @classmethod
    def validate_severity(cls, v: str) -> str:
        if v not in SEVERITY_LEVELS:
            raise ValueError(f'Severity must be one of: {", ".join(SEVERITY_LEVELS)}')
        return v


class Additive(AnalysisModel):
    """
    Detected food additive.

    Attributes:
        name: Additive name (e.g., "Sodium Benzoate")
        type: Additive category (preservative, color, ...)
        risk_level: Risk tier ("high", "medium", "low")
        description: Short human-readable description
        matched_keywords: Keywords found in the text, in table order
    """
    name: str
    type: str
    risk_level: str = Field(..., alias="riskLevel")
    description: str = ""
    matched_keywords: List[str] = Field(default_factory=list, alias="matchedKeywords")

    @field_validator('risk_level')
    @classmethod
    def validate_risk_level(cls, v: str) -> str:
        if v not in SEVERITY_LEVELS:
            raise ValueError(f'Risk level must be one of: {", ".join(SEVERITY_LEVELS)}')
        return v


class AdditiveEntry(AnalysisModel):
    """Reference table entry of the additive database."""
    name: str
    type: str
    risk_level: str = Field(..., alias="riskLevel")
    description: str
    keywords: List[str]


class AdditiveSummary(AnalysisModel):
    """
    Aggregate counts over a list of additive detections.

    Attributes:
        by_type: Count per additive category (only categories present)
        by_risk: Count per risk tier (always has high/medium/low)
        total: Number of detections
    """
    by_type: Dict[str, int] = Field(default_factory=dict, alias="byType")
    by_risk: Dict[str, int] = Field(
        default_factory=lambda: {"high": 0, "medium": 0, "low": 0},
        alias="byRisk"
    )
    total: int = 0


class IngredientStat(AnalysisModel):
    """Occurrence count of one ingredient and its share of the list."""
    name: str
    count: int = Field(..., ge=1)
    percentage: int = Field(..., ge=0, le=100)


class HealthRiskFactor(AnalysisModel):
    """
    One labeled contribution to the health risk score.

    Attributes:
        ingredient: Additive name, marker term, or "<n> ingredients"
        impact: "positive", "negative", "caution", or "neutral"
        points: Signed point delta (negative for penalties)
        reason: Human-readable reason
    """
    ingredient: str
    impact: str
    points: int
    reason: str

    @field_validator('impact')
    @classmethod
    def validate_impact(cls, v: str) -> str:
        valid_impacts = ["positive", "negative", "caution", "neutral"]
        if v not in valid_impacts:
            raise ValueError(f'Impact must be one of: {", ".join(valid_impacts)}')
        return v


class HealthRiskBreakdown(AnalysisModel):
    """
    Weighted health risk score with itemized factors.

    Attributes:
        score: Final score (0-100, higher is healthier)
        risk_level: Risk tier (low/moderate/high/very-high)
        factors: Contributing factors, most negative first
        additive_count: Number of additives considered
    """
    score: int = Field(..., ge=0, le=100)
    risk_level: str = Field(..., alias="riskLevel")
    factors: List[HealthRiskFactor] = Field(default_factory=list)
    additive_count: int = Field(0, ge=0, alias="additiveCount")

    @field_validator('risk_level')
    @classmethod
    def validate_risk_level(cls, v: str) -> str:
        valid_levels = ["low", "moderate", "high", "very-high"]
        if v not in valid_levels:
            raise ValueError(f'Risk level must be one of: {", ".join(valid_levels)}')
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "score": 94,
                "riskLevel": "low",
                "factors": [
                    {
                        "ingredient": "Allura Red (Red 40)",
                        "impact": "negative",
                        "points": -8,
                        "reason": "color (high risk)"
                    },
                    {
                        "ingredient": "organic",
                        "impact": "positive",
                        "points": 2,
                        "reason": "Whole/natural ingredient"
                    }
                ],
                "additiveCount": 1
            }
        }
    }


class ScoringWeights(AnalysisModel):
    """
    Weights for the health risk scorer.

    Per-category values are the base penalty of one additive of that
    category. The risk multipliers scale that base for high and medium risk
    additives; low-risk additives always use a fixed 0.5 multiplier.
    """
    preservative: float = Field(_DEFAULTS["preservative"], ge=0)
    color: float = Field(_DEFAULTS["color"], ge=0)
    flavor: float = Field(_DEFAULTS["flavor"], ge=0)
    sweetener: float = Field(_DEFAULTS["sweetener"], ge=0)
    emulsifier: float = Field(_DEFAULTS["emulsifier"], ge=0)
    stabilizer: float = Field(_DEFAULTS["stabilizer"], ge=0)
    antioxidant: float = Field(_DEFAULTS["antioxidant"], ge=0)
    high_risk_multiplier: float = Field(
        _DEFAULTS["high_risk_multiplier"], ge=0, alias="highRiskMultiplier"
    )
    medium_risk_multiplier: float = Field(
        _DEFAULTS["medium_risk_multiplier"], ge=0, alias="mediumRiskMultiplier"
    )
    long_list_penalty: float = Field(
        _DEFAULTS["long_list_penalty"], ge=0, alias="longListPenalty"
    )
    whole_ingredient_bonus: float = Field(
        _DEFAULTS["whole_ingredient_bonus"], ge=0, alias="wholeIngredientBonus"
    )

    def weight_for_type(self, additive_type: str) -> Optional[float]:
        """Base penalty for an additive category, or None if unknown."""
        if additive_type not in ADDITIVE_TYPES:
            return None
        return getattr(self, additive_type)


class HealthRiskRequest(AnalysisModel):
    """Request model for scoring an already-analyzed ingredient list."""
    ingredients: List[str] = Field(default_factory=list)
    additives: List[Additive] = Field(default_factory=list)
    weights: Optional[ScoringWeights] = None

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v: List[str]) -> List[str]:
        validate_ingredient_list(v)
        return v


class AnalysisResult(AnalysisModel):
    """
    Complete ingredient analysis report.

    Produced either by the local analysis pipeline or, when a remote analysis
    endpoint is configured, parsed from that endpoint's response.

    Attributes:
        allergens: One detection per allergen group
        additives: Detected additives only
        category: Product category prediction (not produced locally)
        ingredient_count: Number of distinct normalized ingredients
        ingredients: Normalized ingredient list
        top_ingredients: Most frequent ingredients (first 10)
        clean_label_score: Clean label score (0-100)
        health_risk: Health risk breakdown
        analyzed_at: ISO-8601 timestamp of the analysis
    """
    allergens: List[Allergen] = Field(default_factory=list)
    additives: List[Additive] = Field(default_factory=list)
    category: Optional[Dict] = None
    ingredient_count: int = Field(0, ge=0, alias="ingredientCount")
    ingredients: List[str] = Field(default_factory=list)
    top_ingredients: List[IngredientStat] = Field(default_factory=list, alias="topIngredients")
    clean_label_score: Optional[int] = Field(None, ge=0, le=100, alias="cleanLabelScore")
    health_risk: Optional[HealthRiskBreakdown] = Field(None, alias="healthRisk")
    analyzed_at: str = Field(..., alias="analyzedAt")


class AdditiveDetectionResponse(AnalysisModel):
    """Response model for additive detection: detections plus summary."""
    additives: List[Additive] = Field(default_factory=list)
    summary: AdditiveSummary
