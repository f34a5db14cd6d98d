"""
Ingredient analysis orchestration service.

This module runs the full analysis pipeline over one piece of ingredient
text and assembles the AnalysisResult report:

1. Parse and normalize the ingredient list
2. Detect allergens (raw text)
3. Detect additives (raw text)
4. Compute ingredient statistics and the clean label score
5. Compute the health risk breakdown

When a remote analysis backend is configured, the whole computation is
delegated to its POST /api/analyze endpoint instead, and the decoded JSON
body is returned as-is.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import requests

from app.models.ingredient import AnalysisResult
from app.services.additive_detector import AdditiveDetector
from app.services.allergen_detector import AllergenDetector
from app.services.health_risk_scorer import HealthRiskScorer
from app.services.ingredient_processor import IngredientProcessor
from app.utils.constants import TOP_INGREDIENTS_DEFAULT

# Configure logging
logger = logging.getLogger(__name__)


class AnalysisServiceError(Exception):
    """Base class for failures of the remote analysis backend."""


class NetworkError(AnalysisServiceError):
    """The remote backend could not be reached or returned an HTTP error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(AnalysisServiceError):
    """The remote backend answered with something that is not an analysis."""


class AnalysisService:
    """
    Service class that runs the ingredient analysis pipeline.

    Attributes:
        processor: Ingredient text processor
        allergen_detector: Allergen detection service
        additive_detector: Additive detection service
        health_risk_scorer: Health risk scoring engine
        remote_base_url: Remote analysis backend, or None for local analysis
        timeout: Remote request timeout in seconds
        top_ingredients_limit: Number of ingredient stats kept in a result
    """

    def __init__(
        self,
        processor: Optional[IngredientProcessor] = None,
        allergen_detector: Optional[AllergenDetector] = None,
        additive_detector: Optional[AdditiveDetector] = None,
        health_risk_scorer: Optional[HealthRiskScorer] = None,
        remote_base_url: Optional[str] = None,
        timeout: int = 10,
        top_ingredients_limit: int = TOP_INGREDIENTS_DEFAULT
    ):
        """
        Initialize the analysis service.

        Any collaborator left as None is created with its defaults.
        """
        self.processor = processor or IngredientProcessor()
        self.allergen_detector = allergen_detector or AllergenDetector()
        self.additive_detector = additive_detector or AdditiveDetector()
        self.health_risk_scorer = health_risk_scorer or HealthRiskScorer()
        self.remote_base_url = (remote_base_url or "").rstrip("/") or None
        self.timeout = timeout
        self.top_ingredients_limit = top_ingredients_limit

        logger.info(
            f"AnalysisService initialized "
            f"(mode: {'remote' if self.remote_base_url else 'local'})"
        )

    @property
    def mode(self) -> str:
        """Where analyses run: "remote" or "local"."""
        return "remote" if self.remote_base_url else "local"

    def analyze(self, ingredient_text: str) -> Union[AnalysisResult, Dict[str, Any]]:
        """
        Analyze ingredient text, remotely if a backend is configured.

        Args:
            ingredient_text: Raw ingredient list text

        Returns:
            AnalysisResult for a local analysis, or the remote backend's
            report as a plain dict (camelCase keys, untouched)

        Raises:
            NetworkError: Remote backend unreachable or returned an HTTP error
            InvalidResponseError: Remote response is not a JSON object
        """
        if self.remote_base_url:
            return self.run_remote_analysis(ingredient_text)

        return self.run_local_analysis(ingredient_text)

    def run_local_analysis(self, ingredient_text: str) -> AnalysisResult:
        """
        Run the full analysis pipeline in-process.

        Never raises for string input; empty text gives an empty report with
        every allergen group reported as not detected.

        Args:
            ingredient_text: Raw ingredient list text

        Returns:
            AnalysisResult: Complete analysis report
        """
        logger.info(f"Running local analysis on {len(ingredient_text or '')} characters")

        ingredients = self.processor.parse_ingredients(ingredient_text)
        allergens = self.allergen_detector.detect_allergens(ingredient_text)
        additives = self.additive_detector.detect_additives(ingredient_text)
        top_ingredients = self.processor.calculate_ingredient_stats(ingredients)
        clean_label_score = self.processor.calculate_clean_label_score(ingredients)
        health_risk = self.health_risk_scorer.calculate_health_risk(ingredients, additives)

        result = AnalysisResult(
            allergens=allergens,
            additives=additives,
            category=None,
            ingredient_count=len(ingredients),
            ingredients=ingredients,
            top_ingredients=top_ingredients[:self.top_ingredients_limit],
            clean_label_score=clean_label_score,
            health_risk=health_risk,
            analyzed_at=_utc_timestamp(),
        )

        logger.info(
            f"Analysis complete: {result.ingredient_count} ingredient(s), "
            f"clean label {clean_label_score}, health risk {health_risk.score} "
            f"({health_risk.risk_level})"
        )

        return result

    def run_remote_analysis(self, ingredient_text: str) -> Dict[str, Any]:
        """
        Delegate the analysis to the remote backend.

        The remote report is returned verbatim. Only HTTP success and a JSON
        object body are checked; field values are not validated against the
        local models.

        Args:
            ingredient_text: Raw ingredient list text

        Returns:
            dict: Decoded JSON body of the remote response

        Raises:
            NetworkError: Connection failure, timeout, or non-2xx status
            InvalidResponseError: Body is not JSON or not a JSON object
        """
        url = f"{self.remote_base_url}/api/analyze"
        logger.info(f"Delegating analysis to {url}")

        try:
            response = requests.post(
                url,
                json={"ingredientText": ingredient_text},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()

        except requests.exceptions.Timeout:
            logger.error(f"Request timeout for {url}")
            raise NetworkError(f"Analysis backend timed out after {self.timeout}s")

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error for {url}: Status {status_code if status_code else 'unknown'}")
            raise NetworkError(f"API error: {status_code}", status_code=status_code)

        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {str(e)}")
            raise NetworkError(f"Analysis backend unreachable: {str(e)}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response from {url}: {str(e)}")
            raise InvalidResponseError("Analysis backend returned invalid JSON")

        if not isinstance(data, dict):
            logger.error(f"Unexpected analysis response from {url}: {type(data).__name__}")
            raise InvalidResponseError("Analysis backend returned an unexpected response shape")

        return data


def _utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
