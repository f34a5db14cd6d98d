"""
FastAPI application entry point and endpoint definitions.

This module initializes the FastAPI application and defines the API routes
of the ingredient analysis backend.

Responsibilities:
- Initialize FastAPI application with CORS and error handling
- Expose the analysis pipeline and its individual engines
- Coordinate service layer calls
- Handle request validation and error responses
"""

from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Dict, List, Optional
import logging

from app.models.ingredient import (
    AdditiveDetectionResponse,
    AdditiveEntry,
    Allergen,
    AnalysisRequest,
    AnalysisResult,
    HealthRiskBreakdown,
    HealthRiskRequest,
)
from app.services.additive_detector import AdditiveDetector
from app.services.allergen_detector import AllergenDetector
from app.services.analysis_service import (
    AnalysisService,
    InvalidResponseError,
    NetworkError,
)
from app.services.health_risk_scorer import HealthRiskScorer
from app.services.ingredient_processor import IngredientProcessor
from app.config import settings

# Configure logging
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Initialize and configure the FastAPI application.

    Sets up:
    - CORS middleware for frontend communication
    - Exception handlers for consistent error responses
    - Application metadata

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="FoodIntel Ingredient Analysis API",
        description="Allergen, additive, clean label, and health risk analysis of ingredient lists",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS to allow frontend communication
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handler for consistent error responses
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Handle all uncaught exceptions with consistent error format.

        Args:
            request: The incoming request object
            exc: The exception that was raised

        Returns:
            JSONResponse: Formatted error response
        """
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error occurred",
                "error": str(exc)
            }
        )

    return app


# Initialize FastAPI application
app = create_app()

# Initialize service layer instances
ingredient_processor = IngredientProcessor()
allergen_detector = AllergenDetector()
additive_detector = AdditiveDetector()
health_risk_scorer = HealthRiskScorer()
analysis_service = AnalysisService(
    processor=ingredient_processor,
    allergen_detector=allergen_detector,
    additive_detector=additive_detector,
    health_risk_scorer=health_risk_scorer,
    remote_base_url=settings.ANALYSIS_API_BASE_URL,
    timeout=settings.API_TIMEOUT,
    top_ingredients_limit=settings.TOP_INGREDIENTS_LIMIT,
)


@app.get("/")
async def root():
    """
    Root endpoint for health check.

    Returns:
        dict: API status and version information
    """
    return {
        "message": "FoodIntel Ingredient Analysis API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and deployment.

    Returns:
        dict: Service status, analysis mode, and reference table sizes
    """
    return {
        "status": "healthy",
        "service": "ingredient-analysis-api",
        "analysis_mode": analysis_service.mode,
        "remote_base_url": settings.ANALYSIS_API_BASE_URL,
        "reference_data": {
            "allergen_groups": len(allergen_detector.allergen_table),
            "additives": len(additive_detector.additive_table),
        },
    }


@app.post("/api/analyze", response_model=AnalysisResult)
def analyze_ingredients(request: AnalysisRequest):
    """
    Analyze an ingredient list.

    Runs the full pipeline (parsing, allergen and additive detection, clean
    label score, health risk breakdown), or delegates it to the remote
    analysis backend when ANALYSIS_API_BASE_URL is configured. A remote
    report is passed through unchanged.

    Declared without async: the remote call blocks, so FastAPI runs this
    endpoint in its threadpool.

    Args:
        request: AnalysisRequest containing ingredientText

    Returns:
        AnalysisResult: Complete analysis report

    Raises:
        HTTPException: 502 if the remote backend fails, 500 if processing fails
    """
    try:
        logger.info(f"Analyzing ingredient text ({len(request.ingredient_text)} characters)")
        result = analysis_service.analyze(request.ingredient_text)
        if isinstance(result, dict):
            return JSONResponse(content=result)
        return result

    except (NetworkError, InvalidResponseError) as e:
        logger.error(f"Analysis backend failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error analyzing ingredients: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze ingredients: {str(e)}"
        )


@app.post("/api/allergens/detect", response_model=List[Allergen])
async def detect_allergens(request: AnalysisRequest) -> List[Allergen]:
    """
    Detect allergens in an ingredient list.

    Returns one entry per allergen group, detected or not.
    """
    return allergen_detector.detect_allergens(request.ingredient_text)


@app.get("/api/allergens")
async def list_allergens() -> Dict:
    """
    Get the allergen reference table and its statistics.

    Returns:
        dict: {"allergens": [...], "statistics": {...}}
    """
    return {
        "allergens": allergen_detector.get_allergen_table(),
        "statistics": allergen_detector.get_statistics(),
    }


@app.post("/api/additives/detect", response_model=AdditiveDetectionResponse)
async def detect_additives(request: AnalysisRequest) -> AdditiveDetectionResponse:
    """
    Detect additives in an ingredient list, with counts by type and risk.
    """
    additives = additive_detector.detect_additives(request.ingredient_text)
    return AdditiveDetectionResponse(
        additives=additives,
        summary=additive_detector.get_additive_summary(additives),
    )


@app.get("/api/additives", response_model=List[AdditiveEntry])
async def list_additives(
    search: Optional[str] = Query(None, max_length=100),
    additive_type: Optional[str] = Query(None, alias="type"),
    risk_level: Optional[str] = Query(None),
) -> List[AdditiveEntry]:
    """
    Browse the additive reference database.

    Args:
        search: Text matched against additive name and description
        additive_type: Only additives of this category (query param "type")
        risk_level: Only additives of this risk tier

    Returns:
        List[AdditiveEntry]: Matching additives
    """
    return additive_detector.list_additives(
        search=search,
        additive_type=additive_type,
        risk_level=risk_level,
    )


@app.post("/api/health-risk", response_model=HealthRiskBreakdown)
async def calculate_health_risk(request: HealthRiskRequest) -> HealthRiskBreakdown:
    """
    Score an already-parsed ingredient list and its additive detections.

    Lets callers experiment with custom weights without re-running detection.

    Args:
        request: HealthRiskRequest with ingredients, additives, optional weights

    Returns:
        HealthRiskBreakdown: Score, risk tier, and itemized factors
    """
    return health_risk_scorer.calculate_health_risk(
        request.ingredients,
        request.additives,
        request.weights,
    )


if __name__ == "__main__":
    import uvicorn

    # Run the application
    # For development only - use uvicorn command in production
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
