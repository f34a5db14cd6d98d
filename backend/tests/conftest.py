import pytest

from app.services.additive_detector import AdditiveDetector
from app.services.allergen_detector import AllergenDetector
from app.services.analysis_service import AnalysisService
from app.services.health_risk_scorer import HealthRiskScorer
from app.services.ingredient_processor import IngredientProcessor


@pytest.fixture
def processor():
    return IngredientProcessor()


@pytest.fixture
def allergen_detector():
    return AllergenDetector()


@pytest.fixture
def additive_detector():
    return AdditiveDetector()


@pytest.fixture
def scorer():
    return HealthRiskScorer()


@pytest.fixture
def local_service():
    return AnalysisService()
