"""HTTP tests for the FastAPI application."""

import inspect
from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from app import main
from app.services.analysis_service import AnalysisService


@pytest.fixture
def client():
    return TestClient(main.app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["reference_data"] == {"allergen_groups": 10, "additives": 23}


def test_analyze_returns_camel_case_report(client):
    response = client.post(
        "/api/analyze",
        json={"ingredientText": "Wheat Flour, Sugar, Palm Oil, Red 40, Sodium Benzoate"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["ingredientCount"] == 5
    assert body["cleanLabelScore"] == 70
    assert body["healthRisk"]["score"] == 89
    assert body["healthRisk"]["riskLevel"] == "low"
    assert body["healthRisk"]["additiveCount"] == 2
    assert body["additives"][1]["riskLevel"] == "high"
    assert body["allergens"][0]["matchedKeywords"] == ["wheat", "flour"]
    assert "analyzedAt" in body


@pytest.mark.parametrize("payload", [
    {"ingredientText": ""},
    {"ingredientText": "   "},
    {"ingredientText": "<script>alert(1)</script>, sugar"},
    {"ingredientText": "sugar, " * 5000},
    {},
])
def test_analyze_rejects_invalid_text(client, payload):
    assert client.post("/api/analyze", json=payload).status_code == 422


def test_analyze_remote_failure_maps_to_bad_gateway(client, monkeypatch):
    monkeypatch.setattr(main, "analysis_service", AnalysisService(remote_base_url="http://analysis.test"))
    with patch(
        "app.services.analysis_service.requests.post",
        side_effect=requests.exceptions.ConnectionError("refused"),
    ):
        response = client.post("/api/analyze", json={"ingredientText": "Milk, Sugar"})
    assert response.status_code == 502


def test_analyze_passes_remote_report_through(client, monkeypatch):
    payload = {
        "allergens": [],
        "additives": [],
        "category": None,
        "ingredientCount": 2,
        "ingredients": ["milk", "sugar"],
        "topIngredients": [],
        "cleanLabelScore": 72.5,
        "healthRisk": {
            "score": 90,
            "riskLevel": "low",
            "factors": [{"ingredient": "milk", "impact": "mixed", "points": 1, "reason": "dairy"}],
            "additiveCount": 0,
        },
        "analyzedAt": "2024-05-01T12:00:00.000Z",
        "modelVersion": "v2",
    }
    remote_response = MagicMock()
    remote_response.json.return_value = payload
    monkeypatch.setattr(main, "analysis_service", AnalysisService(remote_base_url="http://analysis.test"))
    with patch("app.services.analysis_service.requests.post", return_value=remote_response):
        response = client.post("/api/analyze", json={"ingredientText": "Milk, Sugar"})
    assert response.status_code == 200
    assert response.json() == payload


def test_analyze_endpoint_runs_in_threadpool():
    # blocking remote call must not run on the event loop
    assert not inspect.iscoroutinefunction(main.analyze_ingredients)


def test_detect_allergens(client):
    response = client.post("/api/allergens/detect", json={"ingredientText": "Milk Chocolate, Almonds"})
    assert response.status_code == 200
    detected = [a["name"] for a in response.json() if a["detected"]]
    assert detected == ["Milk/Dairy", "Tree Nuts"]


def test_list_allergens(client):
    body = client.get("/api/allergens").json()
    assert len(body["allergens"]) == 10
    assert body["statistics"]["total_allergen_groups"] == 10


def test_detect_additives_with_summary(client):
    response = client.post("/api/additives/detect", json={"ingredientText": "Sugar, Aspartame, Guar Gum"})
    assert response.status_code == 200
    body = response.json()
    assert [a["name"] for a in body["additives"]] == ["Aspartame", "Guar Gum"]
    assert body["summary"]["byType"] == {"sweetener": 1, "stabilizer": 1}
    assert body["summary"]["byRisk"] == {"high": 0, "medium": 1, "low": 1}
    assert body["summary"]["total"] == 2


def test_list_additives_with_filters(client):
    response = client.get("/api/additives", params={"type": "color"})
    assert response.status_code == 200
    assert len(response.json()) == 5
    assert client.get("/api/additives", params={"search": "gum"}).json()[0]["name"] == "Xanthan Gum"


def test_health_risk_endpoint(client):
    response = client.post(
        "/api/health-risk",
        json={"ingredients": [f"item {i}" for i in range(20)], "additives": []},
    )
    assert response.status_code == 200
    assert response.json()["score"] == 97


def test_health_risk_endpoint_custom_weights(client):
    response = client.post(
        "/api/health-risk",
        json={
            "ingredients": ["sugar"],
            "additives": [{
                "name": "Sodium Benzoate",
                "type": "preservative",
                "riskLevel": "medium",
                "description": "",
                "matchedKeywords": ["sodium benzoate"],
            }],
            "weights": {"preservative": 20},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 80
    assert body["factors"][0]["reason"] == "preservative (medium risk)"
