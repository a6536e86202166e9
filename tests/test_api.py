"""
API tests for the scoring endpoints.

The live Etsy signal source is overridden with an in-memory table.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app, get_signal_source

COUNTS = {
    "bracelet silver": 4000,
    "wristband silver": 5000,
    "bracelet jewelry": 6000,
}


@pytest.fixture
def client():
    app.dependency_overrides[get_signal_source] = lambda: (lambda query, market: COUNTS.get(query))
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_signal_source] = lambda: (lambda query, market: None)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCompetitionEstimate:

    def test_estimate(self, client):
        response = client.post("/api/competition-estimate", json={
            "productTitle": "Silver Bracelet",
            "productType": "bracelet",
            "category": "Jewelry",
        })
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        estimate = body["estimate"]
        assert estimate["baseVolume"] == 5000
        assert estimate["adjustedVolume"] == 6500
        assert estimate["competitionScore"] == 32.5
        assert estimate["saturationLevel"] == "viable"
        assert estimate["decision"] == "launch"
        assert estimate["queriesUsed"] == 3
        assert estimate["validSamples"][0]["resultCount"] == 4000

    @pytest.mark.parametrize("payload,missing", [
        ({"productType": "bracelet", "category": "Jewelry"}, "productTitle"),
        ({"productTitle": "Silver Bracelet", "category": "Jewelry"}, "productType"),
        ({"productTitle": "Silver Bracelet", "productType": "bracelet", "category": "  "}, "category"),
    ])
    def test_missing_fields_rejected(self, client, payload, missing):
        response = client.post("/api/competition-estimate", json=payload)
        assert response.status_code == 400
        assert missing in response.json()["detail"]

    def test_insufficient_signal(self, failing_client):
        response = failing_client.post("/api/competition-estimate", json={
            "productTitle": "Silver Bracelet",
            "productType": "bracelet",
            "category": "Jewelry",
        })
        assert response.status_code == 422
        body = response.json()
        assert set(body) == {"success", "error"}
        assert body["success"] is False
        assert "only 0 valid" in body["error"]

    def test_error_documented_in_openapi(self, client):
        schema = client.get("/openapi.json").json()
        responses = schema["paths"]["/api/competition-estimate"]["post"]["responses"]
        assert responses["422"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")


class TestLaunchPotential:

    def test_launch_potential(self, client):
        response = client.post("/api/launch-potential", json={
            "competitionScore": 40,
            "niche": "jewelry",
            "productTitle": "Personalized Wedding Bracelet Engraved Gift",
            "productType": "bracelet",
        })
        assert response.status_code == 200

        result = response.json()["launchPotential"]
        assert result["score"] == 6.0
        assert result["tier"] == "competitive"
        assert result["badge"] == "yellow"
        assert result["overrideApplied"] is False
        assert result["factors"] == {
            "competitionDensity": "low",
            "nicheSaturation": "high",
            "productSpecificity": "high",
        }
        assert result["scoreJustification"].startswith("The product scores 6.0/10")

    def test_out_of_range_competition_score_rejected(self, client):
        response = client.post("/api/launch-potential", json={
            "competitionScore": 140,
            "niche": "jewelry",
            "productTitle": "Silver Bracelet",
            "productType": "bracelet",
        })
        assert response.status_code == 422


class TestAnalyze:

    def test_analyze(self, client):
        response = client.post("/api/analyze", json={
            "productTitle": "Silver Bracelet",
            "productType": "bracelet",
            "category": "Jewelry",
        })
        assert response.status_code == 200

        body = response.json()
        assert body["queries"] == list(COUNTS)
        assert body["competition"]["competitionScore"] == 32.5
        assert body["launchPotential"]["overrideApplied"] is True
        assert body["launchPotential"]["score"] <= 2.9
        assert body["timeToFirstSale"]["range"] == "20 days"
        assert body["timeToFirstSaleWithAds"]["expected"] == 12

    def test_analyze_insufficient_signal(self, failing_client):
        response = failing_client.post("/api/analyze", json={
            "productTitle": "Silver Bracelet",
            "productType": "bracelet",
            "category": "Jewelry",
        })
        assert response.status_code == 422
        assert response.json()["success"] is False
