"""
Tests for the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from api.insights import app
from searchshare.utils.config import Settings, get_settings


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["version"] == "0.1.0"

    def test_sample_data(self, client):
        data = client.get("/api/sample-data").json()

        assert len(data["brandKeywords"]) == 7
        assert len(data["rankedKeywords"]) == 10
        assert data["brandKeywords"][0] == {"keyword": "lavera", "searchVolume": 12100, "isOwnBrand": True}


class TestCalculate:
    """Test POST /api/calculate."""

    def test_sample_data(self, client, sample_payload):
        response = client.post("/api/calculate", json=sample_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["sos"]["shareOfSearch"] == 17.5
        assert data["sov"]["shareOfVoice"] == 8.3
        assert data["gap"]["interpretation"] == "missing_opportunities"

    def test_empty_request(self, client):
        data = client.post("/api/calculate", json={}).json()

        assert data["sos"]["shareOfSearch"] == 0
        assert data["sov"]["shareOfVoice"] == 0
        assert data["gap"]["interpretation"] == "balanced"

    def test_negative_volume_rejected(self, client):
        payload = {
            "brandKeywords": [{"keyword": "lavera", "searchVolume": -5, "isOwnBrand": True}],
            "rankedKeywords": [],
        }
        response = client.post("/api/calculate", json=payload)

        assert response.status_code == 422
        assert "search volume" in response.json()["detail"]

    def test_position_out_of_range_rejected(self, client):
        payload = {"rankedKeywords": [{"keyword": "tires", "searchVolume": 100, "position": 0}]}
        assert client.post("/api/calculate", json=payload).status_code == 422

    def test_request_size_limit(self, client, sample_payload):
        app.dependency_overrides[get_settings] = lambda: Settings(MAX_RANKED_KEYWORDS=5)
        response = client.post("/api/calculate", json=sample_payload)

        assert response.status_code == 413


class TestInsights:
    """Test POST /api/insights."""

    def test_sample_data(self, client, sample_payload):
        response = client.post("/api/insights", json=sample_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["topPriorityAction"] == 'Target "naturkosmetik" (Hidden Gem)'
        assert len(data["actionList"]) == 6
        assert data["competitorStrengths"][0]["isEstimate"] is True

    def test_with_brand_context(self, client, sample_payload):
        sample_payload["brandContext"] = {
            "brandName": "lavera",
            "industry": "cosmetics",
            "productCategories": ["naturkosmetik"],
        }
        data = client.post("/api/insights", json=sample_payload).json()

        assert data["quickWins"][0]["isRecommended"] is True

    def test_invalid_context_rejected(self, client, sample_payload):
        sample_payload["brandContext"] = {"productCategories": "naturkosmetik"}
        assert client.post("/api/insights", json=sample_payload).status_code == 422
