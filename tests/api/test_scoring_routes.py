"""
Tests for the lead scoring endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from src.api.main import app
from src.services.lead_scoring_service import LeadScoringService, get_lead_scoring_service


@pytest.fixture
def client():
    """Create test client with an isolated scoring service."""
    service = LeadScoringService(sink=AsyncMock())
    app.dependency_overrides[get_lead_scoring_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestScoreEndpoint:
    """Tests for POST /leads/score."""

    def test_scores_valid_features(self, client, candidate_factory):
        response = client.post("/leads/score", json={"lead_features": candidate_factory(), "radius_km": 8})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["weights_version"] == "default_v1"
        assert data["result"]["final"] == pytest.approx(47.08)
        assert data["result"]["tier"] == "cool"
        assert data["lead_score"] == 47
        assert data["explanation"] is None

    def test_radius_defaults(self, client, candidate_factory):
        response = client.post("/leads/score", json={"lead_features": candidate_factory()})

        assert response.status_code == 200
        assert response.json()["result"]["final"] == pytest.approx(47.08)

    def test_won_stage(self, client, candidate_factory):
        features = candidate_factory(signals={"pipeline": {"stage": "won"}})

        response = client.post("/leads/score", json={"lead_features": features})

        assert response.json()["lead_score"] == 100

    def test_validation_failure_returns_422_with_all_paths(self, client, candidate_factory):
        features = candidate_factory(
            signals={"menu": {"menu_fit": 2}},
            rubric={"risk_score": -1},
        )

        response = client.post("/leads/score", json={"lead_features": features})

        assert response.status_code == 422
        data = response.json()
        assert data["ok"] is False
        assert data["error"] == "Validation failed"
        paths = {d["path"] for d in data["details"]}
        assert {"signals.menu.menu_fit", "rubric.risk_score"} <= paths

    def test_non_positive_radius_rejected(self, client, candidate_factory):
        response = client.post("/leads/score", json={"lead_features": candidate_factory(), "radius_km": 0})

        assert response.status_code == 422

    def test_unknown_weights_version_404(self, client, candidate_factory):
        response = client.post(
            "/leads/score",
            json={"lead_features": candidate_factory(), "weights_version": "ghost"}
        )

        assert response.status_code == 404
        assert response.json()["ok"] is False


class TestWeightsEndpoints:

    def test_list_versions(self, client):
        response = client.get("/weights")

        assert response.status_code == 200
        assert "default_v1" in response.json()["versions"]

    def test_get_default_weights(self, client):
        response = client.get("/weights/default_v1")

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "default_v1"
        assert data["blend"] == {"signals": 0.65, "rubric": 0.35}
        assert data["rules"]["delivery_not_feasible"]["cap_score"] == 20

    def test_unknown_weights(self, client):
        assert client.get("/weights/ghost").status_code == 404
