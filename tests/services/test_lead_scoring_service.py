"""Tests for the Lead Scoring Service."""

import pytest
from unittest.mock import AsyncMock

from src.models.weights import DEFAULT_WEIGHTS_V1
from src.scoring.errors import ConfigurationError, SchemaValidationError
from src.scoring.weights_registry import load_weights, register_weights, unregister_weights
from src.services.lead_scoring_service import (
    LeadScoringService,
    LogOnlySink,
    ScoredLead,
    get_lead_scoring_service,
)


# --- FIXTURES ---

@pytest.fixture
def mock_sink():
    """Returns a mock sink that reports success."""
    sink = AsyncMock()
    sink.save = AsyncMock(return_value=True)
    return sink


@pytest.fixture
def service(mock_sink):
    return LeadScoringService(sink=mock_sink, default_radius_km=8)


@pytest.fixture
def alt_weights():
    data = DEFAULT_WEIGHTS_V1.model_dump()
    data["version"] = "service_alt"
    data["rules"]["distance_unknown"]["cap_score"] = 10
    weights = register_weights(load_weights(data), replace=True)
    yield weights
    unregister_weights("service_alt")


# --- SCORING ---

class TestScore:

    def test_score_returns_scored_lead(self, service, candidate_factory):
        scored = service.score(candidate_factory())

        assert isinstance(scored, ScoredLead)
        assert scored.weights_version == "default_v1"
        assert scored.radius_km == 8
        assert scored.lead_score == round(scored.breakdown.final)
        assert 0 <= scored.lead_score <= 100

    def test_invalid_candidate_raises(self, service, candidate_factory):
        with pytest.raises(SchemaValidationError):
            service.score(candidate_factory(rubric={"risk_score": 11}))

    def test_unknown_weights_version_raises(self, service, candidate_factory):
        with pytest.raises(ConfigurationError):
            service.score(candidate_factory(), weights_version="missing")

    def test_uses_requested_weights_version(self, service, candidate_factory, alt_weights):
        candidate = candidate_factory(signals={"geo": {"distance_km": None}})

        scored = service.score(candidate, weights_version="service_alt")

        assert scored.weights_version == "service_alt"
        assert scored.breakdown.final <= 10

    def test_radius_override(self, service, candidate_factory):
        candidate = candidate_factory(signals={"geo": {"distance_km": 6.0}})

        wide = service.score(candidate, radius_km=20)
        narrow = service.score(candidate, radius_km=5)

        assert wide.breakdown.final > narrow.breakdown.final
        assert narrow.breakdown.final <= 20

    def test_default_radius_from_settings(self, mock_sink, candidate_factory):
        service = LeadScoringService(sink=mock_sink)
        assert service.score(candidate_factory()).radius_km == 8.0

    def test_score_many_ranked(self, service, candidate_factory):
        weak = candidate_factory(restaurant={"name": "Weak"}, signals={"geo": {"delivery_feasible": False}})
        strong = candidate_factory(restaurant={"name": "Strong", "service_style": "fine_dining"})
        middle = candidate_factory(restaurant={"name": "Middle"})

        ranked = service.score_many([weak, strong, middle])

        assert [s.features.restaurant.name for s in ranked] == ["Strong", "Middle", "Weak"]


# --- PERSISTENCE PAYLOAD ---

class TestScoredLead:

    def test_explanation_joins_reasons(self, service, candidate_factory):
        scored = service.score(candidate_factory(
            restaurant={"service_style": "fine_dining"},
            signals={"geo": {"delivery_feasible": False}},
        ))

        assert scored.lead_score_explanation == " | ".join(scored.breakdown.reasons)
        assert " | " in scored.lead_score_explanation

    def test_explanation_none_without_reasons(self, service, candidate_factory):
        scored = service.score(candidate_factory())
        assert scored.breakdown.reasons == []
        assert scored.lead_score_explanation is None

    def test_persistence_payload_columns(self, service, candidate_factory):
        scored = service.score(candidate_factory())
        payload = scored.persistence_payload()

        assert payload["lead_score"] == scored.lead_score
        assert payload["service_style"] == "casual"
        assert payload["stage"] == "new"
        assert payload["price_tier"] == "mid"
        assert payload["city"] == "Madrid"
        assert payload["cuisine_slugs"] == ["mediterranean"]
        assert payload["contact"]["reservation_platform"] == "thefork"
        assert payload["locations"] == {"location_count_guess": 1, "is_chain_guess": False}
        assert payload["ai_profile"]["schema_version"] == "v1"
        assert payload["lead_score_weights_version"] == "default_v1"


# --- PERSISTENCE ---

class TestScoreAndPersist:

    async def test_sink_receives_payload(self, service, mock_sink, candidate_factory):
        scored = await service.score_and_persist("restaurant-1", candidate_factory())

        mock_sink.save.assert_called_once()
        lead_id, payload = mock_sink.save.call_args[0]
        assert lead_id == "restaurant-1"
        assert payload == scored.persistence_payload()
        assert scored.lead_id == "restaurant-1"

    async def test_sink_failure_still_returns_score(self, mock_sink, candidate_factory):
        mock_sink.save = AsyncMock(return_value=False)
        service = LeadScoringService(sink=mock_sink)

        scored = await service.score_and_persist("restaurant-2", candidate_factory())

        assert scored.lead_score >= 0

    async def test_invalid_candidate_not_persisted(self, service, mock_sink, candidate_factory):
        with pytest.raises(SchemaValidationError):
            await service.score_and_persist("restaurant-3", candidate_factory(schema_version="v0"))

        mock_sink.save.assert_not_called()

    async def test_log_only_sink(self):
        assert await LogOnlySink().save("restaurant-4", {"lead_score": 40, "stage": "new"}) is True

    async def test_braces_in_lead_id(self, candidate_factory):
        """Lead ids are logged as data, never as a format template."""
        service = LeadScoringService(sink=LogOnlySink())

        scored = await service.score_and_persist("lead-{id}", candidate_factory())

        assert scored.lead_id == "lead-{id}"
        assert await LogOnlySink().save("{0}{missing}", {"lead_score": 1}) is True


def test_singleton():
    assert get_lead_scoring_service() is get_lead_scoring_service()
