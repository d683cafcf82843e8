"""
Lead Scoring Service

Glue between untrusted enrichment output and the pure scoring engine:
validate, score with a named weights version, and hand the result to a
pluggable persistence sink.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol

from src.config import get_settings
from src.models.lead_features import LeadFeatures
from src.models.score_breakdown import ScoreBreakdown
from src.scoring.lead_scorer import score_restaurant_lead
from src.scoring.validation import validate_lead_features
from src.scoring.weights_registry import get_weights
from src.utils.observability import logger, log_scoring_execution, log_business_event


@dataclass
class ScoredLead:
    """A validated lead together with its score breakdown."""
    features: LeadFeatures
    breakdown: ScoreBreakdown
    weights_version: str
    radius_km: float
    lead_id: Optional[str] = None
    separator: str = " | "

    @property
    def lead_score(self) -> int:
        """Integer score for the lead_score column."""
        return int(round(self.breakdown.final))

    @property
    def lead_score_explanation(self) -> Optional[str]:
        if not self.breakdown.reasons:
            return None
        return self.separator.join(self.breakdown.reasons)

    def persistence_payload(self) -> Dict[str, Any]:
        """Column values to update on the restaurant row."""
        restaurant = self.features.restaurant
        return {
            "lead_score": self.lead_score,
            "lead_score_explanation": self.lead_score_explanation,
            "lead_score_weights_version": self.weights_version,
            "ai_profile": self.features.model_dump(mode="json"),
            "contact": restaurant.contact.model_dump(mode="json"),
            "locations": restaurant.locations.model_dump(mode="json"),
            "cuisine_slugs": list(restaurant.cuisine_slugs),
            "price_tier": restaurant.price_tier.value,
            "neighborhood_guess": restaurant.neighborhood_guess,
            "city": restaurant.city,
            "website_url": restaurant.website_url,
            "address": restaurant.address,
            "service_style": restaurant.service_style.value,
            "stage": self.features.signals.pipeline.stage.value,
        }


class LeadScoreSink(Protocol):
    """
    Protocol for persisting scored leads.

    Implement this to write scores to a database, queue, or CRM.
    """

    async def save(self, lead_id: str, payload: Dict[str, Any]) -> bool:
        """
        Persist one scored lead.

        Args:
            lead_id: Identifier of the restaurant row
            payload: Column values from ScoredLead.persistence_payload()

        Returns:
            True if the payload was stored
        """
        ...


class LogOnlySink:
    """
    Fallback sink that only logs scored leads.

    Used when no storage backend is wired in.
    """

    async def save(self, lead_id: str, payload: Dict[str, Any]) -> bool:
        logger.bind(
            lead_id=lead_id,
            lead_score=payload.get("lead_score"),
            stage=payload.get("stage"),
        ).info("Lead score not persisted (no sink configured): {}", lead_id)
        return True


class LeadScoringService:
    """
    Validates and scores restaurant leads.

    Usage:
        service = LeadScoringService()

        scored = service.score(candidate, radius_km=8)
        print(scored.lead_score, scored.lead_score_explanation)

        await service.score_and_persist("restaurant-123", candidate)
    """

    def __init__(
        self,
        sink: Optional[LeadScoreSink] = None,
        default_radius_km: Optional[float] = None,
        weights_version: Optional[str] = None,
    ):
        settings = get_settings()
        self._sink = sink or LogOnlySink()
        self._default_radius_km = (
            default_radius_km if default_radius_km is not None else settings.default_radius_km
        )
        self._weights_version = weights_version or settings.scoring_weights_version
        self._separator = settings.explanation_separator

    @property
    def weights_version(self) -> str:
        return self._weights_version

    def score(
        self,
        candidate: Any,
        radius_km: Optional[float] = None,
        weights_version: Optional[str] = None,
        lead_id: Optional[str] = None,
    ) -> ScoredLead:
        """
        Validate a candidate and score it.

        Args:
            candidate: Raw mapping or LeadFeatures
            radius_km: Delivery radius (defaults to configured radius)
            weights_version: Named weights (defaults to configured version)
            lead_id: Optional identifier carried through to the result

        Raises:
            SchemaValidationError: if the candidate is malformed
            ConfigurationError: if the weights version is unknown
        """
        features = validate_lead_features(candidate)
        version = weights_version or self._weights_version
        weights = get_weights(version)
        radius = radius_km if radius_km is not None else self._default_radius_km

        start = time.perf_counter()
        breakdown = score_restaurant_lead(features, radius_km=radius, weights=weights)
        duration_ms = (time.perf_counter() - start) * 1000

        log_scoring_execution(
            restaurant_name=features.restaurant.name,
            weights_version=version,
            final_score=breakdown.final,
            radius_km=radius,
            duration_ms=duration_ms,
            stage=features.signals.pipeline.stage.value,
            tier=breakdown.tier.value,
        )

        return ScoredLead(
            features=features,
            breakdown=breakdown,
            weights_version=version,
            radius_km=radius,
            lead_id=lead_id,
            separator=self._separator,
        )

    def score_many(
        self,
        candidates: Iterable[Any],
        radius_km: Optional[float] = None,
        weights_version: Optional[str] = None,
    ) -> List[ScoredLead]:
        """Score several candidates and rank them best first."""
        scored = [
            self.score(candidate, radius_km=radius_km, weights_version=weights_version)
            for candidate in candidates
        ]
        scored.sort(key=lambda s: s.breakdown.final, reverse=True)
        return scored

    async def score_and_persist(
        self,
        lead_id: str,
        candidate: Any,
        radius_km: Optional[float] = None,
        weights_version: Optional[str] = None,
    ) -> ScoredLead:
        """
        Score a candidate and hand the result to the sink.

        Returns:
            The ScoredLead, whether or not the sink reported success
        """
        scored = self.score(
            candidate, radius_km=radius_km, weights_version=weights_version, lead_id=lead_id
        )
        saved = await self._sink.save(lead_id, scored.persistence_payload())

        if saved:
            log_business_event(
                "lead_score_persisted",
                lead_id,
                lead_score=scored.lead_score,
                weights_version=scored.weights_version,
            )
        else:
            logger.warning(f"Sink did not persist score for lead {lead_id}")

        return scored


# Singleton instance
_service: Optional[LeadScoringService] = None


def get_lead_scoring_service() -> LeadScoringService:
    """Get or create the lead scoring service singleton."""
    global _service
    if _service is None:
        _service = LeadScoringService()
    return _service
