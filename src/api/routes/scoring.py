"""
Lead Scoring Endpoints

Score a lead-feature record on demand and inspect weight versions.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field

from src.config import get_settings
from src.scoring.errors import ConfigurationError, SchemaValidationError
from src.scoring.weights_registry import get_weights, list_weight_versions
from src.services.lead_scoring_service import LeadScoringService, get_lead_scoring_service

router = APIRouter(tags=["Scoring"])


class ScoreRequest(BaseModel):
    """Body of POST /leads/score. lead_features is validated separately."""
    lead_features: Any
    radius_km: float = Field(default_factory=lambda: get_settings().default_radius_km, gt=0)
    weights_version: Optional[str] = None


@router.post("/leads/score")
async def score_lead(
    body: ScoreRequest,
    service: LeadScoringService = Depends(get_lead_scoring_service),
):
    """
    Validate and score a lead-feature record.

    Returns 200 with the score breakdown, 422 with every failing field
    when the record is malformed, 404 for an unknown weights version.
    """
    try:
        scored = service.score(
            body.lead_features,
            radius_km=body.radius_km,
            weights_version=body.weights_version,
        )
    except SchemaValidationError as e:
        return JSONResponse(
            status_code=422,
            content={"ok": False, "error": "Validation failed", "details": e.to_details()}
        )
    except ConfigurationError as e:
        logger.warning(f"Score request rejected: {e}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"ok": False, "error": str(e)}
        )

    return {
        "ok": True,
        "result": scored.breakdown.model_dump(mode="json"),
        "lead_score": scored.lead_score,
        "explanation": scored.lead_score_explanation,
        "weights_version": scored.weights_version,
    }


@router.get("/weights")
async def weight_versions():
    """List registered weight versions."""
    return {"versions": list_weight_versions()}


@router.get("/weights/{version}")
async def weight_configuration(version: str):
    """Return one weight configuration as a nested tree."""
    try:
        weights = get_weights(version)
    except ConfigurationError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"ok": False, "error": str(e)})
    return weights.model_dump(mode="json")
