"""
Health Endpoints

Liveness and readiness probes plus the API index.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from src.scoring.errors import ConfigurationError
from src.scoring.weights_registry import get_weights, list_weight_versions

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"


@router.get("/health")
async def health_check():
    """
    Liveness probe.

    Scoring is pure and in-process, so there is no downstream to probe.
    """
    return {
        "status": "healthy",
        "service": "lead-scoring",
        "version": API_VERSION,
        "weights_versions": list_weight_versions(),
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness probe.

    Ready once startup has built the scoring service and its configured
    weights version resolves. Returns 503 otherwise.
    """
    service = getattr(request.app.state, "scoring_service", None)
    if service is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "Scoring service not initialized"}
        )

    try:
        get_weights(service.weights_version)
    except ConfigurationError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "not_ready", "reason": str(e)})

    return {"status": "ready", "weights_version": service.weights_version}


@router.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Restaurant Lead Scoring API",
        "version": API_VERSION,
        "endpoints": {
            "health": "/health",
            "ready": "/ready",
            "score": "/leads/score (POST)",
            "weights": "/weights",
            "weights_version": "/weights/{version}"
        }
    }
