"""
FastAPI Application

Main entry point for the restaurant lead scoring API.
Handles application lifecycle and router mounting.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from loguru import logger

from src.config import get_settings
from src.utils.observability import configure_logging
from src.scoring.weights_registry import load_weights_file, register_weights
from src.services.lead_scoring_service import get_lead_scoring_service
from src.api.routes import health_router, scoring_router
from src.api.routes.health import API_VERSION


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    Startup:
    - Configure logging
    - Register the weights file named in SCORING_WEIGHTS_FILE, if any
    - Build the scoring service with configured weights and radius

    A bad weights file raises ConfigurationError and aborts startup.
    """
    settings = get_settings()
    configure_logging()
    logger.info(
        "Starting lead scoring API...",
        extra={
            "environment": settings.environment,
            "weights_version": settings.scoring_weights_version,
            "default_radius_km": settings.default_radius_km,
        }
    )

    if settings.scoring_weights_file:
        register_weights(load_weights_file(settings.scoring_weights_file), replace=True)

    app.state.scoring_service = get_lead_scoring_service()

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title="Restaurant Lead Scoring API",
    description="Deterministic lead scoring for restaurant prospects",
    version=API_VERSION,
    lifespan=lifespan
)

app.include_router(health_router)
app.include_router(scoring_router)
