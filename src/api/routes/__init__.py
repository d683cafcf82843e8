"""
API Routes

Modular route definitions for the lead scoring API.
"""
from src.api.routes.health import router as health_router
from src.api.routes.scoring import router as scoring_router

__all__ = [
    "health_router",
    "scoring_router",
]
