"""
Logging setup and structured event helpers.

Every scored lead is logged with its weights version and final score bound
as fields, so serialized logs can be filtered per version or per restaurant.
"""
import sys
from loguru import logger
from typing import Any
from src.config import get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)


def configure_logging():
    """
    Install a single stderr handler.

    Colorized console lines by default; one JSON object per record when
    ENABLE_STRUCTURED_LOGGING is set.
    """
    settings = get_settings()
    structured = settings.enable_structured_logging

    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="{message}" if structured else CONSOLE_FORMAT,
        serialize=structured,
        colorize=not structured,
        backtrace=settings.environment != "production",
        diagnose=settings.environment == "development",
    )

    logger.debug(f"Logging ready (level={settings.log_level}, structured={structured})")


def log_scoring_execution(
    restaurant_name: str,
    weights_version: str,
    final_score: float,
    radius_km: float,
    duration_ms: float | None = None,
    **context: Any
):
    """
    Log one completed score with its inputs bound as fields.

    Args:
        restaurant_name: Name of the scored restaurant
        weights_version: Named weight configuration used
        final_score: Final 0-100 score after caps
        radius_km: Delivery radius the score was computed against
        duration_ms: Engine time in milliseconds
        **context: Extra fields such as stage or tier

    Example:
        >>> log_scoring_execution("Casa Verde", "default_v1", 81.4, 8, stage="new")
    """
    fields = {
        "event_type": "lead_scored",
        "restaurant": restaurant_name,
        "weights_version": weights_version,
        "final_score": round(final_score, 2),
        "radius_km": radius_km,
        **context,
    }
    if duration_ms is not None:
        fields["duration_ms"] = round(duration_ms, 2)

    logger.bind(**fields).info(f"Lead scored | {restaurant_name} | {final_score:.1f}")


def log_business_event(event_type: str, lead_id: str, **details: Any):
    """Record a lead lifecycle event such as a persisted score, at SUCCESS level."""
    logger.bind(event_type=event_type, lead_id=lead_id, **details).success(
        f"{event_type} | {lead_id}"
    )
