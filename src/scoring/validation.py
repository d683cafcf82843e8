"""
Feature Schema Validation

Turns an untrusted candidate (LLM output, cache row, request body) into a
fully typed LeadFeatures value, or rejects it with every failing path.
"""
from typing import Any

from pydantic import BaseModel, ValidationError

from src.models.lead_features import EnrichOutput, LeadFeatures
from src.scoring.errors import SchemaValidationError, field_errors_from
from src.utils.observability import logger


def _validate(model: type[BaseModel], candidate: Any):
    if isinstance(candidate, model):
        return candidate
    try:
        return model.model_validate(candidate)
    except ValidationError as e:
        errors = field_errors_from(e)
        logger.warning(
            f"{model.__name__} rejected with {len(errors)} error(s)",
            extra={"paths": [err.path for err in errors]}
        )
        raise SchemaValidationError(model.__name__, errors) from e


def validate_lead_features(candidate: Any) -> LeadFeatures:
    """
    Validate a candidate lead-feature record.

    Args:
        candidate: Mapping (or an already-built LeadFeatures)

    Returns:
        LeadFeatures with defaults applied

    Raises:
        SchemaValidationError: listing every failing field path
    """
    return _validate(LeadFeatures, candidate)


def validate_enrich_output(candidate: Any) -> EnrichOutput:
    """Validate a full enrichment payload (profile, lead features, people)."""
    return _validate(EnrichOutput, candidate)
