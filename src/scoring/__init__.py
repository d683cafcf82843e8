"""
Scoring Layer
Feature validation, weight versions and the deterministic lead scorer.
"""
from .errors import SchemaValidationError, ConfigurationError, FieldError
from .validation import validate_lead_features, validate_enrich_output
from .weights_registry import (
    get_weights,
    register_weights,
    load_weights,
    load_weights_file,
    list_weight_versions,
)
from .lead_scorer import score_restaurant_lead

__all__ = [
    "SchemaValidationError",
    "ConfigurationError",
    "FieldError",
    "validate_lead_features",
    "validate_enrich_output",
    "get_weights",
    "register_weights",
    "load_weights",
    "load_weights_file",
    "list_weight_versions",
    "score_restaurant_lead",
]
