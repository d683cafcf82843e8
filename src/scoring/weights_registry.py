"""
Weights Registry

Named, immutable weight configurations that can coexist so historical
scores stay reproducible and alternates can be trialled per tenant.
"""
import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from src.models.weights import DEFAULT_WEIGHTS_V1, LeadScoreWeights
from src.scoring.errors import ConfigurationError, field_errors_from
from src.utils.observability import logger

_registry: Dict[str, LeadScoreWeights] = {DEFAULT_WEIGHTS_V1.version: DEFAULT_WEIGHTS_V1}
_lock = threading.Lock()


def load_weights(data: Mapping[str, Any]) -> LeadScoreWeights:
    """
    Build a weight configuration from a plain mapping.

    Raises:
        ConfigurationError: on negative weights, unknown keys, or wrong types
    """
    try:
        return LeadScoreWeights.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(str(err) for err in field_errors_from(e))
        raise ConfigurationError(f"Invalid weight configuration: {problems}") from e


def load_weights_file(path: str | Path) -> LeadScoreWeights:
    """Load a weight configuration from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read weight configuration {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Weight configuration {path} must be a JSON object")
    return load_weights(data)


def register_weights(weights: LeadScoreWeights, replace: bool = False) -> LeadScoreWeights:
    """
    Make a configuration available by its version name.

    Registered versions are never overwritten unless replace=True, so a
    version name always maps to the weights that produced its scores.
    The built-in default is never replaced.
    """
    if weights.version == DEFAULT_WEIGHTS_V1.version and weights != DEFAULT_WEIGHTS_V1:
        raise ConfigurationError("The default weights version cannot be replaced")
    with _lock:
        existing = _registry.get(weights.version)
        if existing is not None and existing != weights and not replace:
            raise ConfigurationError(f"Weights version '{weights.version}' is already registered")
        _registry[weights.version] = weights
    logger.info(f"Registered weights version {weights.version}")
    return weights


def get_weights(version: str = DEFAULT_WEIGHTS_V1.version) -> LeadScoreWeights:
    """Look up a registered configuration by version name."""
    with _lock:
        weights = _registry.get(version)
    if weights is None:
        raise ConfigurationError(f"Unknown weights version '{version}'")
    return weights


def list_weight_versions() -> List[str]:
    with _lock:
        return sorted(_registry)


def unregister_weights(version: str) -> None:
    """Remove a version. The built-in default cannot be removed."""
    if version == DEFAULT_WEIGHTS_V1.version:
        raise ConfigurationError("The default weights version cannot be removed")
    with _lock:
        _registry.pop(version, None)
