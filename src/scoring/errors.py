"""
Scoring Errors

Validation and configuration failures raised around the scoring engine.
The engine itself does not raise for well-typed input.
"""
from dataclasses import dataclass
from typing import List

from pydantic import ValidationError


@dataclass(frozen=True)
class FieldError:
    """One failing field in a rejected candidate."""
    path: str
    message: str
    error_type: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def field_errors_from(exc: ValidationError) -> List[FieldError]:
    """Flatten every pydantic error into a dotted-path FieldError."""
    errors = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or "<root>"
        errors.append(FieldError(path=path, message=err["msg"], error_type=err["type"]))
    return errors


class SchemaValidationError(ValueError):
    """
    Raised when a candidate record does not conform to its schema.

    Carries every failing field, not just the first, so callers can
    report all problems at once.
    """

    def __init__(self, schema: str, errors: List[FieldError]):
        self.schema = schema
        self.errors = errors
        summary = "; ".join(str(e) for e in errors)
        super().__init__(f"{schema} failed validation with {len(errors)} error(s): {summary}")

    @property
    def paths(self) -> List[str]:
        return [e.path for e in self.errors]

    def to_details(self) -> List[dict]:
        return [
            {"path": e.path, "message": e.message, "type": e.error_type}
            for e in self.errors
        ]


class ConfigurationError(ValueError):
    """Raised when a weight configuration is malformed or unknown."""
    pass
