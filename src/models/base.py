from typing import Annotated, Any
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, Strict


def _number_only(value: Any) -> Any:
    """Numeric strings and booleans from model output are errors, not numbers."""
    if isinstance(value, (str, bytes, bool)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    return value


# Bounded numeric shapes shared by the lead contracts
UnitFloat = Annotated[float, BeforeValidator(_number_only), Field(ge=0, le=1.0)]
RubricInt = Annotated[int, BeforeValidator(_number_only), Field(ge=0, le=5)]
CountInt = Annotated[int, BeforeValidator(_number_only), Field(ge=0)]
NonNegativeFloat = Annotated[float, BeforeValidator(_number_only), Field(ge=0)]
StrictFlag = Annotated[bool, Strict()]


class StrictModel(BaseModel):
    """Closed contract: unknown fields are rejected, never passed through."""
    model_config = ConfigDict(
        populate_by_name=True,
        extra='forbid'
    )


class FrozenModel(BaseModel):
    """Immutable value object; used for weights and score breakdowns."""
    model_config = ConfigDict(
        extra='forbid',
        frozen=True
    )
