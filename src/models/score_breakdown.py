from enum import StrEnum
from typing import List
from pydantic import computed_field
from src.models.base import FrozenModel


class ScoreTier(StrEnum):
    HOT = "hot"
    WARM = "warm"
    COOL = "cool"
    COLD = "cold"

# Lower bound (inclusive) of each tier on the final 0-100 score
TIER_HOT_MIN = 75
TIER_WARM_MIN = 50
TIER_COOL_MIN = 25


class ScoreComponents(FrozenModel):
    signals_score_0_1: float
    rubric_score_0_1: float
    blended_score_0_1: float


class ScoreBreakdown(FrozenModel):
    """
    Result of scoring one lead.

    raw -> after_confidence -> final, plus the multiplier applied and an
    ordered, human-readable rationale.
    """
    raw: float
    after_confidence: float
    final: float
    confidence_multiplier: float
    reasons: List[str]
    components: ScoreComponents

    @computed_field
    @property
    def tier(self) -> ScoreTier:
        if self.final >= TIER_HOT_MIN:
            return ScoreTier.HOT
        if self.final >= TIER_WARM_MIN:
            return ScoreTier.WARM
        if self.final >= TIER_COOL_MIN:
            return ScoreTier.COOL
        return ScoreTier.COLD
