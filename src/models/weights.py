"""
Lead Score Weights

Immutable, versioned weight tree governing how signals and rubric scores
combine into a lead score. Alternate versions are substituted whole;
nothing here is ever mutated after construction.
"""
from typing import Annotated, Literal
from pydantic import BaseModel, Field
from src.models.base import FrozenModel

Weight = Annotated[float, Field(ge=0)]
Score100 = Annotated[float, Field(ge=0, le=100)]


# --- SIGNAL WEIGHTS (mirror LeadSignals + outreach) ---

class GeoWeights(FrozenModel):
    delivery_feasible: Weight
    distance: Weight
    neighborhood_match: Weight

class MenuWeights(FrozenModel):
    menu_fit: Weight
    seasonality_alignment: Weight
    uses_target_products: Weight

class BrandWeights(FrozenModel):
    sustainability_affinity: Weight
    local_sourcing_language: Weight

class OperationsWeights(FrozenModel):
    volume_potential: Weight
    operational_risk: Weight  # risk is inverted before weighting

class OutreachWeights(FrozenModel):
    has_contact_page: Weight
    has_email_or_phone: Weight
    chef_or_owner_named: Weight

class PipelineWeights(FrozenModel):
    stage_bonus: Weight
    inbound_interest: Weight
    recency: Weight

class SignalWeights(FrozenModel):
    geo: GeoWeights
    menu: MenuWeights
    brand: BrandWeights
    operations: OperationsWeights
    outreach: OutreachWeights
    pipeline: PipelineWeights


class RubricWeights(FrozenModel):
    menu_fit_score: Weight
    local_affinity_score: Weight
    volume_score: Weight
    outreach_ease_score: Weight
    brand_alignment_score: Weight
    risk_score: Weight  # inverted before weighting

    def total(self) -> float:
        return sum_leaf_weights(self)


class BlendWeights(FrozenModel):
    signals: Weight
    rubric: Weight

class ConfidenceWeights(FrozenModel):
    min_multiplier: Annotated[float, Field(ge=0, le=1.0)]


# --- RULES ---

class DeliveryNotFeasibleRule(FrozenModel):
    mode: Literal["hard_zero", "cap"]
    cap_score: Score100

class DistanceUnknownRule(FrozenModel):
    cap_score: Score100

class StageFreezeRule(FrozenModel):
    won_score: Score100
    lost_score: Score100

class ScoringRules(FrozenModel):
    delivery_not_feasible: DeliveryNotFeasibleRule
    distance_unknown: DistanceUnknownRule
    stage_freeze: StageFreezeRule
    chain_bonus: Weight
    fine_dining_bonus: Weight
    fast_casual_penalty: Weight


class LeadScoreWeights(FrozenModel):
    """A complete, named scoring configuration."""
    version: str = Field(..., min_length=1)
    signals: SignalWeights
    rubric: RubricWeights
    blend: BlendWeights
    confidence: ConfidenceWeights
    rules: ScoringRules

    def signals_total(self) -> float:
        """Sum of every leaf weight in the signals tree, used for normalization."""
        return sum_leaf_weights(self.signals)


def sum_leaf_weights(node: BaseModel) -> float:
    """
    Recursively sum every numeric leaf of a weight tree.

    Adding a new signal only requires adding its weight field; it is
    picked up here without touching the normalization code.
    """
    total = 0.0
    for name in type(node).model_fields:
        value = getattr(node, name)
        if isinstance(value, BaseModel):
            total += sum_leaf_weights(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            total += float(value)
    return total


DEFAULT_WEIGHTS_V1 = LeadScoreWeights(
    version="default_v1",
    signals=SignalWeights(
        geo=GeoWeights(delivery_feasible=0.10, distance=0.10, neighborhood_match=0.05),
        menu=MenuWeights(menu_fit=0.20, seasonality_alignment=0.05, uses_target_products=0.05),
        brand=BrandWeights(sustainability_affinity=0.08, local_sourcing_language=0.05),
        operations=OperationsWeights(volume_potential=0.12, operational_risk=0.12),
        outreach=OutreachWeights(has_contact_page=0.04, has_email_or_phone=0.07, chef_or_owner_named=0.02),
        pipeline=PipelineWeights(stage_bonus=0.03, inbound_interest=0.04, recency=0.03),
    ),
    rubric=RubricWeights(
        menu_fit_score=0.20,
        local_affinity_score=0.15,
        volume_score=0.15,
        outreach_ease_score=0.20,
        brand_alignment_score=0.20,
        risk_score=0.10,
    ),
    blend=BlendWeights(signals=0.65, rubric=0.35),
    confidence=ConfidenceWeights(min_multiplier=0.70),
    rules=ScoringRules(
        delivery_not_feasible=DeliveryNotFeasibleRule(mode="cap", cap_score=20),
        distance_unknown=DistanceUnknownRule(cap_score=60),
        stage_freeze=StageFreezeRule(won_score=100, lost_score=0),
        chain_bonus=3,
        fine_dining_bonus=2,
        fast_casual_penalty=2,
    ),
)
