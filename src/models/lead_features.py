import datetime as dt
from enum import StrEnum
from typing import List, Literal, Optional
from pydantic import Field
from src.models.base import StrictModel, StrictFlag, UnitFloat, RubricInt, NonNegativeFloat
from src.models.restaurant import Restaurant, RestaurantProfile, RestaurantPersonCandidate


class NeighborhoodMatch(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

class PipelineStage(StrEnum):
    NEW = "new"
    RESEARCHED = "researched"
    CONTACTED = "contacted"
    RESPONDED = "responded"
    MEETING_SET = "meeting_set"
    WON = "won"
    LOST = "lost"

class EvidenceFactor(StrEnum):
    GEO = "geo"
    MENU = "menu"
    BRAND = "brand"
    OPERATIONS = "operations"
    OUTREACH = "outreach"
    PRICE = "price"
    CUISINE = "cuisine"


# --- SIGNAL GROUPS ---

class GeoSignals(StrictModel):
    # None means the distance could not be measured
    distance_km: Optional[NonNegativeFloat]
    delivery_feasible: StrictFlag
    neighborhood_match: NeighborhoodMatch = NeighborhoodMatch.UNKNOWN

class ProductMention(StrictModel):
    product_slug: str
    mention_text: str

class MenuSignals(StrictModel):
    menu_fit: UnitFloat
    uses_target_products: StrictFlag
    target_product_mentions: List[ProductMention]
    menu_url: Optional[str] = None
    seasonality_alignment: UnitFloat = 0.5

class BrandSignals(StrictModel):
    sustainability_affinity: UnitFloat
    local_sourcing_language: StrictFlag
    keywords: List[str] = Field(default_factory=list)

class OperationsSignals(StrictModel):
    volume_potential: UnitFloat
    operational_risk: UnitFloat  # higher is worse
    opening_hours_known: StrictFlag = False
    catering_or_events: StrictFlag = False
    delivery_or_takeaway: StrictFlag = False

class PipelineSignals(StrictModel):
    stage: PipelineStage
    last_contacted_at: Optional[dt.datetime]
    inbound_interest: StrictFlag = False

class LeadSignals(StrictModel):
    geo: GeoSignals
    menu: MenuSignals
    brand: BrandSignals
    operations: OperationsSignals
    pipeline: PipelineSignals


# --- RUBRIC, CONFIDENCE, EVIDENCE ---

class LeadRubric(StrictModel):
    """Coarse 0-5 human-style scores. risk_score is higher-is-worse."""
    menu_fit_score: RubricInt
    local_affinity_score: RubricInt
    volume_score: RubricInt
    outreach_ease_score: RubricInt
    brand_alignment_score: RubricInt
    risk_score: RubricInt

class FactorConfidence(StrictModel):
    geo: UnitFloat
    menu: UnitFloat
    brand: UnitFloat
    operations: UnitFloat
    outreach: UnitFloat

class LeadConfidence(StrictModel):
    overall: UnitFloat
    by_factor: FactorConfidence

class Evidence(StrictModel):
    """Audit trail entry. Never used numerically."""
    factor: EvidenceFactor
    claim: str
    source_url: Optional[str]
    excerpt: str


class LeadFeatures(StrictModel):
    """
    The validated input to lead scoring.

    Produced upstream by scraping + LLM extraction, validated here,
    then handed to the scoring engine as-is.
    """
    schema_version: Literal["v1"]

    restaurant: Restaurant
    signals: LeadSignals
    rubric: LeadRubric
    confidence: LeadConfidence
    evidence: List[Evidence]
    missing_info: List[str] = Field(default_factory=list)

    generated_at: dt.datetime


class EnrichOutput(StrictModel):
    """Everything one enrichment pass returns for a restaurant."""
    profile: RestaurantProfile
    lead_features: LeadFeatures
    people: List[RestaurantPersonCandidate]
