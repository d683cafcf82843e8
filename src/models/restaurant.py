from enum import StrEnum
from typing import List, Literal, Optional
from pydantic import Field
from src.models.base import CountInt, StrictFlag, StrictModel, UnitFloat

SCHEMA_VERSION_V1 = "v1"


class ServiceStyle(StrEnum):
    FINE_DINING = "fine_dining"
    CASUAL = "casual"
    FAST_CASUAL = "fast_casual"
    TAKEAWAY = "takeaway"
    BAR_CAFE = "bar_cafe"
    HOTEL = "hotel"
    UNKNOWN = "unknown"

class PriceTier(StrEnum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"
    UNKNOWN = "unknown"

class ReservationPlatform(StrEnum):
    OPENTABLE = "opentable"
    THEFORK = "thefork"
    RESY = "resy"
    SEVENROOMS = "sevenrooms"
    PHONE_ONLY = "phone_only"
    UNKNOWN = "unknown"
    NONE = "none"

class PersonRole(StrEnum):
    CHEF = "chef"
    HEAD_CHEF = "head_chef"
    EXECUTIVE_CHEF = "executive_chef"
    OWNER = "owner"
    GENERAL_MANAGER = "general_manager"
    RESTAURANT_MANAGER = "restaurant_manager"
    SOMMELIER = "sommelier"
    PROCUREMENT = "procurement"
    UNKNOWN = "unknown"

class SourceType(StrEnum):
    WEBSITE = "website"
    GOOGLE_LISTING = "google_listing"
    THEFORK = "thefork"
    MICHELIN = "michelin"
    LINKEDIN = "linkedin"
    PRESS = "press"
    OTHER = "other"


class RestaurantContact(StrictModel):
    has_contact_page: StrictFlag
    email: Optional[str] = None
    phone: Optional[str] = None
    contact_url: Optional[str] = None
    chef_or_owner_named: StrictFlag = False
    reservation_platform: ReservationPlatform

    @property
    def has_email_or_phone(self) -> bool:
        """True when either channel is a non-blank string."""
        return bool((self.email and self.email.strip()) or (self.phone and self.phone.strip()))


def _default_contact() -> RestaurantContact:
    return RestaurantContact(
        has_contact_page=False,
        chef_or_owner_named=False,
        reservation_platform=ReservationPlatform.UNKNOWN,
    )


class RestaurantLocations(StrictModel):
    location_count_guess: CountInt
    is_chain_guess: StrictFlag = False


class Restaurant(StrictModel):
    """Identity and static attributes of a restaurant lead."""
    name: str
    website_url: Optional[str]

    address: Optional[str] = None
    city: Optional[str] = None
    neighborhood_guess: Optional[str] = None

    service_style: ServiceStyle
    price_tier: PriceTier
    cuisine_slugs: List[str] = Field(default_factory=list)

    contact: RestaurantContact = Field(default_factory=_default_contact)
    locations: RestaurantLocations = Field(
        default_factory=lambda: RestaurantLocations(location_count_guess=0, is_chain_guess=False)
    )


class RestaurantProfile(Restaurant):
    """Standalone profile returned by enrichment alongside the lead features."""
    schema_version: Literal["v1"]


class RestaurantPersonCandidate(StrictModel):
    """A named decision-maker found while enriching a restaurant."""
    role: PersonRole
    full_name: str = Field(..., min_length=1)
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None

    source_url: Optional[str]
    source_type: SourceType
    evidence_excerpt: str = Field(..., min_length=1, description="Verbatim snippet from the source.")
    confidence: UnitFloat
