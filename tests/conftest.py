import copy
import datetime as dt
import pytest
from src.models.lead_features import LeadFeatures

NOW = dt.datetime(2025, 6, 1, 12, 0, tzinfo=dt.UTC)


def _base_candidate() -> dict:
    """A valid, mid-range lead-feature record as it arrives from enrichment."""
    return {
        "schema_version": "v1",
        "restaurant": {
            "name": "Casa Verde",
            "website_url": "https://casaverde.example",
            "address": "Calle de Prueba 1",
            "city": "Madrid",
            "neighborhood_guess": "Malasaña",
            "service_style": "casual",
            "price_tier": "mid",
            "cuisine_slugs": ["mediterranean"],
            "contact": {
                "has_contact_page": True,
                "email": "hola@casaverde.example",
                "phone": None,
                "contact_url": "https://casaverde.example/contacto",
                "chef_or_owner_named": False,
                "reservation_platform": "thefork",
            },
            "locations": {"location_count_guess": 1, "is_chain_guess": False},
        },
        "signals": {
            "geo": {"distance_km": 4.0, "delivery_feasible": True, "neighborhood_match": "medium"},
            "menu": {
                "menu_fit": 0.5,
                "uses_target_products": False,
                "target_product_mentions": [],
                "menu_url": None,
                "seasonality_alignment": 0.5,
            },
            "brand": {"sustainability_affinity": 0.5, "local_sourcing_language": False, "keywords": []},
            "operations": {"volume_potential": 0.5, "operational_risk": 0.5},
            "pipeline": {"stage": "new", "last_contacted_at": None, "inbound_interest": False},
        },
        "rubric": {
            "menu_fit_score": 3,
            "local_affinity_score": 3,
            "volume_score": 3,
            "outreach_ease_score": 3,
            "brand_alignment_score": 3,
            "risk_score": 2,
        },
        "confidence": {
            "overall": 0.6,
            "by_factor": {"geo": 0.6, "menu": 0.6, "brand": 0.6, "operations": 0.6, "outreach": 0.6},
        },
        "evidence": [
            {
                "factor": "menu",
                "claim": "Seasonal salads on the menu",
                "source_url": "https://casaverde.example/carta",
                "excerpt": "ensalada de temporada",
            }
        ],
        "missing_info": [],
        "generated_at": "2025-05-30T10:00:00Z",
    }


def _merge(target: dict, overrides: dict) -> dict:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value
    return target


@pytest.fixture
def candidate_factory():
    """Returns a function building candidate dicts with nested overrides."""
    def _create(**overrides):
        return _merge(copy.deepcopy(_base_candidate()), overrides)
    return _create


@pytest.fixture
def features_factory(candidate_factory):
    """Returns a function building validated LeadFeatures with nested overrides."""
    def _create(**overrides):
        return LeadFeatures.model_validate(candidate_factory(**overrides))
    return _create


@pytest.fixture
def mid_features(features_factory):
    return features_factory()


@pytest.fixture
def now():
    return NOW
