"""Services package."""
from src.services.lead_scoring_service import (
    LeadScoringService,
    LeadScoreSink,
    LogOnlySink,
    ScoredLead,
    get_lead_scoring_service,
)

__all__ = [
    "LeadScoringService",
    "LeadScoreSink",
    "LogOnlySink",
    "ScoredLead",
    "get_lead_scoring_service",
]
