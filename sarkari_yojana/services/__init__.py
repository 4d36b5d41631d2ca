"""
Services package for the Sarkari Yojana Eligibility Engine
"""

from .store_service import LocalStore, UpsertOutcome
from .seeding import SeedReport, seed_reference_catalog
from .reasoning_service import ReasoningClient
from .eligibility_service import EligibilityService, AnalysisOutcome

__all__ = [
    "LocalStore",
    "UpsertOutcome",
    "SeedReport",
    "seed_reference_catalog",
    "ReasoningClient",
    "EligibilityService",
    "AnalysisOutcome"
]
