"""
Models package for the Sarkari Yojana Eligibility Engine
"""

from .scheme import (
    Scheme,
    ApplicationInfo,
    Government,
    EligibilityStatus,
    ApplicationType,
    SchemeStatus,
    SchemeOrigin,
    SchemeDecodeResult,
    decode_scheme,
    decode_schemes
)

from .profile import (
    UserProfile,
    demo_profile
)

from .analysis import (
    AnalysisResponse,
    AgentLogEntry,
    EligibilityRequest,
    GroundingSource,
    SubmissionRecord
)

__all__ = [
    # Scheme models
    "Scheme",
    "ApplicationInfo",
    "Government",
    "EligibilityStatus",
    "ApplicationType",
    "SchemeStatus",
    "SchemeOrigin",
    "SchemeDecodeResult",
    "decode_scheme",
    "decode_schemes",
    
    # Profile models
    "UserProfile",
    "demo_profile",
    
    # Analysis and record models
    "AnalysisResponse",
    "AgentLogEntry",
    "EligibilityRequest",
    "GroundingSource",
    "SubmissionRecord"
]
