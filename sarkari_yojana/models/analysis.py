"""
Pydantic models for eligibility requests, analysis results and store records
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field

from .profile import UserProfile
from .scheme import Scheme


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class GroundingSource(BaseModel):
    """Web page the collaborator cited while answering"""
    uri: str = ""
    title: str = ""


class EligibilityRequest(BaseModel):
    """Context payload sent to the reasoning collaborator"""
    profile: Dict[str, str] = Field(..., description="Profile fields, verbatim")
    scheme_context: List[Dict[str, Any]] = Field(default_factory=list, description="Name and criteria of each known scheme")
    signals: Dict[str, str] = Field(default_factory=dict, description="Derived signals to weigh explicitly")


class AnalysisResponse(BaseModel):
    """Result of one eligibility analysis"""
    narrative: str = Field(
        default="",
        validation_alias=AliasChoices("narrative", "hindiContent"),
        description="Explanation shown to the user"
    )
    eligible_schemes: List[Scheme] = Field(default_factory=list, description="Matched schemes, in order")
    grounding_sources: List[GroundingSource] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=get_current_utc_time)
    parse_warning: Optional[str] = Field(default=None, description="Set when the structured part could not be read")
    
    def age(self, now: Optional[datetime] = None) -> timedelta:
        now = now or get_current_utc_time()
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return now - created
    
    def is_fresh(self, max_age: Optional[timedelta]) -> bool:
        """True when no max age is given or the result is younger than it"""
        if max_age is None:
            return True
        return self.age() <= max_age


class SubmissionRecord(BaseModel):
    """Append-only snapshot of a profile at analysis time"""
    seq: int = Field(..., ge=1)
    fingerprint: str
    profile: UserProfile
    submitted_at: datetime = Field(default_factory=get_current_utc_time)


class AgentLogEntry(BaseModel):
    """Audit entry for one reasoning collaborator action"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = Field(default_factory=get_current_utc_time)
    agent: str
    action: str
    description: str = ""
    status: Literal["success", "failed"] = "success"
