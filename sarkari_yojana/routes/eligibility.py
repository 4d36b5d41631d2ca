"""
API routes for eligibility analysis
"""
import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..errors import CollaboratorError, MissingCredential
from ..models.profile import UserProfile
from ..services.eligibility_service import AnalysisOutcome, EligibilityService
from .deps import get_eligibility_service, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/analyze", response_model=AnalysisOutcome)
async def analyze_eligibility(
    profile: UserProfile,
    max_age_hours: Optional[float] = Query(None, gt=0, description="Reject cached results older than this"),
    refresh: bool = Query(False, description="Bypass the analysis cache"),
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Find the schemes a profile qualifies for
    """
    max_age = timedelta(hours=max_age_hours) if max_age_hours else None
    try:
        return await service.analyze(profile, max_age=max_age, use_cache=not refresh)
    except (MissingCredential, CollaboratorError) as e:
        logger.error(f"Eligibility analysis failed: {e}")
        raise to_http_exception(e)
