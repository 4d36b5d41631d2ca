"""
Eligibility service: cache-first analysis, session restore and catalog refresh
"""
import logging
from collections import Counter
from datetime import timedelta
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ValidationError

from ..errors import CollaboratorError, MissingCredential
from ..models.analysis import AgentLogEntry, AnalysisResponse
from ..models.profile import UserProfile
from ..models.scheme import Government, SchemeOrigin
from .reasoning_service import ReasoningClient
from .store_service import LocalStore

logger = logging.getLogger(__name__)

# App data and settings keys
CURRENT_PROFILE_KEY = "current_profile"
LAST_RESULT_KEY = "last_result"
DUMMY_MODE_SETTING = "dummy_mode"


class AnalysisOutcome(BaseModel):
    """Analysis plus whether it was served from the cache"""
    response: AnalysisResponse
    from_cache: bool = False
    fingerprint: str
    submission_seq: Optional[int] = None


class EligibilityService:
    """Orchestrates the store and the reasoning client for one process"""
    
    def __init__(self, store: LocalStore, client: ReasoningClient):
        self.store = store
        self.client = client
    
    async def is_dummy_mode(self) -> bool:
        return bool(await self.store.get_setting(DUMMY_MODE_SETTING, False))
    
    async def analyze(
        self,
        profile: UserProfile,
        max_age: Optional[timedelta] = None,
        use_cache: bool = True
    ) -> AnalysisOutcome:
        """
        Analyze eligibility for a profile, serving from the cache when possible
        
        Args:
            profile: Citizen profile
            max_age: Oldest cached result still acceptable (None accepts any age)
            use_cache: Skip the cache lookup when False
        
        Returns:
            AnalysisOutcome with the response and cache provenance
        
        Raises:
            MissingCredential: no API key configured
            CollaboratorError: the reasoning call failed
        """
        fingerprint = profile.fingerprint()
        dummy_mode = await self.is_dummy_mode()
        
        if use_cache:
            cached = await self.store.get_cache(fingerprint)
            if cached is not None and cached.is_fresh(max_age):
                logger.info(f"Analysis cache hit for {fingerprint[:12]}")
                if not dummy_mode:
                    await self._save_session(profile, cached)
                return AnalysisOutcome(response=cached, from_cache=True, fingerprint=fingerprint)
            logger.info(f"Analysis cache miss for {fingerprint[:12]}")
        
        try:
            response = await self.client.analyze_eligibility(profile)
        except (MissingCredential, CollaboratorError) as e:
            await self._log("eligibility", "analyze", str(e), status="failed")
            raise
        
        await self._log(
            "eligibility",
            "analyze",
            f"{len(response.eligible_schemes)} schemes matched"
            + (f"; {response.parse_warning}" if response.parse_warning else "")
        )
        
        seq = None
        if dummy_mode:
            logger.info("Dummy mode active: analysis not persisted")
        else:
            await self.store.save_cache(fingerprint, response)
            await self._save_session(profile, response)
            seq = await self.store.append_submission(profile)
        
        return AnalysisOutcome(response=response, fingerprint=fingerprint, submission_seq=seq)
    
    async def _save_session(self, profile: UserProfile, response: AnalysisResponse) -> None:
        await self.store.save_app_data(CURRENT_PROFILE_KEY, profile)
        await self.store.save_app_data(LAST_RESULT_KEY, response)
    
    async def save_profile(self, profile: UserProfile) -> None:
        await self.store.save_app_data(CURRENT_PROFILE_KEY, profile)
    
    async def restore_session(self) -> Tuple[Optional[UserProfile], Optional[AnalysisResponse]]:
        """Profile snapshot and last result of the previous session, if any"""
        profile = result = None
        raw_profile = await self.store.get_app_data(CURRENT_PROFILE_KEY)
        raw_result = await self.store.get_app_data(LAST_RESULT_KEY)
        try:
            if raw_profile is not None:
                profile = UserProfile.model_validate(raw_profile)
            if raw_result is not None:
                result = AnalysisResponse.model_validate(raw_result)
        except ValidationError as e:
            logger.warning(f"Stored session data unreadable: {e}")
        return profile, result
    
    async def refresh_catalog(self, government: Government) -> Dict[str, int]:
        """
        Pull current schemes from the collaborator into the store
        
        Returns:
            Counts per upsert outcome
        """
        try:
            schemes = await self.client.fetch_master_schemes(government)
        except (MissingCredential, CollaboratorError) as e:
            await self._log("catalog", f"refresh_{government.value}", str(e), status="failed")
            raise
        
        outcomes = Counter()
        for scheme in schemes:
            outcome = await self.store.upsert_scheme(scheme.model_copy(update={"origin": SchemeOrigin.COLLABORATOR}))
            outcomes[outcome.value] += 1
        
        await self._log("catalog", f"refresh_{government.value}", f"{len(schemes)} schemes fetched: {dict(outcomes)}")
        return dict(outcomes)
    
    async def _log(self, agent: str, action: str, description: str, status: str = "success") -> None:
        await self.store.add_log(AgentLogEntry(agent=agent, action=action, description=description, status=status))
