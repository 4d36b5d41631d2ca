"""
Admin routes: API keys, catalog refresh, dummy mode and audit views
"""
import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ..errors import CollaboratorError, MissingCredential
from ..models.analysis import AgentLogEntry, SubmissionRecord
from ..models.profile import UserProfile, demo_profile
from ..models.scheme import Government
from ..services.eligibility_service import DUMMY_MODE_SETTING, EligibilityService
from ..services.reasoning_service import API_KEYS_SETTING
from ..services.store_service import LocalStore
from ..utils.security import mask_secret, verify_admin
from .deps import get_eligibility_service, get_store, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(verify_admin)])


class ApiKeys(BaseModel):
    gemini: str = ""
    groq: str = ""


class DummyMode(BaseModel):
    enabled: bool


@router.get("/api-keys", response_model=ApiKeys)
async def get_api_keys(store: LocalStore = Depends(get_store)):
    """
    Stored API keys, masked
    """
    stored = await store.get_setting(API_KEYS_SETTING) or {}
    keys = ApiKeys.model_validate(stored)
    return ApiKeys(gemini=mask_secret(keys.gemini), groq=mask_secret(keys.groq))


@router.put("/api-keys")
async def save_api_keys(keys: ApiKeys, store: LocalStore = Depends(get_store)):
    """
    Save API keys permanently
    """
    await store.set_setting(API_KEYS_SETTING, keys)
    logger.info("API keys updated from admin panel")
    return {"saved": True}


@router.post("/refresh-catalog")
async def refresh_catalog(
    government: Government = Query(Government.STATE),
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Pull current schemes from the reasoning service into the catalog
    """
    try:
        outcomes = await service.refresh_catalog(government)
    except (MissingCredential, CollaboratorError) as e:
        logger.error(f"Catalog refresh failed: {e}")
        raise to_http_exception(e)
    return {"government": government, "outcomes": outcomes}


@router.put("/dummy-mode")
async def set_dummy_mode(mode: DummyMode, store: LocalStore = Depends(get_store)):
    """
    In dummy mode analyses are not persisted
    """
    await store.set_setting(DUMMY_MODE_SETTING, mode.enabled)
    return {"enabled": mode.enabled}


@router.get("/demo-profile", response_model=UserProfile)
async def get_demo_profile():
    return demo_profile()


@router.get("/logs", response_model=List[AgentLogEntry])
async def get_logs(limit: int = Query(50, ge=1, le=500), store: LocalStore = Depends(get_store)):
    return await store.get_logs(limit=limit)


@router.get("/submissions", response_model=List[SubmissionRecord])
async def get_submissions(limit: int = Query(50, ge=1, le=500), store: LocalStore = Depends(get_store)):
    return await store.list_submissions(limit=limit)


@router.get("/status")
async def get_status(store: LocalStore = Depends(get_store)) -> Dict[str, object]:
    """
    Schema version and seeding summary
    """
    report = store.seed_report
    return {
        "schema_version": await store.schema_version(),
        "schemes": len(await store.get_all_schemes()),
        "seed_report": report.model_dump() if report else None
    }
