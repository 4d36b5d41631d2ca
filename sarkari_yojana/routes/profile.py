"""
API routes for the current profile snapshot and bookmarks
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from ..models.analysis import AnalysisResponse
from ..models.profile import UserProfile
from ..services.eligibility_service import EligibilityService
from ..utils.bookmarks import BookmarkList
from .deps import get_bookmarks, get_eligibility_service

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=UserProfile)
async def get_profile(service: EligibilityService = Depends(get_eligibility_service)):
    """
    Restore the saved profile, or a fresh default one
    """
    profile, _ = await service.restore_session()
    return profile or UserProfile()


@router.put("/profile", response_model=UserProfile)
async def save_profile(
    profile: UserProfile,
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Replace the saved profile snapshot
    """
    await service.save_profile(profile)
    return profile


@router.patch("/profile", response_model=UserProfile)
async def update_profile(
    changes: Dict[str, Any] = Body(...),
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Change individual fields; derived fields are recomputed
    """
    current, _ = await service.restore_session()
    try:
        profile = (current or UserProfile()).updated(**changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await service.save_profile(profile)
    return profile


@router.get("/profile/last-result", response_model=AnalysisResponse)
async def get_last_result(service: EligibilityService = Depends(get_eligibility_service)):
    """
    The most recent analysis of the saved profile
    """
    _, result = await service.restore_session()
    if result is None:
        raise HTTPException(status_code=404, detail="No analysis has been run yet")
    return result


@router.get("/bookmarks", response_model=List[str])
async def list_bookmarks(bookmarks: BookmarkList = Depends(get_bookmarks)):
    return bookmarks.names()


@router.post("/bookmarks/{name}")
async def toggle_bookmark(name: str, bookmarks: BookmarkList = Depends(get_bookmarks)):
    """
    Bookmark a scheme, or remove an existing bookmark
    """
    return {"name": name, "bookmarked": bookmarks.toggle(name)}
