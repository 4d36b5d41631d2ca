"""
API routes for the scheme catalog and reference data
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..catalog import reference_data
from ..models.scheme import Government, Scheme
from ..services.store_service import LocalStore
from .deps import get_store

router = APIRouter(tags=["schemes"])


@router.get("/schemes", response_model=List[Scheme])
async def get_schemes(
    government: Optional[Government] = Query(None, description="Filter by issuing government"),
    store: LocalStore = Depends(get_store)
):
    """
    Get all schemes in catalog order
    """
    schemes = await store.get_all_schemes()
    if government:
        schemes = [s for s in schemes if s.government == government]
    return schemes


@router.get("/schemes/{name}", response_model=Scheme)
async def get_scheme(name: str, store: LocalStore = Depends(get_store)):
    """
    Get a specific scheme by name
    """
    scheme = await store.get_scheme(name)
    if not scheme:
        raise HTTPException(status_code=404, detail=f"Scheme not found: {name}")
    return scheme


@router.get("/reference")
async def get_reference_data():
    """
    Enumerated values for the profile form
    """
    return reference_data()
