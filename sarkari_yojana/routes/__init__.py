"""
API routes for the Sarkari Yojana Eligibility Engine
"""

from .schemes import router as schemes_router
from .eligibility import router as eligibility_router
from .profile import router as profile_router
from .admin import router as admin_router

__all__ = [
    "schemes_router",
    "eligibility_router",
    "profile_router",
    "admin_router"
]
