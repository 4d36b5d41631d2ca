"""
Utility functions for the Sarkari Yojana Eligibility Engine
"""

from .bookmarks import BookmarkList
from .security import mask_secret, verify_admin

__all__ = [
    "BookmarkList",
    "mask_secret",
    "verify_admin"
]
