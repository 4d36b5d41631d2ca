"""
Request-scoped accessors for the handles created at startup
"""
from fastapi import HTTPException, Request

from ..errors import CollaboratorError, MissingCredential, StoreUnavailable, requires_credential_setup
from ..services.eligibility_service import EligibilityService
from ..services.store_service import LocalStore
from ..utils.bookmarks import BookmarkList


def get_store(request: Request) -> LocalStore:
    return request.app.state.store


def get_eligibility_service(request: Request) -> EligibilityService:
    return request.app.state.eligibility_service


def get_bookmarks(request: Request) -> BookmarkList:
    return request.app.state.bookmarks


def to_http_exception(exc: Exception) -> HTTPException:
    """Map store and collaborator errors onto HTTP responses"""
    action = "configure_credentials" if requires_credential_setup(exc) else None
    if isinstance(exc, StoreUnavailable):
        status_code = 503
    elif isinstance(exc, MissingCredential):
        status_code = 401
    elif isinstance(exc, CollaboratorError):
        status_code = 429 if exc.quota_exceeded else 502
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail={"message": str(exc), "action": action})
