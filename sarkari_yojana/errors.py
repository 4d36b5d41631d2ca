"""
Error taxonomy shared by the store, the reasoning client and the API layer
"""
from typing import Optional


class YojanaError(Exception):
    """Base class for all errors raised by this package"""


class StoreUnavailable(YojanaError):
    """The local store could not be opened or its schema could not be upgraded"""


class MissingCredential(YojanaError):
    """No usable API key is configured for the reasoning collaborator"""

    def __init__(self, message: str = "API key not found. Please set it in the Admin Panel."):
        super().__init__(message)


class CollaboratorError(YojanaError):
    """The reasoning collaborator call failed or was rejected"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        quota_exceeded: bool = False,
        credential_rejected: bool = False
    ):
        super().__init__(message)
        self.status_code = status_code
        self.quota_exceeded = quota_exceeded
        self.credential_rejected = credential_rejected


class MalformedResponse(YojanaError):
    """Structured segment of a collaborator reply is missing or not valid JSON"""


def requires_credential_setup(exc: BaseException) -> bool:
    """True when the user should be sent to credential configuration"""
    if isinstance(exc, MissingCredential):
        return True
    if isinstance(exc, CollaboratorError):
        return exc.quota_exceeded or exc.credential_rejected
    return False
