"""
Static admin credential check and secret masking
"""
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..config import settings

http_basic = HTTPBasic()


def verify_admin(credentials: HTTPBasicCredentials = Depends(http_basic)) -> str:
    """Check the single configured admin email/password pair"""
    email_ok = secrets.compare_digest(credentials.username.encode("utf-8"), settings.admin_email.encode("utf-8"))
    password_ok = secrets.compare_digest(credentials.password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    if not (email_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied",
            headers={"WWW-Authenticate": "Basic"}
        )
    return credentials.username


def mask_secret(value: str, visible: int = 4) -> str:
    """Show only the last few characters of a secret"""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
