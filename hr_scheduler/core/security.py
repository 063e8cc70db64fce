"""Security utilities for reading bearer tokens issued by the auth service."""

from typing import Optional
from jose import JWTError, jwt

from hr_scheduler.core.config import settings


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT access token."""
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def member_id_from_token(token: str) -> Optional[int]:
    """Return the member id carried in the token subject, if the token is valid."""
    payload = decode_access_token(token)
    if not payload:
        return None
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
