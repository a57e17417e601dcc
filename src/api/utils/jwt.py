from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig
from src.domain.entities import UserRole


def generate_jwt(
    user_id: UUID, email: str, role: UserRole, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        email: Normalized email
        role: User role (youth, organization, admin)
        expires_delta: Token lifetime, SESSION_TTL_MINUTES when omitted

    Returns:
        JWT token string (HS256)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ApplicationConfig.SESSION_TTL_MINUTES)

    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "user_id": str(user_id),
        "email": email,
        "role": role.name,
        "role_code": int(role),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
