from datetime import timedelta
from uuid import UUID

from src.api.utils.jwt import generate_jwt
from src.app.services.session_issuer import ISessionIssuer, IssuedSession
from src.domain.entities import UserRole


class JwtSessionIssuer(ISessionIssuer):
    """Final session as an HS256 JWT access token"""

    def __init__(self, ttl: timedelta):
        self.ttl = ttl

    def issue(self, user_id: UUID, email: str, role: UserRole) -> IssuedSession:
        access_token = generate_jwt(user_id, email, role, expires_delta=self.ttl)
        return IssuedSession(
            access_token=access_token,
            token_type="bearer",
            expires_in=int(self.ttl.total_seconds()),
        )
