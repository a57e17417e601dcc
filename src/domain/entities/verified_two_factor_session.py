"""
VerifiedTwoFactorSession Entity

Post-2FA bridge token: identity fully proven, last hop before the session.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class VerifiedTwoFactorSession(SQLModel, table=True):
    """
    VerifiedTwoFactorSession entity - "this identity is fully proven".

    Business Rules:
    - Minted only after a one-time code is verified
    - Expires after 5 minutes
    - Redemption is destructive: the first successful read consumes it
    """

    __tablename__ = "verified_two_factor_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    email: str = Field(max_length=254)

    used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_verified_2fa_session_expires_at", "expires_at"),)
