"""
TempLoginSession Entity

Pre-2FA bridge token: password verified, code not yet accepted.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class TempLoginSession(SQLModel, table=True):
    """
    TempLoginSession entity - "we know who is trying to log in".

    Business Rules:
    - One per login attempt, expires after 15 minutes
    - Reading it does not consume it; code verification invalidates it
    - Grants no access by itself
    """

    __tablename__ = "temp_login_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    email: str = Field(max_length=254)

    used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_temp_login_session_expires_at", "expires_at"),)
