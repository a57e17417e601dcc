"""
PasswordResetToken Entity

One-time capability to set a new password.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Expires after 1 hour
    - Token is 32 random bytes, hex encoded; only its SHA-256 hash is stored
    - Single-use: marked as used by a conditional update on confirmation
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(unique=True, max_length=64)

    used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_used", "used"),
    )
