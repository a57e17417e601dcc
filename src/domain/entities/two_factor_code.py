"""
TwoFactorCode Entity

One-time verification code delivered by SMS or email.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class TwoFactorCode(SQLModel, table=True):
    """
    TwoFactorCode entity - 6-character code bound to a user.

    Business Rules:
    - Alphabet A-Z0-9, stored uppercase, compared case-insensitively
    - Expires after 10 minutes
    - Issuing a resend marks every unused code of the user as used
    """

    __tablename__ = "two_factor_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    code: str = Field(max_length=6)

    used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_two_factor_code_user_code", "user_id", "code"),
        Index("idx_two_factor_code_expires_at", "expires_at"),
    )
