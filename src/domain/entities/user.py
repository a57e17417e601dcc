"""
User Entity

Identity record read and written by the authentication core.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import TwoFactorMethod, UserRole, UserStatus


class User(SQLModel, table=True):
    """
    User entity - a person who signs in to the park portal.

    Business Rules:
    - Email is unique and stored normalized (trimmed, lower-cased)
    - password_hash is NULL for accounts created through OAuth sign-in
    - Password stored as bcrypt hash (salt embedded, cost factor 12)
    - Banned users can never complete a login
    - Never hard-deleted by the authentication core
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=254)
    password_hash: Optional[str] = Field(default=None, max_length=60)

    full_name: str = Field(default="", max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    role: UserRole = Field(default=UserRole.youth)

    status: UserStatus = Field(default=UserStatus.pending)
    banned: bool = Field(default=False)
    email_verified: bool = Field(default=False)

    # Second factor configuration
    two_factor_enabled: bool = Field(default=False)
    two_factor_method: Optional[TwoFactorMethod] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_banned", "banned"),
        Index("idx_user_status", "status"),
    )
