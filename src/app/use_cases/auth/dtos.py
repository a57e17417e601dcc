"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the login and registration flows.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent"""

    full_name: str
    email: str
    password: str
    phone: Optional[str] = None
    role: str = "youth"


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """
    Response for the password step of login.

    Either a 2FA challenge (session_token set) or, for accounts without
    2FA, the final access token.
    """

    requires_two_factor: bool
    session_token: Optional[str] = None
    two_factor_method: Optional[str] = None
    delivery_channel: Optional[str] = None
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None


class PendingLoginResponse(BaseModel):
    """Identity attached to a valid pre-2FA token"""

    user_id: str
    email: str


class SessionResponse(BaseModel):
    """Final authenticated session"""

    access_token: str
    token_type: str
    expires_in: int
    user_id: str
    email: str
    role: str


class RegisteredUser(BaseModel):
    id: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: str
    role_code: int
    status: str


class RegisterResponse(BaseModel):
    """Response for registration use case"""

    user: RegisteredUser
