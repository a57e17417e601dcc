"""
Password Reset Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel, Field


class ResetLinkDelivery(BaseModel):
    """Reset email waiting to be sent once the response is out"""

    user_id: str
    email: str
    subject: str
    body: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    message: str
    delivery: Optional[ResetLinkDelivery] = Field(default=None, exclude=True)


class ValidatePasswordResetTokenResponse(BaseModel):
    """Response for validate token use case"""

    valid: bool
    user_id: Optional[str] = None


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    message: str
