"""
Two-Factor Use Case DTOs
"""

from pydantic import BaseModel


class SendCodeResponse(BaseModel):
    """Same body whether or not the email belongs to an account"""

    message: str


class VerifyCodeResponse(BaseModel):
    """Post-2FA token to exchange for the final session"""

    session_token: str
