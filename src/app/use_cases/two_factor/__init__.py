"""
Two-Factor Use Cases

Code resend and verification.
"""

from .dtos import SendCodeResponse, VerifyCodeResponse
from .send_code_use_case import SendTwoFactorCodeUseCase
from .verify_code_use_case import VerifyTwoFactorCodeUseCase

__all__ = [
    "SendTwoFactorCodeUseCase",
    "VerifyTwoFactorCodeUseCase",
    "SendCodeResponse",
    "VerifyCodeResponse",
]
