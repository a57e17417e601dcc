"""
Password Reset Use Cases
"""

from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    ConfirmPasswordResetResponse,
    RequestPasswordResetResponse,
    ResetLinkDelivery,
    ValidatePasswordResetTokenResponse,
)
from .request_password_reset_use_case import RequestPasswordResetUseCase, send_reset_link
from .validate_password_reset_token_use_case import ValidatePasswordResetTokenUseCase

__all__ = [
    "RequestPasswordResetUseCase",
    "send_reset_link",
    "ValidatePasswordResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "RequestPasswordResetResponse",
    "ResetLinkDelivery",
    "ValidatePasswordResetTokenResponse",
    "ConfirmPasswordResetResponse",
]
