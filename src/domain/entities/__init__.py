"""
Park Portal Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserStatus,
    UserRole,
    TwoFactorMethod,
    DeliveryChannel,
    parse_role,
)

# Export all entities
from .user import User
from .password_reset_token import PasswordResetToken
from .two_factor_code import TwoFactorCode
from .temp_login_session import TempLoginSession
from .verified_two_factor_session import VerifiedTwoFactorSession
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "UserStatus",
    "UserRole",
    "TwoFactorMethod",
    "DeliveryChannel",
    "parse_role",
    # Entities
    "User",
    "PasswordResetToken",
    "TwoFactorCode",
    "TempLoginSession",
    "VerifiedTwoFactorSession",
    "AuditEvent",
]
