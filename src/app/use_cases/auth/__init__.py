"""
Authentication Use Cases

Login state machine and registration.
"""

from .complete_login_use_case import CompleteLoginUseCase
from .dtos import (
    LoginResponse,
    PendingLoginResponse,
    RegisterCommand,
    RegisterResponse,
    SessionResponse,
)
from .get_pending_login_use_case import GetPendingLoginUseCase
from .login_use_case import LoginUseCase
from .register_use_case import RegisterUseCase

__all__ = [
    "LoginUseCase",
    "GetPendingLoginUseCase",
    "CompleteLoginUseCase",
    "RegisterUseCase",
    "RegisterCommand",
    "RegisterResponse",
    "LoginResponse",
    "PendingLoginResponse",
    "SessionResponse",
]
