"""
Credential Verifier

Checks an email + password pair against the credential store.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services import errors
from src.app.services.password_hasher import check_password, dummy_check
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import TwoFactorMethod, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Public identity of a verified user. Never carries the password hash."""

    id: UUID
    email: str
    full_name: str
    role: UserRole
    two_factor_enabled: bool
    two_factor_method: Optional[TwoFactorMethod]
    phone: Optional[str]


class CredentialVerifier:
    """
    Verifies email + password.

    Business Rules:
    - Email is normalized before lookup
    - Unknown account and wrong password fail identically
    - A bcrypt comparison runs on every path, including banned accounts
    - Banned accounts fail with ACCOUNT_BANNED even with the right password

    Runs inside the caller's unit of work; never commits.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def verify(self, email: str, password: str) -> Result[AuthenticatedUser]:
        try:
            email = normalize_email(email)
        except ValueError:
            return Return.err(errors.invalid_email())

        user = await self.uow.users.get_by_email(email)

        if user is None or not user.password_hash:
            dummy_check(password or "")
            return Return.err(errors.invalid_credentials())

        password_valid = check_password(password or "", user.password_hash)

        if user.banned:
            logger.warning(f"Login attempt on banned account {user.id}")
            return Return.err(errors.account_banned())

        if not password_valid:
            return Return.err(errors.invalid_credentials())

        return Return.ok(
            AuthenticatedUser(
                id=user.id,
                email=user.email,
                full_name=user.full_name,
                role=user.role,
                two_factor_enabled=user.two_factor_enabled,
                two_factor_method=user.two_factor_method,
                phone=user.phone,
            )
        )
