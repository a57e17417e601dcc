"""
Confirm Password Reset Use Case

Handles password reset confirmation with single-use token redemption.
"""

import logging

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services import errors
from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import hash_token
from src.domain.entities import AuditEvent
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password must be at least 6 characters; a weak password leaves
      the token untouched so the user can retry with the same link
    - Token is redeemed by one conditional update (unused, unexpired)
    - Password is hashed with bcrypt
    - Pending login bridge tokens of the user are invalidated
    - Password change, token redemption and audit commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - WEAK_PASSWORD: Password shorter than the minimum length
            - INVALID_OR_EXPIRED_TOKEN: Token unknown, used or expired
        """
        min_length = ApplicationConfig.PASSWORD_MIN_LENGTH
        if new_password is None or len(new_password) < min_length:
            return Return.err(errors.weak_password(min_length))

        if not token:
            return Return.err(errors.invalid_or_expired_token())

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.consume(hash_token(token))
            if reset_token is None:
                return Return.err(errors.invalid_or_expired_token())

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(errors.invalid_or_expired_token())

            user.password_hash = hash_password(new_password)
            await self.uow.users.update(user)

            pending = await self.uow.temp_login_sessions.invalidate_all_for_user(user.id)
            verified = await self.uow.verified_two_factor_sessions.invalidate_all_for_user(
                user.id
            )

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_confirmed",
                event_metadata={
                    "token_id": str(reset_token.id),
                    "bridge_tokens_revoked": pending + verified,
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()
            logger.info(f"Password reset for user {user.id}")

            return Return.ok(
                ConfirmPasswordResetResponse(message="Password has been reset successfully")
            )
