"""
Verify Two-Factor Code Use Case

PasswordVerified (pre-2FA) -> CodeVerified (post-2FA).
"""

import logging

from libs.result import Result, Return
from src.app.services import errors
from src.app.services.session_bridge import SessionBridge
from src.app.services.two_factor_code_manager import TwoFactorCodeManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import AuditEvent
from .dtos import VerifyCodeResponse

logger = logging.getLogger(__name__)


class VerifyTwoFactorCodeUseCase:
    """
    Business Rules:
    - A valid pre-2FA token minted for the same email is required
    - Unknown email, bad token and bad code all fail with
      INVALID_OR_EXPIRED_CODE
    - The code is consumed atomically; a replay fails
    - On success the pre-2FA token is invalidated and a post-2FA
      token is returned
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, code: str, session_token: str
    ) -> Result[VerifyCodeResponse]:
        try:
            email = normalize_email(email)
        except ValueError:
            return Return.err(errors.invalid_email())

        async with self.uow:
            bridge = SessionBridge(self.uow)

            pending = await bridge.get_pending(session_token)
            if pending is None or pending.email != email:
                return Return.err(errors.invalid_or_expired_code())

            user = await self.uow.users.get_by_id(pending.user_id)
            if user is None:
                return Return.err(errors.invalid_or_expired_code())

            # Code verification never sends anything
            manager = TwoFactorCodeManager(self.uow, None, None, session_bridge=bridge)
            verified = await manager.verify_code(user.id, user.email, code)
            if verified.is_err():
                audit = AuditEvent(
                    user_id=user.id,
                    action="two_factor_failed",
                    event_metadata={"reason": "invalid_or_expired_code"},
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()
                logger.warning(f"Invalid 2FA code for user {user.id}")
                return Return.err(verified.error)

            await bridge.invalidate_pending(session_token)

            audit = AuditEvent(user_id=user.id, action="two_factor_verified")
            await self.uow.audit_events.create(audit)
            await self.uow.commit()

            return Return.ok(VerifyCodeResponse(session_token=verified.value))
