"""
Complete Login Use Case

Last step of the login state machine: CodeVerified -> Authenticated.
"""

import logging

from libs.result import Result, Return
from src.app.services import errors
from src.app.services.session_bridge import SessionBridge
from src.app.services.session_issuer import ISessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utcnow
from src.domain.entities import AuditEvent
from .dtos import SessionResponse

logger = logging.getLogger(__name__)


class CompleteLoginUseCase:
    """
    Exchanges a post-2FA token for the final session.

    Business Rules:
    - The post-2FA token redeems exactly once, whatever the outcome
    - The email presented must match the one the token was minted for
    - A user banned between code verification and this step is refused
      with INVALID_CREDENTIALS (audit records account_banned)
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork, session_issuer: ISessionIssuer):
        self.uow = uow
        self.session_issuer = session_issuer

    async def execute(self, email: str, verify_token: str) -> Result[SessionResponse]:
        try:
            email = normalize_email(email)
        except ValueError:
            return Return.err(errors.invalid_credentials())

        async with self.uow:
            pending = await SessionBridge(self.uow).consume_verified(verify_token)
            if pending is None:
                return Return.err(errors.invalid_or_expired_token())

            if pending.email != email:
                # Token is spent either way
                await self.uow.commit()
                logger.warning(f"Verified session presented for another email (user {pending.user_id})")
                return Return.err(errors.invalid_or_expired_token())

            user = await self.uow.users.get_by_id(pending.user_id)
            if user is None or user.banned:
                audit = AuditEvent(
                    user_id=pending.user_id,
                    action="login_failed",
                    event_metadata={"email": email, "reason": "account_banned"},
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()
                logger.warning(f"Session completion refused for user {pending.user_id}")
                return Return.err(errors.invalid_credentials())

            user.last_login_at = utcnow()
            await self.uow.users.update(user)

            audit = AuditEvent(
                user_id=user.id,
                action="login",
                event_metadata={"two_factor": True},
            )
            await self.uow.audit_events.create(audit)
            await self.uow.commit()

            session = self.session_issuer.issue(user.id, user.email, user.role)
            return Return.ok(
                SessionResponse(
                    access_token=session.access_token,
                    token_type=session.token_type,
                    expires_in=session.expires_in,
                    user_id=str(user.id),
                    email=user.email,
                    role=user.role.name,
                )
            )
