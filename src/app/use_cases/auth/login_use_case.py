"""
Login Use Case

Password step of the login state machine:
Anonymous -> PasswordVerified (pre-2FA) or Authenticated (no 2FA).
"""

import logging

from libs.result import Result, Return
from src.app.services import errors
from src.app.services.code_generator import ICodeGenerator
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.notification_sender import INotificationSender
from src.app.services.session_bridge import SessionBridge
from src.app.services.session_issuer import ISessionIssuer
from src.app.services.two_factor_code_manager import TwoFactorCodeManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utcnow
from src.domain.entities import AuditEvent, TwoFactorMethod
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for the password step of login.

    Business Rules:
    - Unknown account, wrong password and banned account all fail with
      INVALID_CREDENTIALS; the audit trail records the real reason
    - 2FA enabled: mint a pre-2FA token and send a code
    - Code delivery failure invalidates the pre-2FA token
    - 2FA disabled: the final session is issued directly
    """

    def __init__(
        self,
        uow: UnitOfWork,
        sender: INotificationSender,
        code_generator: ICodeGenerator,
        session_issuer: ISessionIssuer,
    ):
        self.uow = uow
        self.sender = sender
        self.code_generator = code_generator
        self.session_issuer = session_issuer

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: Email as typed by the user
            password: Plain text password

        Returns:
            Result with LoginResponse, or Error
            (INVALID_EMAIL, INVALID_CREDENTIALS, DELIVERY_FAILED)
        """
        async with self.uow:
            verified = await CredentialVerifier(self.uow).verify(email, password)

            if verified.is_err():
                if verified.error.code == errors.INVALID_EMAIL:
                    return Return.err(verified.error)

                reason = (
                    "account_banned"
                    if verified.error.code == errors.ACCOUNT_BANNED
                    else "invalid_credentials"
                )
                await self._record_failure(normalize_email(email), reason)
                await self.uow.commit()
                return Return.err(errors.invalid_credentials())

            user = verified.value

            if not user.two_factor_enabled:
                return await self._complete_without_two_factor(user)

            bridge = SessionBridge(self.uow)
            manager = TwoFactorCodeManager(
                self.uow, self.sender, self.code_generator, session_bridge=bridge
            )

            session_token = await bridge.create_pending(user.id, user.email)
            issued = await manager.issue_code(user.id, user.email, user.phone)

            if issued.is_err():
                await bridge.invalidate_pending(session_token)
                await self.uow.commit()
                return Return.err(issued.error)

            audit = AuditEvent(
                user_id=user.id,
                action="two_factor_challenge_sent",
                event_metadata={"channel": issued.value.channel.value},
            )
            await self.uow.audit_events.create(audit)
            await self.uow.commit()

            method = user.two_factor_method or TwoFactorMethod.email
            return Return.ok(
                LoginResponse(
                    requires_two_factor=True,
                    session_token=session_token,
                    two_factor_method=method.value,
                    delivery_channel=issued.value.channel.value,
                )
            )

    async def _complete_without_two_factor(self, user) -> Result[LoginResponse]:
        entity = await self.uow.users.get_by_id(user.id)
        entity.last_login_at = utcnow()
        await self.uow.users.update(entity)

        audit = AuditEvent(
            user_id=user.id,
            action="login",
            event_metadata={"two_factor": False},
        )
        await self.uow.audit_events.create(audit)
        await self.uow.commit()

        session = self.session_issuer.issue(user.id, user.email, user.role)
        return Return.ok(
            LoginResponse(
                requires_two_factor=False,
                access_token=session.access_token,
                token_type=session.token_type,
                expires_in=session.expires_in,
            )
        )

    async def _record_failure(self, email: str, reason: str) -> None:
        user = await self.uow.users.get_by_email(email)
        audit = AuditEvent(
            user_id=user.id if user else None,
            action="login_failed",
            event_metadata={"email": email, "reason": reason},
        )
        await self.uow.audit_events.create(audit)
        logger.warning(f"Login failed ({reason})")
