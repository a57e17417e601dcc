"""
Two-Factor Code Manager

Issues, re-issues and verifies the one-time codes sent during login.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services import errors
from src.app.services.code_generator import ICodeGenerator
from src.app.services.notification_sender import (
    DeliveryError,
    INotificationSender,
    Notification,
)
from src.app.services.session_bridge import SessionBridge
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import DeliveryChannel, TwoFactorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedCode:
    """Outcome of a successful issue. The code itself is never returned."""

    code_id: UUID
    channel: DeliveryChannel
    expires_at: datetime


class TwoFactorCodeManager:
    """
    Business Rules:
    - Codes are 6 symbols from A-Z0-9, stored uppercase, valid 10 minutes
    - SMS is tried first when the user has a phone, email is the fallback
    - A resend invalidates every earlier unconsumed code of the user
    - Verification is case-insensitive and consumes the code atomically
    - A verified code yields a post-2FA bridge token

    The new code is committed before delivery so it is redeemable as soon
    as it arrives. Otherwise runs inside the caller's unit of work.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        sender: INotificationSender,
        code_generator: ICodeGenerator,
        code_ttl: timedelta = None,
        session_bridge: SessionBridge = None,
    ):
        self.uow = uow
        self.sender = sender
        self.code_generator = code_generator
        self.code_ttl = code_ttl or timedelta(
            minutes=ApplicationConfig.TWO_FACTOR_CODE_TTL_MINUTES
        )
        self.session_bridge = session_bridge or SessionBridge(uow)

    async def issue_code(
        self, user_id: UUID, email: str, phone: Optional[str]
    ) -> Result[IssuedCode]:
        code = self.code_generator.generate().upper()
        row = await self.uow.two_factor_codes.create(
            TwoFactorCode(
                user_id=user_id,
                code=code,
                expires_at=utcnow() + self.code_ttl,
            )
        )
        await self.uow.commit()

        notification = Notification(
            subject="Your verification code",
            body=(
                f"Your verification code is {code}. "
                f"It expires in {int(self.code_ttl.total_seconds() // 60)} minutes."
            ),
        )

        channel = await self._deliver(phone, email, notification)
        if channel is None:
            logger.error(f"No channel could deliver code {row.id} for user {user_id}")
            return Return.err(errors.delivery_failed())

        logger.info(f"Code {row.id} for user {user_id} delivered by {channel.value}")
        return Return.ok(IssuedCode(code_id=row.id, channel=channel, expires_at=row.expires_at))

    async def resend_code(
        self, user_id: UUID, email: str, phone: Optional[str]
    ) -> Result[IssuedCode]:
        invalidated = await self.uow.two_factor_codes.invalidate_all_for_user(user_id)
        if invalidated:
            logger.info(f"Invalidated {invalidated} earlier code(s) for user {user_id}")
        return await self.issue_code(user_id, email, phone)

    async def verify_code(self, user_id: UUID, email: str, code: str) -> Result[str]:
        code = (code or "").strip().upper()
        if not code:
            return Return.err(errors.invalid_or_expired_code())

        consumed = await self.uow.two_factor_codes.consume(user_id, code)
        if not consumed:
            return Return.err(errors.invalid_or_expired_code())

        verify_token = await self.session_bridge.create_verified(user_id, email)
        return Return.ok(verify_token)

    async def _deliver(
        self, phone: Optional[str], email: str, notification: Notification
    ) -> Optional[DeliveryChannel]:
        attempts = []
        if phone:
            attempts.append((DeliveryChannel.sms, phone))
        if email:
            attempts.append((DeliveryChannel.email, email))

        for channel, destination in attempts:
            try:
                await self.sender.send(channel, destination, notification)
                return channel
            except DeliveryError as exc:
                logger.warning(f"{channel.value} delivery failed: {exc}")
        return None
