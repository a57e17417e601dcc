"""
Request Password Reset Use Case

Handles generating password reset tokens. The reset email itself is sent by
send_reset_link after the response has gone out.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services import errors
from src.app.services.notification_sender import (
    DeliveryError,
    INotificationSender,
    Notification,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_opaque_token, hash_token, normalize_email, utcnow
from src.domain.entities import AuditEvent, DeliveryChannel, PasswordResetToken
from .dtos import RequestPasswordResetResponse, ResetLinkDelivery

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate a 32-byte cryptographically secure token, hex encoded
    - Hash token with SHA-256 before storing
    - Token expires in 1 hour
    - No email enumeration (same response for valid/invalid emails)
    - The email is handed back as a ResetLinkDelivery, never sent inline
    - Audit event created for security tracking
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with reset status, or Error(INVALID_EMAIL) for a malformed address

        Note:
            For security (no email enumeration), always returns the same
            message even if email doesn't exist. Only an existing account
            gets a token and a pending delivery.
        """
        try:
            email = normalize_email(email)
        except ValueError:
            return Return.err(errors.invalid_email())

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(RequestPasswordResetResponse(message=RESET_REQUESTED_MESSAGE))

            reset_token = generate_opaque_token()

            password_reset_token = PasswordResetToken(
                user_id=user.id,
                token_hash=hash_token(reset_token),
                used=False,
                expires_at=utcnow()
                + timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TTL_MINUTES),
            )
            await self.uow.password_reset_tokens.create(password_reset_token)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_requested",
                event_metadata={"token_id": str(password_reset_token.id)},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

        reset_link = f"{ApplicationConfig.APP_BASE_URL}/auth/reset-password?token={reset_token}"
        delivery = ResetLinkDelivery(
            user_id=str(user.id),
            email=user.email,
            subject="Reset your password",
            body=(
                "We received a request to reset your password.\n\n"
                f"Open this link to choose a new one: {reset_link}\n\n"
                "The link expires in 1 hour. If you did not ask for this, ignore this email."
            ),
        )

        return Return.ok(
            RequestPasswordResetResponse(message=RESET_REQUESTED_MESSAGE, delivery=delivery)
        )


async def send_reset_link(sender: INotificationSender, delivery: ResetLinkDelivery) -> None:
    """Send a reset email; a delivery failure is logged, never raised"""
    notification = Notification(subject=delivery.subject, body=delivery.body)
    try:
        await sender.send(DeliveryChannel.email, delivery.email, notification)
    except DeliveryError as exc:
        logger.error(f"Password reset email for user {delivery.user_id} not sent: {exc}")
