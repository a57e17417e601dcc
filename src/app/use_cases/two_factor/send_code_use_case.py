import logging

from libs.result import Result, Return
from src.app.services import errors
from src.app.services.code_generator import ICodeGenerator
from src.app.services.notification_sender import INotificationSender
from src.app.services.two_factor_code_manager import TwoFactorCodeManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import AuditEvent
from .dtos import SendCodeResponse

logger = logging.getLogger(__name__)

SEND_CODE_MESSAGE = "If an account exists, a verification code has been sent"


class SendTwoFactorCodeUseCase:
    """
    Re-send a login code.

    Business Rules:
    - Unknown email answers with the same success body (no enumeration)
    - A user without a phone number is told PHONE_REQUIRED
    - Every earlier unconsumed code of the user is invalidated first
    """

    def __init__(
        self,
        uow: UnitOfWork,
        sender: INotificationSender,
        code_generator: ICodeGenerator,
    ):
        self.uow = uow
        self.sender = sender
        self.code_generator = code_generator

    async def execute(self, email: str) -> Result[SendCodeResponse]:
        try:
            email = normalize_email(email)
        except ValueError:
            return Return.err(errors.invalid_email())

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                logger.info("Code requested for unknown email")
                return Return.ok(SendCodeResponse(message=SEND_CODE_MESSAGE))

            if not user.phone:
                return Return.err(errors.phone_required())

            manager = TwoFactorCodeManager(self.uow, self.sender, self.code_generator)
            issued = await manager.resend_code(user.id, user.email, user.phone)
            if issued.is_err():
                return Return.err(issued.error)

            audit = AuditEvent(
                user_id=user.id,
                action="two_factor_code_resent",
                event_metadata={"channel": issued.value.channel.value},
            )
            await self.uow.audit_events.create(audit)
            await self.uow.commit()

            return Return.ok(SendCodeResponse(message=SEND_CODE_MESSAGE))
