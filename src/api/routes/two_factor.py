from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.api.schemas import CamelModel, MessageResponse, SuccessResponse
from src.app.services import errors
from src.app.services.code_generator import ICodeGenerator
from src.app.services.notification_sender import INotificationSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.two_factor import (
    SendTwoFactorCodeUseCase,
    VerifyTwoFactorCodeUseCase,
)
from src.depends import get_code_generator, get_notification_sender, get_unit_of_work

router = APIRouter(prefix="/auth/2fa", tags=["Two-Factor"])


class SendCodeRequest(CamelModel):
    email: str = Field(..., min_length=1)


@router.post("/send-code", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def send_code(
    request: SendCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    sender: INotificationSender = Depends(get_notification_sender),
    code_generator: ICodeGenerator = Depends(get_code_generator),
):
    """
    Resend the login code

    Earlier codes stop working. Unknown emails get the same success body.

    Raises:
        - 400 Bad Request: Invalid email format, or no phone number on file
        - 502 Bad Gateway: Code could not be delivered
    """
    use_case = SendTwoFactorCodeUseCase(uow, sender, code_generator)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code in (errors.INVALID_EMAIL, errors.PHONE_REQUIRED):
            raise ClientError(error)
        elif error.code == errors.DELIVERY_FAILED:
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ServerError(error)

    return MessageResponse(message=result.value.message)


class VerifyCodeRequest(CamelModel):
    email: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, max_length=32)
    session_token: str = Field(..., min_length=1, description="Pre-2FA token from login")


class VerifyCodeHttpResponse(SuccessResponse):
    session_token: str


@router.post("/verify", status_code=status.HTTP_200_OK, response_model=VerifyCodeHttpResponse)
async def verify_code(
    request: VerifyCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Verify the login code

    Returns the post-2FA sessionToken to send to /auth/session as verifyToken.

    Raises:
        - 400 Bad Request: Invalid email format; code or login session
          invalid, used or expired
    """
    use_case = VerifyTwoFactorCodeUseCase(uow)
    result = await use_case.execute(request.email, request.code, request.session_token)

    if result.is_err():
        error = result.error
        if error.code in (errors.INVALID_EMAIL, errors.INVALID_OR_EXPIRED_CODE):
            raise ClientError(error)
        raise ServerError(error)

    return VerifyCodeHttpResponse(session_token=result.value.session_token)
