from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.api.schemas import CamelModel, MessageResponse, SuccessResponse
from src.app.services import errors
from src.app.services.notification_sender import INotificationSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password import (
    ConfirmPasswordResetUseCase,
    RequestPasswordResetUseCase,
    ValidatePasswordResetTokenUseCase,
    send_reset_link,
)
from src.depends import get_notification_sender, get_unit_of_work

router = APIRouter(prefix="/password", tags=["Password"])


class ForgotPasswordRequest(CamelModel):
    email: str = Field(..., min_length=1, description="Email of the account to reset")


@router.post("/forgot", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    sender: INotificationSender = Depends(get_notification_sender),
):
    """
    Request Password Reset

    Always answers with the same message whether or not the account exists.
    The reset email goes out after the response.

    Raises:
        - 400 Bad Request: Invalid email format
    """
    use_case = RequestPasswordResetUseCase(uow)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == errors.INVALID_EMAIL:
            raise ClientError(error)
        raise ServerError(error)

    if result.value.delivery is not None:
        background_tasks.add_task(send_reset_link, sender, result.value.delivery)

    return MessageResponse(message=result.value.message)


class ValidateTokenHttpResponse(SuccessResponse):
    valid: bool
    user_id: Optional[str] = None


@router.get("/reset", status_code=status.HTTP_200_OK, response_model=ValidateTokenHttpResponse)
async def validate_reset_token(
    token: str = Query("", description="Token from the reset link"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Password Reset Token

    Does not consume the token.
    """
    use_case = ValidatePasswordResetTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        raise ServerError(result.error)

    return ValidateTokenHttpResponse(**result.value.model_dump())


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., description="Token from the reset link")
    new_password: str = Field(..., description="New password")


@router.post("/reset", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: Password too short (token stays usable), or token
          invalid, used or expired
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in (errors.WEAK_PASSWORD, errors.INVALID_OR_EXPIRED_TOKEN):
            raise ClientError(error)
        raise ServerError(error)

    return MessageResponse(message=result.value.message)
