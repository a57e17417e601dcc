from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.api.schemas import CamelModel, SuccessResponse
from src.app.services import errors
from src.app.services.code_generator import ICodeGenerator
from src.app.services.notification_sender import INotificationSender
from src.app.services.session_issuer import ISessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    CompleteLoginUseCase,
    GetPendingLoginUseCase,
    LoginUseCase,
)
from src.depends import (
    get_code_generator,
    get_notification_sender,
    get_session_issuer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(CamelModel):
    """
    Login HTTP request payload

    Email format is checked by the use case so a bad address answers
    INVALID_EMAIL rather than a schema error.
    """

    email: str = Field(..., min_length=1, description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class LoginHttpResponse(SuccessResponse):
    requires_two_factor: bool
    session_token: Optional[str] = None
    two_factor_method: Optional[str] = None
    delivery_channel: Optional[str] = None
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    message: Optional[str] = None


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginHttpResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    sender: INotificationSender = Depends(get_notification_sender),
    code_generator: ICodeGenerator = Depends(get_code_generator),
    session_issuer: ISessionIssuer = Depends(get_session_issuer),
):
    """
    Login, password step

    Returns a pre-2FA sessionToken and sends a code when the account has
    2FA enabled, otherwise the final accessToken.

    Raises:
        - 400 Bad Request: Invalid email format
        - 401 Unauthorized: Invalid credentials (bans included)
        - 502 Bad Gateway: Code could not be delivered
    """
    use_case = LoginUseCase(uow, sender, code_generator, session_issuer)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == errors.INVALID_EMAIL:
            raise ClientError(error)
        elif error.code == errors.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == errors.DELIVERY_FAILED:
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ServerError(error)

    response = LoginHttpResponse(**result.value.model_dump())
    if response.requires_two_factor:
        response.message = "Verification code sent. Please check your phone or email."
    return response


class PendingLoginData(CamelModel):
    user_id: str
    email: str


class PendingLoginHttpResponse(SuccessResponse):
    data: PendingLoginData


@router.get("/login", status_code=status.HTTP_200_OK, response_model=PendingLoginHttpResponse)
async def get_pending_login(
    session_token: str = Query(..., alias="sessionToken"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Pending login lookup

    Resolves a pre-2FA sessionToken without consuming it.

    Raises:
        - 401 Unauthorized: Token unknown, used or expired
    """
    use_case = GetPendingLoginUseCase(uow)
    result = await use_case.execute(session_token)

    if result.is_err():
        error = result.error
        if error.code == errors.INVALID_OR_EXPIRED_TOKEN:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return PendingLoginHttpResponse(data=PendingLoginData(**result.value.model_dump()))


class CompleteLoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    verify_token: str = Field(..., min_length=1, description="Post-2FA token")


class SessionHttpResponse(SuccessResponse):
    access_token: str
    token_type: str
    expires_in: int
    user_id: str
    email: str
    role: str


@router.post("/session", status_code=status.HTTP_200_OK, response_model=SessionHttpResponse)
async def complete_login(
    request: CompleteLoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_issuer: ISessionIssuer = Depends(get_session_issuer),
):
    """
    Login, final step

    Redeems the post-2FA verifyToken (single use) for the access token.

    Raises:
        - 401 Unauthorized: Token invalid, already used, expired or minted
          for another email; account banned
    """
    use_case = CompleteLoginUseCase(uow, session_issuer)
    result = await use_case.execute(request.email, request.verify_token)

    if result.is_err():
        error = result.error
        if error.code in (errors.INVALID_OR_EXPIRED_TOKEN, errors.INVALID_CREDENTIALS):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return SessionHttpResponse(**result.value.model_dump())
