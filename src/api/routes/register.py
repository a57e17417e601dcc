from typing import Optional, Union

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.api.schemas import CamelModel, SuccessResponse
from src.app.services import errors
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.app.use_cases.auth.dtos import RegisteredUser
from src.depends import get_unit_of_work

router = APIRouter(tags=["Registration"])


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    role accepts the numeric code (1, 2, 3) or the name
    (youth, organization, admin).
    """

    full_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1)
    password: str = Field(..., description="Password (min 6 chars)")
    phone: Optional[str] = Field(default=None, max_length=32)
    role: Union[int, str] = Field(default="youth")


class RegisteredUserHttp(CamelModel):
    id: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: str
    role_code: int
    status: str


class RegisterHttpResponse(SuccessResponse):
    user: RegisteredUserHttp


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterHttpResponse)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Register

    Creates an account with status=pending awaiting approval.

    Raises:
        - 400 Bad Request: Invalid email, weak password or unknown role
        - 409 Conflict: Email already exists
    """
    command = RegisterCommand(
        full_name=request.full_name,
        email=request.email,
        password=request.password,
        phone=request.phone,
        role=str(request.role),
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == errors.EMAIL_ALREADY_EXISTS:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code in (errors.INVALID_EMAIL, errors.WEAK_PASSWORD, errors.INVALID_ROLE):
            raise ClientError(error)
        raise ServerError(error)

    user: RegisteredUser = result.value.user
    return RegisterHttpResponse(user=RegisteredUserHttp(**user.model_dump()))
