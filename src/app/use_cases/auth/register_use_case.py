from libs.result import Result, Return

from config import ApplicationConfig
from src.app.services import errors
from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import AuditEvent, User, UserStatus, parse_role
from .dtos import RegisterCommand, RegisteredUser, RegisterResponse


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand
    - Output: Result[RegisterResponse]

    Business Logic:
    1. Normalize email and check it is not taken
    2. Enforce minimum password length
    3. Resolve role from its code or name
    4. Hash password with bcrypt
    5. Create User with status=pending, banned=False
    6. Create AuditEvent with action=signup
    7. Commit transaction atomically
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        try:
            email = normalize_email(command.email)
        except ValueError:
            return Return.err(errors.invalid_email())

        if len(command.password) < ApplicationConfig.PASSWORD_MIN_LENGTH:
            return Return.err(errors.weak_password(ApplicationConfig.PASSWORD_MIN_LENGTH))

        try:
            role = parse_role(command.role)
        except ValueError:
            return Return.err(errors.invalid_role())

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(errors.email_already_exists())

            user = User(
                email=email,
                password_hash=hash_password(command.password),
                full_name=command.full_name.strip(),
                phone=command.phone or None,
                role=role,
                status=UserStatus.pending,
                banned=False,
            )
            user = await self.uow.users.create(user)

            audit_event = AuditEvent(
                user_id=user.id,
                action="signup",
                event_metadata={"email": email, "role": role.name},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                RegisterResponse(
                    user=RegisteredUser(
                        id=str(user.id),
                        email=user.email,
                        full_name=user.full_name,
                        phone=user.phone,
                        role=role.name,
                        role_code=int(role),
                        status=user.status.value,
                    )
                )
            )
