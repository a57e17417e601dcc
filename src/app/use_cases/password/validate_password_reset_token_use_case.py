from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import hash_token
from .dtos import ValidatePasswordResetTokenResponse


class ValidatePasswordResetTokenUseCase:
    """Check a reset link before showing the new-password form. Does not consume."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[ValidatePasswordResetTokenResponse]:
        if not token:
            return Return.ok(ValidatePasswordResetTokenResponse(valid=False))

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_valid_by_token_hash(
                hash_token(token)
            )
            if reset_token is None:
                return Return.ok(ValidatePasswordResetTokenResponse(valid=False))

            return Return.ok(
                ValidatePasswordResetTokenResponse(valid=True, user_id=str(reset_token.user_id))
            )
