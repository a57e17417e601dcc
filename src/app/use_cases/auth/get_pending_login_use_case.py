from libs.result import Result, Return
from src.app.services import errors
from src.app.services.session_bridge import SessionBridge
from src.app.services.unit_of_work import UnitOfWork
from .dtos import PendingLoginResponse


class GetPendingLoginUseCase:
    """
    Resolve a pre-2FA token to the identity it was minted for.

    Reading does not consume the token.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: str) -> Result[PendingLoginResponse]:
        async with self.uow:
            pending = await SessionBridge(self.uow).get_pending(session_token)
            if pending is None:
                return Return.err(errors.invalid_or_expired_token())

            return Return.ok(
                PendingLoginResponse(user_id=str(pending.user_id), email=pending.email)
            )
