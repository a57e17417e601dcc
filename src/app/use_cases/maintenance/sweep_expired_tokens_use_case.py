import logging

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SweepReport(BaseModel):
    """Rows marked used, per token table"""

    two_factor_codes: int = 0
    temp_login_sessions: int = 0
    verified_two_factor_sessions: int = 0
    password_reset_tokens: int = 0

    @property
    def total(self) -> int:
        return (
            self.two_factor_codes
            + self.temp_login_sessions
            + self.verified_two_factor_sessions
            + self.password_reset_tokens
        )


class SweepExpiredTokensUseCase:
    """
    Mark every expired, still-unused ledger row as used.

    Business Rules:
    - Only ever sets used = true, so it can overlap live redemptions
    - Idempotent: a second run right after the first touches nothing
    - Read paths check expiry themselves and never depend on this
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SweepReport]:
        async with self.uow:
            report = SweepReport(
                two_factor_codes=await self.uow.two_factor_codes.expire_stale(),
                temp_login_sessions=await self.uow.temp_login_sessions.expire_stale(),
                verified_two_factor_sessions=(
                    await self.uow.verified_two_factor_sessions.expire_stale()
                ),
                password_reset_tokens=await self.uow.password_reset_tokens.expire_stale(),
            )
            await self.uow.commit()

        if report.total:
            logger.info(f"Swept {report.total} expired token(s): {report.model_dump()}")
        return Return.ok(report)
