from uuid import UUID

from sqlmodel import update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.clock import store_now
from src.app.repositories.two_factor_code_repository import ITwoFactorCodeRepository
from src.domain.entities import TwoFactorCode


class TwoFactorCodeRepository(ITwoFactorCodeRepository):
    """TwoFactorCode repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, code: TwoFactorCode) -> TwoFactorCode:
        """Create a new one-time code"""
        self.session.add(code)
        await self.session.flush()
        await self.session.refresh(code)
        return code

    async def consume(self, user_id: UUID, code: str) -> bool:
        """Conditional update on (user, code, unused, unexpired)"""
        stmt = (
            update(TwoFactorCode)
            .where(
                TwoFactorCode.user_id == user_id,
                TwoFactorCode.code == code,
                TwoFactorCode.used == False,  # noqa: E712
                TwoFactorCode.expires_at > store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unused code of the user as used"""
        stmt = (
            update(TwoFactorCode)
            .where(TwoFactorCode.user_id == user_id, TwoFactorCode.used == False)  # noqa: E712
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def expire_stale(self) -> int:
        """Mark expired unused codes as used"""
        stmt = (
            update(TwoFactorCode)
            .where(
                TwoFactorCode.used == False,  # noqa: E712
                TwoFactorCode.expires_at <= store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
