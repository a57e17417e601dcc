from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.clock import store_now
from src.app.repositories.temp_login_session_repository import ITempLoginSessionRepository
from src.domain.entities import TempLoginSession


class TempLoginSessionRepository(ITempLoginSessionRepository):
    """TempLoginSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: TempLoginSession) -> TempLoginSession:
        """Create a new pending login"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_valid_by_token_hash(self, token_hash: str) -> Optional[TempLoginSession]:
        """Get an unused, unexpired pending login without consuming it"""
        stmt = select(TempLoginSession).where(
            TempLoginSession.token_hash == token_hash,
            TempLoginSession.used == False,  # noqa: E712
            TempLoginSession.expires_at > store_now(),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def invalidate(self, token_hash: str) -> bool:
        """Mark a pending login as used"""
        stmt = (
            update(TempLoginSession)
            .where(
                TempLoginSession.token_hash == token_hash,
                TempLoginSession.used == False,  # noqa: E712
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unused pending login of the user as used"""
        stmt = (
            update(TempLoginSession)
            .where(
                TempLoginSession.user_id == user_id,
                TempLoginSession.used == False,  # noqa: E712
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def expire_stale(self) -> int:
        """Mark expired unused pending logins as used"""
        stmt = (
            update(TempLoginSession)
            .where(
                TempLoginSession.used == False,  # noqa: E712
                TempLoginSession.expires_at <= store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
