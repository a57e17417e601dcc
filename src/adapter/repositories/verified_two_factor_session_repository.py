from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.clock import store_now
from src.app.repositories.verified_two_factor_session_repository import (
    IVerifiedTwoFactorSessionRepository,
)
from src.domain.entities import VerifiedTwoFactorSession


class VerifiedTwoFactorSessionRepository(IVerifiedTwoFactorSessionRepository):
    """VerifiedTwoFactorSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: VerifiedTwoFactorSession) -> VerifiedTwoFactorSession:
        """Create a new verified session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def consume(self, token_hash: str) -> Optional[VerifiedTwoFactorSession]:
        """
        Conditional update: only the caller whose UPDATE flips used=False
        to used=True gets the payload back.
        """
        stmt = (
            update(VerifiedTwoFactorSession)
            .where(
                VerifiedTwoFactorSession.token_hash == token_hash,
                VerifiedTwoFactorSession.used == False,  # noqa: E712
                VerifiedTwoFactorSession.expires_at > store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None

        stmt = (
            select(VerifiedTwoFactorSession)
            .where(VerifiedTwoFactorSession.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        found = await self.session.exec(stmt)
        return found.one_or_none()

    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unused verified session of the user as used"""
        stmt = (
            update(VerifiedTwoFactorSession)
            .where(
                VerifiedTwoFactorSession.user_id == user_id,
                VerifiedTwoFactorSession.used == False,  # noqa: E712
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def expire_stale(self) -> int:
        """Mark expired unused verified sessions as used"""
        stmt = (
            update(VerifiedTwoFactorSession)
            .where(
                VerifiedTwoFactorSession.used == False,  # noqa: E712
                VerifiedTwoFactorSession.expires_at <= store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
