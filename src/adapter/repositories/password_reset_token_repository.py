from typing import Optional

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.clock import store_now
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_valid_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get an unused, unexpired token by hash without consuming it"""
        stmt = select(PasswordResetToken).where(
            PasswordResetToken.token_hash == token_hash,
            PasswordResetToken.used == False,  # noqa: E712
            PasswordResetToken.expires_at > store_now(),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def consume(self, token_hash: str) -> Optional[PasswordResetToken]:
        """
        Conditional update: only the caller whose UPDATE flips used=False
        to used=True gets the token back.
        """
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.token_hash == token_hash,
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at > store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None

        stmt = (
            select(PasswordResetToken)
            .where(PasswordResetToken.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        found = await self.session.exec(stmt)
        return found.one_or_none()

    async def expire_stale(self) -> int:
        """Mark expired unused tokens as used"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at <= store_now(),
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
