from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.entities import TwoFactorCode


class ITwoFactorCodeRepository(ABC):
    """TwoFactorCode repository interface - application layer"""

    @abstractmethod
    async def create(self, code: TwoFactorCode) -> TwoFactorCode:
        """Create a new one-time code"""
        pass

    @abstractmethod
    async def consume(self, user_id: UUID, code: str) -> bool:
        """
        Atomically mark the user's matching unused, unexpired code as used.

        Returns True only for the call that consumed it.
        """
        pass

    @abstractmethod
    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unused code of the user as used. Returns count."""
        pass

    @abstractmethod
    async def expire_stale(self) -> int:
        """Mark expired unused codes as used. Returns affected row count."""
        pass
