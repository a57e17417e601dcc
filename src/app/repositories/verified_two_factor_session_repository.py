from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import VerifiedTwoFactorSession


class IVerifiedTwoFactorSessionRepository(ABC):
    """VerifiedTwoFactorSession (post-2FA token) repository interface - application layer"""

    @abstractmethod
    async def create(self, session: VerifiedTwoFactorSession) -> VerifiedTwoFactorSession:
        """Create a new verified session"""
        pass

    @abstractmethod
    async def consume(self, token_hash: str) -> Optional[VerifiedTwoFactorSession]:
        """
        Atomically mark an unused, unexpired verified session as used.

        Returns the session if this call consumed it, None otherwise.
        """
        pass

    @abstractmethod
    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unused verified session of the user as used. Returns count."""
        pass

    @abstractmethod
    async def expire_stale(self) -> int:
        """Mark expired unused verified sessions as used. Returns affected row count."""
        pass
