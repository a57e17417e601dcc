from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import TempLoginSession


class ITempLoginSessionRepository(ABC):
    """TempLoginSession (pre-2FA token) repository interface - application layer"""

    @abstractmethod
    async def create(self, session: TempLoginSession) -> TempLoginSession:
        """Create a new pending login"""
        pass

    @abstractmethod
    async def get_valid_by_token_hash(self, token_hash: str) -> Optional[TempLoginSession]:
        """Get an unused, unexpired pending login without consuming it"""
        pass

    @abstractmethod
    async def invalidate(self, token_hash: str) -> bool:
        """Mark a pending login as used. Returns True if a row changed."""
        pass

    @abstractmethod
    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unused pending login of the user as used. Returns count."""
        pass

    @abstractmethod
    async def expire_stale(self) -> int:
        """Mark expired unused pending logins as used. Returns affected row count."""
        pass
