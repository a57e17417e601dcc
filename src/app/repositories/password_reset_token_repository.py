from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_valid_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get an unused, unexpired token by hash without consuming it"""
        pass

    @abstractmethod
    async def consume(self, token_hash: str) -> Optional[PasswordResetToken]:
        """
        Atomically mark an unused, unexpired token as used.

        Returns the token if this call consumed it, None otherwise.
        """
        pass

    @abstractmethod
    async def expire_stale(self) -> int:
        """Mark expired unused tokens as used. Returns affected row count."""
        pass
