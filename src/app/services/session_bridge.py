"""
Session Bridge

Short-lived opaque tokens that carry a login across the 2FA steps:
pre-2FA ("password verified") and post-2FA ("code verified").
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from uuid import UUID

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_opaque_token, hash_token, utcnow
from src.domain.entities import TempLoginSession, VerifiedTwoFactorSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingLogin:
    user_id: UUID
    email: str


class SessionBridge:
    """
    Issues and redeems bridge tokens.

    Business Rules:
    - Tokens are 32 random bytes, hex encoded; only the SHA-256 is stored
    - Pre-2FA tokens live 15 minutes and reading them does not consume them
    - Post-2FA tokens live 5 minutes and redeem exactly once
    - Validity is always checked by the store (used = false, expires_at > now)

    Runs inside the caller's unit of work; never commits.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        pending_ttl: timedelta = None,
        verified_ttl: timedelta = None,
    ):
        self.uow = uow
        self.pending_ttl = pending_ttl or timedelta(
            minutes=ApplicationConfig.TEMP_LOGIN_SESSION_TTL_MINUTES
        )
        self.verified_ttl = verified_ttl or timedelta(
            minutes=ApplicationConfig.VERIFIED_SESSION_TTL_MINUTES
        )

    async def create_pending(self, user_id: UUID, email: str) -> str:
        token = generate_opaque_token()
        await self.uow.temp_login_sessions.create(
            TempLoginSession(
                token_hash=hash_token(token),
                user_id=user_id,
                email=email,
                expires_at=utcnow() + self.pending_ttl,
            )
        )
        logger.info(f"Pending login {token[:8]} created for user {user_id}")
        return token

    async def get_pending(self, token: str) -> Optional[PendingLogin]:
        if not token:
            return None
        row = await self.uow.temp_login_sessions.get_valid_by_token_hash(hash_token(token))
        if row is None:
            return None
        return PendingLogin(user_id=row.user_id, email=row.email)

    async def invalidate_pending(self, token: str) -> bool:
        if not token:
            return False
        return await self.uow.temp_login_sessions.invalidate(hash_token(token))

    async def create_verified(self, user_id: UUID, email: str) -> str:
        token = generate_opaque_token()
        await self.uow.verified_two_factor_sessions.create(
            VerifiedTwoFactorSession(
                token_hash=hash_token(token),
                user_id=user_id,
                email=email,
                expires_at=utcnow() + self.verified_ttl,
            )
        )
        logger.info(f"Verified session {token[:8]} created for user {user_id}")
        return token

    async def consume_verified(self, token: str) -> Optional[PendingLogin]:
        if not token:
            return None
        row = await self.uow.verified_two_factor_sessions.consume(hash_token(token))
        if row is None:
            return None
        return PendingLogin(user_id=row.user_id, email=row.email)
