from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.temp_login_session_repository import ITempLoginSessionRepository
from src.app.repositories.two_factor_code_repository import ITwoFactorCodeRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.repositories.verified_two_factor_session_repository import (
    IVerifiedTwoFactorSessionRepository,
)


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    password_reset_tokens: IPasswordResetTokenRepository
    two_factor_codes: ITwoFactorCodeRepository
    temp_login_sessions: ITempLoginSessionRepository
    verified_two_factor_sessions: IVerifiedTwoFactorSessionRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
