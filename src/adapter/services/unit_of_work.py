from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from src.adapter.repositories.temp_login_session_repository import TempLoginSessionRepository
from src.adapter.repositories.two_factor_code_repository import TwoFactorCodeRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.repositories.verified_two_factor_session_repository import (
    VerifiedTwoFactorSessionRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Every repository shares the one session, so a commit covers all of them
        self.users = UserRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.two_factor_codes = TwoFactorCodeRepository(self.session)
        self.temp_login_sessions = TempLoginSessionRepository(self.session)
        self.verified_two_factor_sessions = VerifiedTwoFactorSessionRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
