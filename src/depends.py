from datetime import timedelta

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.jwt_session_issuer import JwtSessionIssuer
from src.adapter.services.notification_senders import build_notification_sender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.code_generator import ICodeGenerator, SecureCodeGenerator
from src.app.services.notification_sender import INotificationSender
from src.app.services.session_issuer import ISessionIssuer

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

notification_sender = build_notification_sender(ApplicationConfig)
code_generator = SecureCodeGenerator()
session_issuer = JwtSessionIssuer(timedelta(minutes=ApplicationConfig.SESSION_TTL_MINUTES))


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notification_sender() -> INotificationSender:
    return notification_sender


def get_code_generator() -> ICodeGenerator:
    return code_generator


def get_session_issuer() -> ISessionIssuer:
    return session_issuer


async def init_db() -> None:
    """Create missing tables"""
    from sqlmodel import SQLModel

    import src.domain.entities  # noqa: F401  registers the tables

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
