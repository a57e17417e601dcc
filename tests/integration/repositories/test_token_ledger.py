"""
Integration tests for token ledger redemption against SQLite

Concurrent redemptions use two independent sessions so each runs on its
own connection.
"""
import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlmodel import select

from src.adapter.services.token_sweeper import TokenSweeper
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.auth import CompleteLoginUseCase
from src.app.use_cases.maintenance import SweepExpiredTokensUseCase
from src.app.use_cases.password import ConfirmPasswordResetUseCase
from src.app.services.session_issuer import ISessionIssuer, IssuedSession
from src.domain.base import generate_opaque_token, hash_token, utcnow
from src.domain.entities import (
    PasswordResetToken,
    TempLoginSession,
    TwoFactorCode,
    VerifiedTwoFactorSession,
)
from tests.utils.factories import seed_user


class StaticIssuer(ISessionIssuer):
    def issue(self, user_id, email, role):
        return IssuedSession(access_token="jwt", token_type="bearer", expires_in=60)


async def add_verified_session(db_session, user, minutes=5) -> str:
    token = generate_opaque_token()
    db_session.add(
        VerifiedTwoFactorSession(
            token_hash=hash_token(token),
            user_id=user.id,
            email=user.email,
            expires_at=utcnow() + timedelta(minutes=minutes),
        )
    )
    await db_session.commit()
    return token


@pytest.mark.asyncio
async def test_concurrent_session_completion_succeeds_once(db_session, session_factory):
    # Arrange
    user = await seed_user(db_session, "two_factor")
    token = await add_verified_session(db_session, user)

    async def complete():
        async with session_factory() as session:
            use_case = CompleteLoginUseCase(SqlAlchemyUnitOfWork(session), StaticIssuer())
            return await use_case.execute(user.email, token)

    # Act
    results = await asyncio.gather(complete(), complete())

    # Assert
    assert sorted(r.is_ok() for r in results) == [False, True]
    failed = next(r for r in results if r.is_err())
    assert failed.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_concurrent_code_redemption_succeeds_once(db_session, session_factory):
    user = await seed_user(db_session, "two_factor")
    db_session.add(
        TwoFactorCode(user_id=user.id, code="AB12CD", expires_at=utcnow() + timedelta(minutes=10))
    )
    await db_session.commit()

    async def redeem():
        async with session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            async with uow:
                consumed = await uow.two_factor_codes.consume(user.id, "AB12CD")
                await uow.commit()
                return consumed

    results = await asyncio.gather(redeem(), redeem())

    assert sorted(results) == [False, True]


@pytest.mark.asyncio
async def test_concurrent_password_reset_succeeds_once(db_session, session_factory):
    user = await seed_user(db_session, "two_factor")
    token = generate_opaque_token()
    db_session.add(
        PasswordResetToken(
            user_id=user.id, token_hash=hash_token(token), expires_at=utcnow() + timedelta(hours=1)
        )
    )
    await db_session.commit()

    async def reset(password):
        async with session_factory() as session:
            return await ConfirmPasswordResetUseCase(SqlAlchemyUnitOfWork(session)).execute(
                token, password
            )

    results = await asyncio.gather(reset("first-pass"), reset("second-pass"))

    assert sorted(r.is_ok() for r in results) == [False, True]


@pytest.mark.asyncio
async def test_expired_verified_session_is_rejected(db_session):
    user = await seed_user(db_session, "two_factor")
    token = await add_verified_session(db_session, user, minutes=-1)

    uow = SqlAlchemyUnitOfWork(db_session)
    async with uow:
        assert await uow.verified_two_factor_sessions.consume(hash_token(token)) is None


@pytest.mark.asyncio
async def test_sweep_marks_expired_rows_and_is_idempotent(db_session):
    # Arrange
    user = await seed_user(db_session, "two_factor")
    past = utcnow() - timedelta(minutes=1)
    future = utcnow() + timedelta(minutes=10)
    db_session.add_all(
        [
            TwoFactorCode(user_id=user.id, code="OLD111", expires_at=past),
            TwoFactorCode(user_id=user.id, code="NEW222", expires_at=future),
            TempLoginSession(token_hash="a" * 64, user_id=user.id, email=user.email, expires_at=past),
            VerifiedTwoFactorSession(
                token_hash="b" * 64, user_id=user.id, email=user.email, expires_at=past
            ),
            PasswordResetToken(user_id=user.id, token_hash="c" * 64, expires_at=past),
        ]
    )
    await db_session.commit()

    # Act
    first = await SweepExpiredTokensUseCase(SqlAlchemyUnitOfWork(db_session)).execute()
    second = await SweepExpiredTokensUseCase(SqlAlchemyUnitOfWork(db_session)).execute()

    # Assert
    assert first.value.model_dump() == {
        "two_factor_codes": 1,
        "temp_login_sessions": 1,
        "verified_two_factor_sessions": 1,
        "password_reset_tokens": 1,
    }
    assert second.value.total == 0

    live = (
        await db_session.exec(
            select(TwoFactorCode)
            .where(TwoFactorCode.code == "NEW222")
            .execution_options(populate_existing=True)
        )
    ).one()
    assert live.used is False


@pytest.mark.asyncio
async def test_token_sweeper_run_once(db_session, session_factory):
    user = await seed_user(db_session, "two_factor")
    db_session.add(
        TwoFactorCode(user_id=user.id, code="OLD111", expires_at=utcnow() - timedelta(minutes=1))
    )
    await db_session.commit()

    swept = await TokenSweeper(session_factory, interval_seconds=60).run_once()

    assert swept == 1


@pytest.mark.asyncio
async def test_token_sweeper_start_stop(session_factory):
    sweeper = TokenSweeper(session_factory, interval_seconds=60)
    sweeper.run_once = AsyncMock(return_value=0)

    await sweeper.start()
    await asyncio.sleep(0.01)
    await sweeper.stop()

    sweeper.run_once.assert_awaited_once()
    assert sweeper._task is None
