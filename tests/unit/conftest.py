import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.utils.fakes import RecordingSender, SequenceCodeGenerator


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_valid_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.consume = AsyncMock(return_value=None)
    uow.password_reset_tokens.expire_stale = AsyncMock(return_value=0)

    uow.two_factor_codes = MagicMock()
    uow.two_factor_codes.create = AsyncMock(side_effect=lambda code: code)
    uow.two_factor_codes.consume = AsyncMock(return_value=False)
    uow.two_factor_codes.invalidate_all_for_user = AsyncMock(return_value=0)
    uow.two_factor_codes.expire_stale = AsyncMock(return_value=0)

    uow.temp_login_sessions = MagicMock()
    uow.temp_login_sessions.create = AsyncMock(side_effect=lambda row: row)
    uow.temp_login_sessions.get_valid_by_token_hash = AsyncMock(return_value=None)
    uow.temp_login_sessions.invalidate = AsyncMock(return_value=True)
    uow.temp_login_sessions.invalidate_all_for_user = AsyncMock(return_value=0)
    uow.temp_login_sessions.expire_stale = AsyncMock(return_value=0)

    uow.verified_two_factor_sessions = MagicMock()
    uow.verified_two_factor_sessions.create = AsyncMock(side_effect=lambda row: row)
    uow.verified_two_factor_sessions.consume = AsyncMock(return_value=None)
    uow.verified_two_factor_sessions.invalidate_all_for_user = AsyncMock(return_value=0)
    uow.verified_two_factor_sessions.expire_stale = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    return uow


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def code_generator():
    return SequenceCodeGenerator("AB12CD", "ZX98YW")


@pytest.fixture
def session_issuer():
    from src.app.services.session_issuer import IssuedSession

    issuer = MagicMock()
    issuer.issue = MagicMock(
        return_value=IssuedSession(access_token="jwt-token", token_type="bearer", expires_in=3600)
    )
    return issuer
