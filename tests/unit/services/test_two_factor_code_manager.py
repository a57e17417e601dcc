"""
Unit tests for TwoFactorCodeManager
"""
from uuid import uuid4

import pytest

from src.app.services import errors
from src.app.services.two_factor_code_manager import TwoFactorCodeManager
from src.domain.entities import DeliveryChannel
from tests.utils.fakes import RecordingSender, SequenceCodeGenerator


def manager_for(mock_uow, sender=None, generator=None):
    return TwoFactorCodeManager(
        mock_uow,
        sender or RecordingSender(),
        generator or SequenceCodeGenerator("ab12cd"),
    )


@pytest.mark.asyncio
async def test_issue_code_prefers_sms(mock_uow, sender, code_generator):
    # Arrange
    user_id = uuid4()
    manager = TwoFactorCodeManager(mock_uow, sender, code_generator)

    # Act
    result = await manager.issue_code(user_id, "a@park.example.com", "+27821234567")

    # Assert
    assert result.is_ok()
    assert result.value.channel == DeliveryChannel.sms
    assert not hasattr(result.value, "code")
    row = mock_uow.two_factor_codes.create.call_args.args[0]
    assert row.code == "AB12CD"
    assert row.user_id == user_id
    channel, destination, notification = sender.sent[0]
    assert (channel, destination) == (DeliveryChannel.sms, "+27821234567")
    assert "AB12CD" in notification.body
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_issue_code_stores_uppercase(mock_uow):
    await manager_for(mock_uow).issue_code(uuid4(), "a@park.example.com", None)

    assert mock_uow.two_factor_codes.create.call_args.args[0].code == "AB12CD"


@pytest.mark.asyncio
async def test_issue_code_falls_back_to_email(mock_uow):
    sender = RecordingSender(failing=[DeliveryChannel.sms])

    result = await manager_for(mock_uow, sender).issue_code(
        uuid4(), "a@park.example.com", "+27821234567"
    )

    assert result.value.channel == DeliveryChannel.email
    assert sender.attempts == [DeliveryChannel.sms, DeliveryChannel.email]


@pytest.mark.asyncio
async def test_issue_code_without_phone_uses_email(mock_uow):
    sender = RecordingSender()

    result = await manager_for(mock_uow, sender).issue_code(uuid4(), "a@park.example.com", None)

    assert result.value.channel == DeliveryChannel.email
    assert sender.attempts == [DeliveryChannel.email]


@pytest.mark.asyncio
async def test_issue_code_fails_when_every_channel_fails(mock_uow):
    sender = RecordingSender(failing=[DeliveryChannel.sms, DeliveryChannel.email])

    result = await manager_for(mock_uow, sender).issue_code(
        uuid4(), "a@park.example.com", "+27821234567"
    )

    assert result.is_err()
    assert result.error.code == errors.DELIVERY_FAILED
    assert "down" not in result.error.message


@pytest.mark.asyncio
async def test_resend_invalidates_before_issuing(mock_uow):
    user_id = uuid4()
    calls = []
    mock_uow.two_factor_codes.invalidate_all_for_user.side_effect = (
        lambda uid: calls.append("invalidate") or 1
    )
    mock_uow.two_factor_codes.create.side_effect = lambda row: calls.append("create") or row

    result = await manager_for(mock_uow).resend_code(user_id, "a@park.example.com", None)

    assert result.is_ok()
    assert calls == ["invalidate", "create"]
    mock_uow.two_factor_codes.invalidate_all_for_user.assert_called_once_with(user_id)


@pytest.mark.asyncio
async def test_verify_code_normalizes_and_mints_verified_token(mock_uow):
    user_id = uuid4()
    mock_uow.two_factor_codes.consume.return_value = True

    result = await manager_for(mock_uow).verify_code(user_id, "a@park.example.com", "  ab12cd ")

    assert result.is_ok()
    assert len(result.value) == 64
    mock_uow.two_factor_codes.consume.assert_called_once_with(user_id, "AB12CD")
    mock_uow.verified_two_factor_sessions.create.assert_called_once()


@pytest.mark.asyncio
async def test_verify_code_rejects_unmatched(mock_uow):
    mock_uow.two_factor_codes.consume.return_value = False

    result = await manager_for(mock_uow).verify_code(uuid4(), "a@park.example.com", "XXXXXX")

    assert result.error.code == errors.INVALID_OR_EXPIRED_CODE
    mock_uow.verified_two_factor_sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_verify_code_rejects_blank(mock_uow):
    result = await manager_for(mock_uow).verify_code(uuid4(), "a@park.example.com", "   ")

    assert result.error.code == errors.INVALID_OR_EXPIRED_CODE
    mock_uow.two_factor_codes.consume.assert_not_called()
