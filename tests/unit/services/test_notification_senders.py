"""
Unit tests for the outbound delivery adapters
"""
import logging
import smtplib
from unittest.mock import patch

import httpx
import pytest

from src.adapter.services.notification_senders import (
    LoggingNotificationSender,
    NotificationDispatcher,
    SmtpEmailSender,
    TwilioSmsSender,
    build_notification_sender,
    redact_destination,
)
from src.app.services.notification_sender import DeliveryError, Notification
from src.domain.entities import DeliveryChannel
from tests.utils.fakes import RecordingSender

NOTE = Notification(subject="Your verification code", body="Your verification code is AB12CD.")


def twilio(handler):
    return TwilioSmsSender(
        account_sid="AC123",
        auth_token="secret",
        from_number="+15550001111",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_twilio_posts_message_form():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(201, json={"sid": "SM1"})

    await twilio(handler).send(DeliveryChannel.sms, "+27821234567", NOTE)

    assert seen["url"] == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
    assert "To=%2B27821234567" in seen["body"]
    assert "From=%2B15550001111" in seen["body"]
    assert seen["auth"].startswith("Basic ")


@pytest.mark.asyncio
async def test_twilio_error_status_raises_without_provider_detail():
    def handler(request):
        return httpx.Response(400, json={"message": "The 'To' number is not valid"})

    with pytest.raises(DeliveryError) as exc_info:
        await twilio(handler).send(DeliveryChannel.sms, "+27821234567", NOTE)

    assert "not valid" not in str(exc_info.value)


@pytest.mark.asyncio
async def test_twilio_transport_error_raises():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(DeliveryError):
        await twilio(handler).send(DeliveryChannel.sms, "+27821234567", NOTE)


@pytest.mark.asyncio
async def test_twilio_unconfigured_raises():
    sender = TwilioSmsSender(account_sid="", auth_token="", from_number="")

    with pytest.raises(DeliveryError):
        await sender.send(DeliveryChannel.sms, "+27821234567", NOTE)


@pytest.mark.asyncio
async def test_smtp_failure_becomes_delivery_error():
    sender = SmtpEmailSender(host="smtp.example.com", from_email="noreply@park.example.com")

    with patch.object(
        SmtpEmailSender, "_send_sync", side_effect=smtplib.SMTPServerDisconnected("gone")
    ):
        with pytest.raises(DeliveryError):
            await sender.send(DeliveryChannel.email, "a@park.example.com", NOTE)


@pytest.mark.asyncio
async def test_smtp_builds_message():
    sender = SmtpEmailSender(host="smtp.example.com", from_email="noreply@park.example.com")

    with patch.object(SmtpEmailSender, "_send_sync") as send_sync:
        await sender.send(DeliveryChannel.email, "a@park.example.com", NOTE)

    message = send_sync.call_args.args[0]
    assert message["To"] == "a@park.example.com"
    assert message["Subject"] == NOTE.subject
    assert "AB12CD" in message.get_content()


@pytest.mark.asyncio
async def test_logging_sender_never_logs_body(caplog):
    caplog.set_level(logging.INFO, logger="src.adapter.services.notification_senders")

    await LoggingNotificationSender().send(DeliveryChannel.email, "thandi@park.example.com", NOTE)

    assert "AB12CD" not in caplog.text
    assert "thandi@park.example.com" not in caplog.text
    assert "th***@park.example.com" in caplog.text


@pytest.mark.asyncio
async def test_dispatcher_routes_by_channel():
    sms, email = RecordingSender(), RecordingSender()
    dispatcher = NotificationDispatcher({DeliveryChannel.sms: sms, DeliveryChannel.email: email})

    await dispatcher.send(DeliveryChannel.email, "a@park.example.com", NOTE)

    assert email.sent and not sms.sent


@pytest.mark.asyncio
async def test_dispatcher_without_channel_raises():
    with pytest.raises(DeliveryError):
        await NotificationDispatcher({}).send(DeliveryChannel.sms, "+27821234567", NOTE)


def test_redact_destination():
    assert redact_destination("thandi@park.example.com") == "th***@park.example.com"
    assert redact_destination("+27821234567") == "***4567"
    assert redact_destination("") == "redacted"


def test_build_sender_by_backend():
    class Config:
        DELIVERY_BACKEND = "log"

    assert isinstance(build_notification_sender(Config), LoggingNotificationSender)
