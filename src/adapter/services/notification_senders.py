"""
Outbound delivery adapters.

TwilioSmsSender talks to the Twilio REST API with httpx, SmtpEmailSender
hands messages to an SMTP relay from a worker thread, and
LoggingNotificationSender only records that a message would have gone out.
"""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Dict, Optional

import httpx

from src.app.services.notification_sender import (
    DeliveryError,
    INotificationSender,
    Notification,
)
from src.domain.entities import DeliveryChannel

logger = logging.getLogger(__name__)


def redact_destination(destination: str) -> str:
    """Keep just enough of an address or number to correlate log lines"""
    if not destination:
        return "redacted"
    if "@" in destination:
        local, domain = destination.split("@", 1)
        return f"{local[:2]}***@{domain}"
    return f"***{destination[-4:]}"


class TwilioSmsSender(INotificationSender):
    """SMS through the Twilio Messages endpoint"""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        api_base: str = "https://api.twilio.com/2010-04-01",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    async def send(
        self, channel: DeliveryChannel, destination: str, notification: Notification
    ) -> None:
        if channel != DeliveryChannel.sms:
            raise DeliveryError(f"SMS sender cannot deliver over {channel.value}")
        if not self.is_configured:
            raise DeliveryError("SMS provider is not configured")
        if not destination:
            raise DeliveryError("No phone number")

        url = f"{self.api_base}/Accounts/{self.account_sid}/Messages.json"
        data = {"To": destination, "From": self.from_number, "Body": notification.body}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    url, data=data, auth=(self.account_sid, self.auth_token)
                )
        except httpx.HTTPError as exc:
            raise DeliveryError(f"SMS transport error: {type(exc).__name__}") from exc

        if response.status_code >= 400:
            # Provider payload stays in the log, never in the error
            logger.error(
                f"Twilio rejected SMS to {redact_destination(destination)}: "
                f"status={response.status_code}"
            )
            raise DeliveryError(f"SMS provider returned {response.status_code}")

        logger.info(f"SMS sent to {redact_destination(destination)}")


class SmtpEmailSender(INotificationSender):
    """Plain-text email through an SMTP relay"""

    def __init__(
        self,
        host: str,
        port: int = 587,
        user: str = "",
        password: str = "",
        use_tls: bool = True,
        from_email: str = "",
        from_name: str = "Park Portal",
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.from_email = from_email or user
        self.from_name = from_name
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.from_email)

    async def send(
        self, channel: DeliveryChannel, destination: str, notification: Notification
    ) -> None:
        if channel != DeliveryChannel.email:
            raise DeliveryError(f"Email sender cannot deliver over {channel.value}")
        if not self.is_configured:
            raise DeliveryError("SMTP is not configured")

        message = EmailMessage()
        message["Subject"] = notification.subject
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = destination
        message.set_content(notification.body)

        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, ssl.SSLError, OSError) as exc:
            logger.error(
                f"SMTP delivery to {redact_destination(destination)} failed: "
                f"{type(exc).__name__}"
            )
            raise DeliveryError(f"Email delivery failed: {type(exc).__name__}") from exc

        logger.info(f"Email sent to {redact_destination(destination)}")

    def _send_sync(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.use_tls:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls(context=context)
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(message)
        else:
            with smtplib.SMTP_SSL(
                self.host, self.port, context=context, timeout=self.timeout
            ) as server:
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(message)


class LoggingNotificationSender(INotificationSender):
    """Development backend: logs metadata only, never the body"""

    async def send(
        self, channel: DeliveryChannel, destination: str, notification: Notification
    ) -> None:
        if not destination:
            raise DeliveryError(f"No {channel.value} destination")
        logger.info(
            f"[{channel.value}] to={redact_destination(destination)} "
            f"subject={notification.subject!r}"
        )


class NotificationDispatcher(INotificationSender):
    """Routes each message to the sender registered for its channel"""

    def __init__(self, senders: Dict[DeliveryChannel, INotificationSender]):
        self.senders = senders

    async def send(
        self, channel: DeliveryChannel, destination: str, notification: Notification
    ) -> None:
        sender = self.senders.get(channel)
        if sender is None:
            raise DeliveryError(f"No sender for {channel.value}")
        await sender.send(channel, destination, notification)


def build_notification_sender(config) -> INotificationSender:
    """Sender selected by DELIVERY_BACKEND ("live" or "log")"""
    if config.DELIVERY_BACKEND != "live":
        return LoggingNotificationSender()

    return NotificationDispatcher(
        {
            DeliveryChannel.sms: TwilioSmsSender(
                account_sid=config.TWILIO_ACCOUNT_SID,
                auth_token=config.TWILIO_AUTH_TOKEN,
                from_number=config.TWILIO_FROM_NUMBER,
                api_base=config.TWILIO_API_BASE,
                timeout=config.DELIVERY_TIMEOUT_SECONDS,
            ),
            DeliveryChannel.email: SmtpEmailSender(
                host=config.SMTP_HOST,
                port=config.SMTP_PORT,
                user=config.SMTP_USER,
                password=config.SMTP_PASSWORD,
                use_tls=config.SMTP_USE_TLS,
                from_email=config.SMTP_FROM,
                from_name=config.SMTP_FROM_NAME,
                timeout=config.DELIVERY_TIMEOUT_SECONDS,
            ),
        }
    )
