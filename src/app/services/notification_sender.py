from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.entities import DeliveryChannel


class DeliveryError(Exception):
    """Raised by a sender when a message could not be handed to its channel"""


@dataclass(frozen=True)
class Notification:
    subject: str
    body: str


class INotificationSender(ABC):
    """Outbound message port (SMS / email)"""

    @abstractmethod
    async def send(
        self, channel: DeliveryChannel, destination: str, notification: Notification
    ) -> None:
        """
        Deliver a notification.

        Raises:
            DeliveryError: if the channel rejected the message or is unreachable
        """
        pass
