from abc import ABC, abstractmethod
from typing import Optional


class NotificationProvider(ABC):
    @abstractmethod
    async def send(
        self,
        destination: str,
        subject: str,
        message: str,
        html_message: Optional[str] = None,
    ) -> bool:
        """
        Deliver one notification.
        :param destination: Where to deliver it (an email address for the email provider)
        :param subject: The subject of the notification
        :param message: Plain-text body
        :param html_message: Optional HTML body
        :return: True if delivered, False otherwise
        """
        pass
