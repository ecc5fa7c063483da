import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from app.core.config import Settings, settings
from app.services.notifications.base import NotificationProvider

logger = logging.getLogger(__name__)


class EmailProvider(NotificationProvider):
    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings

    async def send(
        self,
        destination: str,
        subject: str,
        message: str,
        html_message: Optional[str] = None,
    ) -> bool:
        if not self.config.SMTP_HOST:
            logger.warning("SMTP_HOST not configured. Skipping email.")
            return False

        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.config.EMAILS_FROM_NAME, self.config.EMAILS_FROM_EMAIL))
        msg["To"] = destination
        msg["Subject"] = subject
        msg.attach(MIMEText(message, "plain"))
        if html_message:
            msg.attach(MIMEText(html_message, "html"))

        try:
            # smtplib blocks; keep it off the event loop
            await asyncio.to_thread(self._deliver, msg)
        except Exception as e:
            logger.error(f"Failed to send email to {destination}: {e}")
            return False

        logger.info(f"Email sent to {destination}")
        return True

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.config.SMTP_HOST, self.config.SMTP_PORT) as server:
            if self.config.SMTP_USER and self.config.SMTP_PASSWORD:
                server.starttls()
                server.login(self.config.SMTP_USER, self.config.SMTP_PASSWORD)
            server.send_message(msg)
