"""
Mail Service

Sends plain-text email through an HTTP mail API (JSON POST with a bearer key).
"""

import logging
from typing import Optional

import httpx

from taskease import config

logger = logging.getLogger(__name__)


class MailService:
    """Fire-and-forget mail sender"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
    ):
        self.api_url = api_url or config.MAIL_API_URL
        self.api_key = api_key or config.MAIL_API_KEY
        self.sender = sender or config.MAIL_FROM

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    async def send_email(self, to: str, subject: str, text: str) -> bool:
        """
        Send one email.

        Args:
            to: recipient address
            subject: subject line
            text: plain-text body

        Returns:
            True when the mail API accepted the message. Never raises:
            missing configuration and delivery errors are logged and
            reported as False.
        """
        if not self.is_configured:
            logger.warning(f"Mail API not configured, dropping email to {to}: {subject}")
            return False

        payload = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "text": text,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                    },
                    timeout=10.0,
                )

            if response.status_code >= 300:
                logger.error(
                    f"Mail API rejected email to {to}: {response.status_code} - {response.text}"
                )
                return False

            logger.info(f"Email sent to {to}: {subject}")
            return True

        except httpx.HTTPError as e:
            logger.error(f"Error sending email to {to}: {e}")
            return False
