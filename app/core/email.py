from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)


class SMTPMailClient:
    """SMTP transport bound to the service account.

    One connection is opened per message, so a single instance is shared by
    every request in the process.
    """

    def __init__(
        self,
        host: str,
        port: int,
        user: Optional[str],
        password: Optional[str],
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self._password = password
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, config: Settings) -> "SMTPMailClient":
        password = config.EMAIL_PASS.get_secret_value() if config.EMAIL_PASS else None
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            user=config.EMAIL_USER,
            password=password,
            use_tls=config.SMTP_USE_TLS,
            timeout=config.MAIL_TIMEOUT_SECONDS,
        )

    def _send_sync(self, message: EmailMessage) -> None:
        if not self.host:
            raise RuntimeError("SMTP_HOST is not configured")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.user and self._password:
                server.login(self.user, self._password)
            server.send_message(message)

    async def send(self, message: EmailMessage) -> None:
        await asyncio.to_thread(self._send_sync, message)


_client: Optional[SMTPMailClient] = None


def get_mail_client() -> SMTPMailClient:
    """Return the process-wide mail client, creating it on first use."""
    global _client
    if _client is None:
        _client = SMTPMailClient.from_settings(settings)
        logger.info(
            "Mail client initialised host=%s port=%s tls=%s",
            _client.host,
            _client.port,
            _client.use_tls,
        )
    return _client


def reset_mail_client() -> None:
    global _client
    _client = None
