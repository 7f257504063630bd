"""SMTP notification sender."""

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage

from tramites.infrastructure.external.email.log_only import TRACKING_SUBJECT, tracking_body
from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SmtpNotificationService:
    """Sends plain-text mail through an SMTP relay.

    smtplib blocks, so delivery runs in a worker thread. Errors propagate
    to the dispatcher, which logs them; the request has already returned.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, email: str, tracking_code: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = email
        message["Subject"] = TRACKING_SUBJECT
        message.set_content(tracking_body(tracking_code))
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
            if self.use_tls:
                client.starttls()
            if self.username and self.password:
                client.login(self.username, self.password)
            client.send_message(message)

    async def send_tracking_code(self, email: str, tracking_code: str) -> None:
        await asyncio.to_thread(self._send_sync, self._build_message(email, tracking_code))
        logger.info("Tracking code %s sent via SMTP", tracking_code)
