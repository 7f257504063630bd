"""Log-only notification sender for development and tests."""

from __future__ import annotations

from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

TRACKING_SUBJECT = "Código de seguimiento"


def tracking_body(tracking_code: str) -> str:
    return f"Su código de seguimiento es: {tracking_code}"


class LogOnlyNotificationService:
    """INotificationService that logs instead of sending mail.

    Use when no SMTP server is configured. The recipient is logged without
    the local part so applicant addresses stay out of the logs.
    """

    async def send_tracking_code(self, email: str, tracking_code: str) -> None:
        domain = email.rpartition("@")[2] or "?"
        logger.info(
            "Tracking code notification: would send %s to ***@%s (subject=%r)",
            tracking_code,
            domain,
            TRACKING_SUBJECT,
        )
