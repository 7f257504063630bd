"""Notification sender factory: log-only or SMTP from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tramites.application.interfaces.services import INotificationService
from tramites.domain.exceptions import ConfigurationException
from tramites.infrastructure.external.email.log_only import LogOnlyNotificationService
from tramites.infrastructure.external.email.smtp import SmtpNotificationService

if TYPE_CHECKING:
    from tramites.core.config import Settings


class NotificationFactory:
    """Factory for the applicant mail sender."""

    @staticmethod
    def create_notification_service(
        settings: Settings | None = None,
    ) -> INotificationService:
        from tramites.core.config import get_settings

        s = settings or get_settings()
        backend = s.mail_backend.lower()
        if backend == "log":
            return LogOnlyNotificationService()
        if backend == "smtp":
            if not s.mail_host:
                raise ConfigurationException("MAIL_HOST required for smtp backend")
            return SmtpNotificationService(
                s.mail_host,
                s.mail_port,
                sender=s.mail_from,
                username=s.mail_user,
                password=s.mail_password.get_secret_value() if s.mail_password else None,
                use_tls=s.mail_use_tls,
            )
        raise ConfigurationException(
            f"Unknown mail backend: {backend}. Supported: 'log', 'smtp'"
        )
