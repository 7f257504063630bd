"""Applicant notifications (tracking code e-mail)."""

from tramites.infrastructure.external.email.factory import NotificationFactory
from tramites.infrastructure.external.email.log_only import LogOnlyNotificationService
from tramites.infrastructure.external.email.smtp import SmtpNotificationService

__all__ = [
    "LogOnlyNotificationService",
    "NotificationFactory",
    "SmtpNotificationService",
]
