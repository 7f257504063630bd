"""Application services shared by the document use cases."""

from tramites.application.services.authorization_service import (
    Capability,
    ensure_capability,
    require_office,
)
from tramites.application.services.notification_dispatcher import NotificationDispatcher
from tramites.application.services.office_routing_resolver import OfficeRoutingResolver
from tramites.application.services.office_service import OfficeService

__all__ = [
    "Capability",
    "NotificationDispatcher",
    "OfficeRoutingResolver",
    "OfficeService",
    "ensure_capability",
    "require_office",
]
