"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; repositories, storage and mail
backends are built here from settings.
"""

from tramites.api.v1.dependencies.auth import (
    CurrentActor,
    get_auth_service,
    get_current_actor,
    require_capability,
)
from tramites.api.v1.dependencies.db import (
    get_session_factory_dep,
    get_transactional_session,
    get_uow,
)
from tramites.api.v1.dependencies.documents import (
    get_coordinator,
    get_dashboard_aggregator,
    get_dispatcher,
    get_lifecycle_engine,
    get_office_service,
    get_query_service,
    get_storage,
    get_upload_policy,
)

__all__ = [
    "CurrentActor",
    "get_auth_service",
    "get_coordinator",
    "get_current_actor",
    "get_dashboard_aggregator",
    "get_dispatcher",
    "get_lifecycle_engine",
    "get_office_service",
    "get_query_service",
    "get_session_factory_dep",
    "get_storage",
    "get_transactional_session",
    "get_uow",
    "get_upload_policy",
    "require_capability",
]
