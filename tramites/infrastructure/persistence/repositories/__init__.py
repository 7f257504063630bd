"""Repository implementations. Each maps ORM rows to application DTOs."""

from tramites.infrastructure.persistence.repositories.attachment_repo import (
    AttachmentRepository,
)
from tramites.infrastructure.persistence.repositories.base import BaseRepository
from tramites.infrastructure.persistence.repositories.dashboard_repo import (
    DashboardRepository,
)
from tramites.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from tramites.infrastructure.persistence.repositories.history_repo import (
    DocumentHistoryRepository,
)
from tramites.infrastructure.persistence.repositories.office_repo import (
    OfficeRepository,
)
from tramites.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AttachmentRepository",
    "BaseRepository",
    "DashboardRepository",
    "DocumentHistoryRepository",
    "DocumentRepository",
    "OfficeRepository",
    "UserRepository",
]
