"""Application ports: repository, unit of work and external service protocols."""

from tramites.application.interfaces.repositories import (
    IAttachmentRepository,
    IDashboardRepository,
    IDocumentHistoryRepository,
    IDocumentRepository,
    IOfficeRepository,
    IUnitOfWork,
    IUserRepository,
    Repositories,
)
from tramites.application.interfaces.services import (
    INotificationService,
    IStorageService,
)

__all__ = [
    "IAttachmentRepository",
    "IDashboardRepository",
    "IDocumentHistoryRepository",
    "IDocumentRepository",
    "INotificationService",
    "IOfficeRepository",
    "IStorageService",
    "IUnitOfWork",
    "IUserRepository",
    "Repositories",
]
