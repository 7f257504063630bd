"""Application DTOs: frozen dataclasses passed between layers."""

from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.analytics import (
    AgingDocument,
    Bottleneck,
    DashboardSnapshot,
    OfficeLoad,
    StatusCount,
)
from tramites.application.dtos.document import (
    ApplicantSnapshot,
    AttachmentCreate,
    AttachmentResult,
    DocumentCreate,
    DocumentIntake,
    DocumentRecord,
    HistoryEntry,
    HistoryEntryCreate,
    HistoryEntryDetail,
    InboxItem,
    PendingDocument,
    Placement,
    RegistrationResult,
    TrackingStep,
    TrackingView,
    UploadedFile,
)
from tramites.application.dtos.office import (
    OfficeCreate,
    OfficeResult,
    OfficeTreeNode,
    UserCredentials,
    UserResult,
)
from tramites.application.dtos.storage import StoredObject

__all__ = [
    "ActorContext",
    "AgingDocument",
    "ApplicantSnapshot",
    "AttachmentCreate",
    "AttachmentResult",
    "Bottleneck",
    "DashboardSnapshot",
    "DocumentCreate",
    "DocumentIntake",
    "DocumentRecord",
    "HistoryEntry",
    "HistoryEntryCreate",
    "HistoryEntryDetail",
    "InboxItem",
    "OfficeCreate",
    "OfficeLoad",
    "OfficeResult",
    "OfficeTreeNode",
    "PendingDocument",
    "Placement",
    "RegistrationResult",
    "StatusCount",
    "StoredObject",
    "TrackingStep",
    "TrackingView",
    "UploadedFile",
    "UserCredentials",
    "UserResult",
]
