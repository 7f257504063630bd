"""Repository interfaces (ports) and the unit of work.

Protocols define contracts the application layer depends on (DIP);
SQLAlchemy implementations live in tramites.infrastructure.persistence.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeVar

from tramites.application.dtos.analytics import AgingDocument, OfficeLoad, StatusCount
from tramites.application.dtos.document import (
    AttachmentCreate,
    AttachmentResult,
    DocumentCreate,
    DocumentRecord,
    HistoryEntry,
    HistoryEntryCreate,
    HistoryEntryDetail,
)
from tramites.application.dtos.office import (
    OfficeCreate,
    OfficeResult,
    UserCredentials,
    UserResult,
)
from tramites.domain.enums import DocumentStatus

T = TypeVar("T")


class IOfficeRepository(Protocol):
    """Office tree storage."""

    async def get_by_id(self, office_id: str) -> OfficeResult | None: ...

    async def get_by_name(self, name: str) -> OfficeResult | None: ...

    async def list_all(self) -> list[OfficeResult]: ...

    async def create(self, office: OfficeCreate) -> OfficeResult: ...

    async def set_parent(
        self, office_id: str, parent_office_id: str | None
    ) -> OfficeResult: ...


class IUserRepository(Protocol):
    """User lookups for building the actor context and signing in."""

    async def get_by_id(self, user_id: str) -> UserResult | None: ...

    async def get_credentials(self, identifier: str) -> UserCredentials | None:
        """Look up by username, e-mail or DNI."""


class IDocumentRepository(Protocol):
    """Document rows; status and location change only through apply_transition."""

    async def create(self, document: DocumentCreate) -> DocumentRecord: ...

    async def get_by_id(
        self, document_id: str, *, for_update: bool = False
    ) -> DocumentRecord | None: ...

    async def get_by_tracking_code(self, tracking_code: str) -> DocumentRecord | None: ...

    async def apply_transition(
        self,
        document: DocumentRecord,
        new_status: DocumentStatus,
        new_office_id: str,
        at: datetime,
    ) -> bool:
        """Move document only if status, office and version still match; False otherwise."""

    async def list_by_status(self, status: DocumentStatus) -> list[DocumentRecord]:
        """Documents in status, oldest first."""

    async def list_in_office(
        self, office_id: str, excluded_statuses: Iterable[DocumentStatus]
    ) -> list[DocumentRecord]:
        """Documents held by office, most recently updated first."""


class IAttachmentRepository(Protocol):
    """Append-only attachment rows."""

    async def add(self, attachment: AttachmentCreate) -> AttachmentResult: ...

    async def list_for_documents(
        self, document_ids: list[str]
    ) -> dict[str, list[AttachmentResult]]: ...


class IDocumentHistoryRepository(Protocol):
    """Audit history ledger: append-only, read newest first."""

    async def append(self, entry: HistoryEntryCreate) -> HistoryEntry: ...

    async def latest(self, document_id: str) -> HistoryEntry | None: ...

    async def latest_for_documents(
        self, document_ids: list[str]
    ) -> dict[str, HistoryEntry]: ...

    async def latest_details_for_documents(
        self, document_ids: list[str]
    ) -> dict[str, HistoryEntryDetail]: ...

    async def all(self, document_id: str) -> list[HistoryEntryDetail]: ...


class IDashboardRepository(Protocol):
    """Read-only aggregates over documents."""

    async def count_by_status(self) -> list[StatusCount]: ...

    async def oldest_in_statuses(
        self, statuses: Iterable[DocumentStatus], limit: int
    ) -> list[AgingDocument]: ...

    async def load_by_office(
        self, excluded_statuses: Iterable[DocumentStatus]
    ) -> list[OfficeLoad]: ...


@dataclass(frozen=True)
class Repositories:
    """Repositories bound to one transaction."""

    offices: IOfficeRepository
    users: IUserRepository
    documents: IDocumentRepository
    attachments: IAttachmentRepository
    history: IDocumentHistoryRepository
    dashboard: IDashboardRepository


class IUnitOfWork(Protocol):
    """Runs a block of repository calls in one transaction.

    Commits when work returns; rolls back and re-raises when it raises.
    Database failures surface as PersistenceException, and a unique
    tracking code violation as TrackingCodeCollisionException.
    """

    async def run(self, work: Callable[[Repositories], Awaitable[T]]) -> T: ...
