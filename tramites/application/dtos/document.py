"""DTOs for document intake, lifecycle and queries (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tramites.domain.enums import ApplicantType, DocumentStatus, DocumentType


@dataclass(frozen=True)
class ApplicantSnapshot:
    """Applicant identity captured at submission; never re-read from a user record."""

    applicant_type: ApplicantType
    identifier: str
    name: str
    lastname: str
    email: str
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class DocumentIntake:
    """Validated submission fields for a new document."""

    applicant: ApplicantSnapshot
    document_type: DocumentType
    subject: str
    page_count: int


@dataclass(frozen=True)
class UploadedFile:
    """File received with a submission, fully read into memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class Placement:
    """Where and how a new document enters the workflow (row and first ledger entry)."""

    office_id: str
    status: DocumentStatus
    observation: str | None
    user_id: str | None


@dataclass(frozen=True)
class DocumentCreate:
    """Write-model for the document row."""

    id: str
    tracking_code: str
    intake: DocumentIntake
    status: DocumentStatus
    office_id: str
    created_at: datetime


@dataclass(frozen=True)
class DocumentRecord:
    """Document read-model."""

    id: str
    tracking_code: str
    applicant: ApplicantSnapshot
    document_type: DocumentType
    subject: str
    page_count: int
    current_status: DocumentStatus
    current_office_id: str
    owner_office_id: str
    version: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AttachmentCreate:
    document_id: str
    file_url: str
    file_name: str
    file_type: str
    file_key: str
    file_size: int
    checksum: str | None = None


@dataclass(frozen=True)
class AttachmentResult:
    id: str
    document_id: str
    file_url: str
    file_name: str
    file_type: str
    file_key: str
    file_size: int
    checksum: str | None
    created_at: datetime


@dataclass(frozen=True)
class HistoryEntryCreate:
    """One ledger append.

    timestamp is supplied by the caller so it matches updated_at; sequence is
    the document version after the change, so it grows by one per entry.
    """

    document_id: str
    status_at_moment: DocumentStatus
    to_office_id: str
    timestamp: datetime
    sequence: int
    from_office_id: str | None = None
    user_id: str | None = None
    observation: str | None = None


@dataclass(frozen=True)
class HistoryEntry:
    """Ledger row as stored."""

    id: str
    document_id: str
    status_at_moment: DocumentStatus
    observation: str | None
    from_office_id: str | None
    to_office_id: str
    user_id: str | None
    timestamp: datetime
    sequence: int


@dataclass(frozen=True)
class HistoryEntryDetail:
    """Ledger row enriched with office names and the acting user's display name."""

    entry: HistoryEntry
    from_office_name: str | None
    to_office_name: str
    user_display_name: str | None
    user_username: str | None = None


@dataclass(frozen=True)
class RegistrationResult:
    document: DocumentRecord
    attachment: AttachmentResult

    @property
    def tracking_code(self) -> str:
        return self.document.tracking_code


@dataclass(frozen=True)
class PendingDocument:
    """Public submission awaiting validation, with its files and latest ledger entry."""

    document: DocumentRecord
    attachments: list[AttachmentResult] = field(default_factory=list)
    latest: HistoryEntry | None = None


@dataclass(frozen=True)
class InboxItem:
    """Document held by the actor's office plus who sent it and why."""

    document: DocumentRecord
    office_name: str
    latest: HistoryEntryDetail | None


@dataclass(frozen=True)
class TrackingStep:
    date: datetime
    status: DocumentStatus
    office_name: str
    observation: str


@dataclass(frozen=True)
class TrackingView:
    """Public tracking payload: no applicant data beyond the subject line."""

    tracking_code: str
    subject: str
    current_status: DocumentStatus
    current_office: str
    last_update: datetime
    history: list[TrackingStep]
