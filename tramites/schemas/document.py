"""Document API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tramites.domain.enums import ApplicantType, DocumentStatus, DocumentType

REGISTERED_MESSAGE = "Trámite enviado correctamente"
REGISTERED_INFO = "Se ha enviado el código de seguimiento a su correo electrónico."


class RegistrationResponse(BaseModel):
    """Response for both registration endpoints."""

    message: str = REGISTERED_MESSAGE
    tracking_code: str
    info: str = REGISTERED_INFO


class ApplicantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    applicant_type: ApplicantType
    identifier: str
    name: str
    lastname: str
    email: str
    phone: str | None = None
    address: str | None = None


class DocumentOut(BaseModel):
    """Staff view of a document."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tracking_code: str
    applicant: ApplicantOut
    document_type: DocumentType
    subject: str
    page_count: int
    current_status: DocumentStatus
    current_office_id: str
    owner_office_id: str
    version: int
    created_at: datetime
    updated_at: datetime


class AttachmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    file_url: str
    file_name: str
    file_type: str
    file_size: int
    created_at: datetime


class HistoryEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status_at_moment: DocumentStatus
    observation: str | None
    from_office_id: str | None
    to_office_id: str
    user_id: str | None
    timestamp: datetime


class PendingDocumentOut(BaseModel):
    """Public submission awaiting validation (GET /documents/pending)."""

    model_config = ConfigDict(from_attributes=True)

    document: DocumentOut
    attachments: list[AttachmentOut]
    latest: HistoryEntryOut | None


class HistoryDetailOut(BaseModel):
    """Ledger entry with resolved names (GET /documents/{id}/history)."""

    id: str
    status_at_moment: DocumentStatus
    observation: str | None
    from_office_id: str | None
    from_office_name: str | None
    to_office_id: str
    to_office_name: str
    user_id: str | None
    user_display_name: str | None
    timestamp: datetime


class InboxItemOut(BaseModel):
    document: DocumentOut
    office_name: str
    latest: HistoryDetailOut | None


class RejectRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=2000)


class DeriveRequest(BaseModel):
    target_office_id: str = Field(..., min_length=1)
    instructions: str | None = Field(default=None, max_length=4000)


class AttendRequest(BaseModel):
    """final_status must be atendido or archivado; checked by the lifecycle engine."""

    final_status: str = Field(..., min_length=1)
    observation: str | None = Field(default=None, max_length=4000)


class TrackingStepOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    status: DocumentStatus
    office_name: str
    observation: str


class TrackingResponse(BaseModel):
    """Public tracking payload. Carries no applicant data."""

    model_config = ConfigDict(from_attributes=True)

    tracking_code: str
    subject: str
    current_status: DocumentStatus
    current_office: str
    last_update: datetime
    history: list[TrackingStepOut]
