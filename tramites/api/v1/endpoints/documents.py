"""Document API: thin routes delegating to the lifecycle engine and query service."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from tramites.api.v1.dependencies import (
    CurrentActor,
    get_lifecycle_engine,
    get_query_service,
)
from tramites.application.dtos.document import (
    ApplicantSnapshot,
    DocumentIntake,
    HistoryEntryDetail,
    UploadedFile,
)
from tramites.application.use_cases.documents import (
    DocumentLifecycleEngine,
    DocumentQueryService,
    UploadPolicy,
)
from tramites.core.limiter import limit_public_register, limit_track
from tramites.domain.enums import ApplicantType, DocumentType
from tramites.schemas.document import (
    AttendRequest,
    DeriveRequest,
    DocumentOut,
    HistoryDetailOut,
    InboxItemOut,
    PendingDocumentOut,
    RegistrationResponse,
    RejectRequest,
    TrackingResponse,
)

router = APIRouter()


class IntakeForm:
    """Multipart fields shared by both registration endpoints."""

    def __init__(
        self,
        applicant_type: Annotated[ApplicantType, Form()],
        applicant_identifier: Annotated[str, Form()],
        applicant_name: Annotated[str, Form()],
        applicant_lastname: Annotated[str, Form()],
        applicant_email: Annotated[str, Form()],
        document_type: Annotated[DocumentType, Form()],
        subject: Annotated[str, Form()],
        page_count: Annotated[int, Form()],
        applicant_phone: Annotated[str | None, Form()] = None,
        applicant_address: Annotated[str | None, Form()] = None,
    ) -> None:
        self.intake = DocumentIntake(
            applicant=ApplicantSnapshot(
                applicant_type=applicant_type,
                identifier=applicant_identifier,
                name=applicant_name,
                lastname=applicant_lastname,
                email=applicant_email,
                phone=applicant_phone,
                address=applicant_address,
            ),
            document_type=document_type,
            subject=subject,
            page_count=page_count,
        )


async def _read_upload(
    file: UploadFile | None, policy: UploadPolicy
) -> UploadedFile | None:
    """Read the part into memory, refusing oversize files before buffering them."""
    if file is None:
        return None
    policy.check_size(file.size)
    content = await file.read(policy.max_size + 1)
    return UploadedFile(
        filename=file.filename or "",
        content_type=file.content_type or "application/octet-stream",
        content=content,
    )


def _detail_out(item: HistoryEntryDetail) -> HistoryDetailOut:
    entry = item.entry
    return HistoryDetailOut(
        id=entry.id,
        status_at_moment=entry.status_at_moment,
        observation=entry.observation,
        from_office_id=entry.from_office_id,
        from_office_name=item.from_office_name,
        to_office_id=entry.to_office_id,
        to_office_name=item.to_office_name,
        user_id=entry.user_id,
        user_display_name=item.user_display_name,
        timestamp=entry.timestamp,
    )


@router.post("/internal/register", response_model=RegistrationResponse, status_code=201)
async def register_internal(
    actor: CurrentActor,
    form: Annotated[IntakeForm, Depends()],
    engine: Annotated[DocumentLifecycleEngine, Depends(get_lifecycle_engine)],
    file: Annotated[UploadFile | None, File()] = None,
):
    """Staff intake at Mesa de Partes; the document is received immediately."""
    upload = await _read_upload(file, engine.upload_policy)
    result = await engine.create_internal(form.intake, upload, actor)
    return RegistrationResponse(tracking_code=result.tracking_code)


@router.post("/public/register", response_model=RegistrationResponse, status_code=201)
@limit_public_register
async def register_public(
    request: Request,
    form: Annotated[IntakeForm, Depends()],
    engine: Annotated[DocumentLifecycleEngine, Depends(get_lifecycle_engine)],
    file: Annotated[UploadFile | None, File()] = None,
):
    """Anonymous submission; waits in the intake office until validated."""
    upload = await _read_upload(file, engine.upload_policy)
    result = await engine.create_external(form.intake, upload)
    return RegistrationResponse(tracking_code=result.tracking_code)


@router.get("/pending", response_model=list[PendingDocumentOut])
async def list_pending(
    actor: CurrentActor,
    queries: Annotated[DocumentQueryService, Depends(get_query_service)],
):
    items = await queries.list_pending(actor)
    return [PendingDocumentOut.model_validate(i, from_attributes=True) for i in items]


@router.get("/inbox", response_model=list[InboxItemOut])
async def list_inbox(
    actor: CurrentActor,
    queries: Annotated[DocumentQueryService, Depends(get_query_service)],
):
    """Open documents held by the actor's office, most recently updated first."""
    items = await queries.list_inbox(actor)
    return [
        InboxItemOut(
            document=DocumentOut.model_validate(i.document, from_attributes=True),
            office_name=i.office_name,
            latest=_detail_out(i.latest) if i.latest else None,
        )
        for i in items
    ]


@router.get("/track/{tracking_code}", response_model=TrackingResponse)
@limit_track
async def track(
    request: Request,
    tracking_code: str,
    queries: Annotated[DocumentQueryService, Depends(get_query_service)],
):
    """Public status lookup by tracking code."""
    view = await queries.track(tracking_code=tracking_code)
    return TrackingResponse.model_validate(view, from_attributes=True)


@router.patch("/{document_id}/approve", response_model=DocumentOut)
async def approve(
    document_id: str,
    actor: CurrentActor,
    engine: Annotated[DocumentLifecycleEngine, Depends(get_lifecycle_engine)],
):
    record = await engine.approve(document_id=document_id, actor=actor)
    return DocumentOut.model_validate(record, from_attributes=True)


@router.patch("/{document_id}/reject", response_model=DocumentOut)
async def reject(
    document_id: str,
    body: RejectRequest,
    actor: CurrentActor,
    engine: Annotated[DocumentLifecycleEngine, Depends(get_lifecycle_engine)],
):
    record = await engine.reject(document_id=document_id, reason=body.reason, actor=actor)
    return DocumentOut.model_validate(record, from_attributes=True)


@router.patch("/{document_id}/derive", response_model=DocumentOut)
async def derive(
    document_id: str,
    body: DeriveRequest,
    actor: CurrentActor,
    engine: Annotated[DocumentLifecycleEngine, Depends(get_lifecycle_engine)],
):
    record = await engine.derive(
        document_id=document_id,
        target_office_id=body.target_office_id,
        instructions=body.instructions,
        actor=actor,
    )
    return DocumentOut.model_validate(record, from_attributes=True)


@router.patch("/{document_id}/attend", response_model=DocumentOut)
async def attend(
    document_id: str,
    body: AttendRequest,
    actor: CurrentActor,
    engine: Annotated[DocumentLifecycleEngine, Depends(get_lifecycle_engine)],
):
    record = await engine.attend(
        document_id=document_id,
        final_status=body.final_status,
        observation=body.observation,
        actor=actor,
    )
    return DocumentOut.model_validate(record, from_attributes=True)


@router.get("/{document_id}/history", response_model=list[HistoryDetailOut])
async def get_history(
    document_id: str,
    actor: CurrentActor,
    queries: Annotated[DocumentQueryService, Depends(get_query_service)],
):
    """Full internal ledger, newest first."""
    items = await queries.get_history(document_id=document_id, actor=actor)
    return [_detail_out(i) for i in items]
