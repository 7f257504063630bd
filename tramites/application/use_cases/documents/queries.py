"""Document read paths: pending validation, inbox, public tracking, full history."""

from __future__ import annotations

from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.document import (
    HistoryEntryDetail,
    InboxItem,
    PendingDocument,
    TrackingStep,
    TrackingView,
)
from tramites.application.interfaces.repositories import IUnitOfWork, Repositories
from tramites.application.services.authorization_service import (
    Capability,
    ensure_capability,
    require_office,
)
from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import ResourceNotFoundException
from tramites.domain.tracking_code import normalize_tracking_code
from tramites.domain.transitions import TERMINAL_STATUSES
from tramites.shared.telemetry.tracing import traced

FINISHED_OFFICE_LABEL = "Finalizado"
NO_OBSERVATION_LABEL = "Sin observaciones"


class DocumentQueryService:
    """Read-only queries over documents and the ledger."""

    def __init__(self, uow: IUnitOfWork) -> None:
        self.uow = uow

    async def list_pending(self, actor: ActorContext) -> list[PendingDocument]:
        """Public submissions awaiting validation, oldest first."""
        ensure_capability(actor, Capability.LIST_PENDING)

        async def work(repos: Repositories) -> list[PendingDocument]:
            documents = await repos.documents.list_by_status(DocumentStatus.CREADO)
            ids = [d.id for d in documents]
            attachments = await repos.attachments.list_for_documents(ids)
            latest = await repos.history.latest_for_documents(ids)
            return [
                PendingDocument(
                    document=d,
                    attachments=attachments.get(d.id, []),
                    latest=latest.get(d.id),
                )
                for d in documents
            ]

        return await self.uow.run(work)

    async def list_inbox(self, actor: ActorContext) -> list[InboxItem]:
        """Open documents in the actor's office, most recently updated first."""
        ensure_capability(actor, Capability.HANDLE_DOCUMENTS)
        office_id = require_office(actor)

        async def work(repos: Repositories) -> list[InboxItem]:
            office = await repos.offices.get_by_id(office_id)
            if office is None:
                raise ResourceNotFoundException("office", office_id, message="La oficina no existe.")
            documents = await repos.documents.list_in_office(office_id, TERMINAL_STATUSES)
            latest = await repos.history.latest_details_for_documents([d.id for d in documents])
            return [
                InboxItem(document=d, office_name=office.name, latest=latest.get(d.id))
                for d in documents
            ]

        return await self.uow.run(work)

    @traced("documents.track")
    async def track(self, *, tracking_code: str) -> TrackingView:
        """Public lookup by tracking code; exposes no applicant data beyond the subject."""
        code = normalize_tracking_code(tracking_code)

        async def work(repos: Repositories) -> TrackingView:
            document = await repos.documents.get_by_tracking_code(code)
            if document is None:
                raise ResourceNotFoundException(
                    "tracking_code", code, message="Código de seguimiento no encontrado."
                )
            office = await repos.offices.get_by_id(document.current_office_id)
            history = await repos.history.all(document.id)
            return TrackingView(
                tracking_code=document.tracking_code,
                subject=document.subject,
                current_status=document.current_status,
                current_office=office.name if office else FINISHED_OFFICE_LABEL,
                last_update=document.updated_at,
                history=[
                    TrackingStep(
                        date=item.entry.timestamp,
                        status=item.entry.status_at_moment,
                        office_name=item.to_office_name,
                        observation=item.entry.observation or NO_OBSERVATION_LABEL,
                    )
                    for item in history
                ],
            )

        return await self.uow.run(work)

    @traced("documents.history")
    async def get_history(
        self, *, document_id: str, actor: ActorContext
    ) -> list[HistoryEntryDetail]:
        """Full internal ledger for staff, newest first."""
        ensure_capability(actor, Capability.VIEW_HISTORY)

        async def work(repos: Repositories) -> list[HistoryEntryDetail]:
            if await repos.documents.get_by_id(document_id) is None:
                raise ResourceNotFoundException(
                    "document", document_id, message="El documento no existe."
                )
            return await repos.history.all(document_id)

        return await self.uow.run(work)
