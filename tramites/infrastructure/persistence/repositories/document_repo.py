"""Document repository with optimistic, row-locked transitions."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tramites.application.dtos.document import (
    ApplicantSnapshot,
    DocumentCreate,
    DocumentRecord,
)
from tramites.domain.enums import ApplicantType, DocumentStatus, DocumentType
from tramites.infrastructure.persistence.models.document import Document
from tramites.infrastructure.persistence.repositories.base import BaseRepository
from tramites.shared.utils.datetime import ensure_utc


def _document_to_record(d: Document) -> DocumentRecord:
    created_at = ensure_utc(d.created_at)
    updated_at = ensure_utc(d.updated_at)
    assert created_at is not None and updated_at is not None
    return DocumentRecord(
        id=d.id,
        tracking_code=d.tracking_code,
        applicant=ApplicantSnapshot(
            applicant_type=ApplicantType(d.applicant_type),
            identifier=d.applicant_identifier,
            name=d.applicant_name,
            lastname=d.applicant_lastname,
            email=d.applicant_email,
            phone=d.applicant_phone,
            address=d.applicant_address,
        ),
        document_type=DocumentType(d.document_type),
        subject=d.subject,
        page_count=d.page_count,
        current_status=DocumentStatus(d.current_status),
        current_office_id=d.current_office_id,
        owner_office_id=d.owner_office_id,
        version=d.version,
        created_at=created_at,
        updated_at=updated_at,
    )


class DocumentRepository(BaseRepository[Document]):
    """Document rows. Status and office move only through apply_transition."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def create(self, document: DocumentCreate) -> DocumentRecord:
        applicant = document.intake.applicant
        orm = Document(
            id=document.id,
            tracking_code=document.tracking_code,
            applicant_type=applicant.applicant_type.value,
            applicant_identifier=applicant.identifier,
            applicant_name=applicant.name,
            applicant_lastname=applicant.lastname,
            applicant_email=applicant.email,
            applicant_phone=applicant.phone,
            applicant_address=applicant.address,
            document_type=document.intake.document_type.value,
            subject=document.intake.subject,
            page_count=document.intake.page_count,
            current_status=document.status.value,
            current_office_id=document.office_id,
            owner_office_id=document.office_id,
            version=1,
            created_at=document.created_at,
            updated_at=document.created_at,
        )
        return _document_to_record(await self._insert(orm))

    async def get_by_id(
        self, document_id: str, *, for_update: bool = False
    ) -> DocumentRecord | None:
        query = (
            select(Document)
            .where(Document.id == document_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        row = result.scalar_one_or_none()
        return _document_to_record(row) if row else None

    async def get_by_tracking_code(self, tracking_code: str) -> DocumentRecord | None:
        result = await self.db.execute(
            select(Document).where(Document.tracking_code == tracking_code)
        )
        row = result.scalar_one_or_none()
        return _document_to_record(row) if row else None

    async def apply_transition(
        self,
        document: DocumentRecord,
        new_status: DocumentStatus,
        new_office_id: str,
        at: datetime,
    ) -> bool:
        """Conditional UPDATE guarded by status, office and version."""
        result = await self.db.execute(
            update(Document)
            .where(
                Document.id == document.id,
                Document.current_status == document.current_status.value,
                Document.current_office_id == document.current_office_id,
                Document.version == document.version,
            )
            .values(
                current_status=new_status.value,
                current_office_id=new_office_id,
                version=Document.version + 1,
                updated_at=at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_by_status(self, status: DocumentStatus) -> list[DocumentRecord]:
        result = await self.db.execute(
            select(Document)
            .where(Document.current_status == status.value)
            .order_by(Document.created_at.asc(), Document.id)
        )
        return [_document_to_record(d) for d in result.scalars().all()]

    async def list_in_office(
        self, office_id: str, excluded_statuses: Iterable[DocumentStatus]
    ) -> list[DocumentRecord]:
        excluded = [s.value for s in excluded_statuses]
        query = select(Document).where(Document.current_office_id == office_id)
        if excluded:
            query = query.where(Document.current_status.not_in(excluded))
        result = await self.db.execute(
            query.order_by(Document.updated_at.desc(), Document.id)
        )
        return [_document_to_record(d) for d in result.scalars().all()]
