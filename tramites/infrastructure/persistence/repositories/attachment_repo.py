"""Attachment repository (append-only)."""

from __future__ import annotations

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tramites.application.dtos.document import AttachmentCreate, AttachmentResult
from tramites.infrastructure.persistence.models.attachment import DocumentAttachment
from tramites.infrastructure.persistence.repositories.base import BaseRepository
from tramites.shared.utils.datetime import ensure_utc


def _attachment_to_result(a: DocumentAttachment) -> AttachmentResult:
    created_at = ensure_utc(a.created_at)
    assert created_at is not None
    return AttachmentResult(
        id=a.id,
        document_id=a.document_id,
        file_url=a.file_url,
        file_name=a.file_name,
        file_type=a.file_type,
        file_key=a.file_key,
        file_size=a.file_size,
        checksum=a.checksum,
        created_at=created_at,
    )


class AttachmentRepository(BaseRepository[DocumentAttachment]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentAttachment)

    async def add(self, attachment: AttachmentCreate) -> AttachmentResult:
        orm = DocumentAttachment(
            document_id=attachment.document_id,
            file_url=attachment.file_url,
            file_name=attachment.file_name,
            file_type=attachment.file_type,
            file_key=attachment.file_key,
            file_size=attachment.file_size,
            checksum=attachment.checksum,
        )
        return _attachment_to_result(await self._insert(orm))

    async def list_for_documents(
        self, document_ids: list[str]
    ) -> dict[str, list[AttachmentResult]]:
        """Attachments grouped by document id, in upload order."""
        if not document_ids:
            return {}
        result = await self.db.execute(
            select(DocumentAttachment)
            .where(DocumentAttachment.document_id.in_(document_ids))
            .order_by(DocumentAttachment.created_at, DocumentAttachment.id)
        )
        grouped: dict[str, list[AttachmentResult]] = defaultdict(list)
        for row in result.scalars().all():
            grouped[row.document_id].append(_attachment_to_result(row))
        return dict(grouped)
