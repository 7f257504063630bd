"""Document history repository: append and read the ledger."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from tramites.application.dtos.document import (
    HistoryEntry,
    HistoryEntryCreate,
    HistoryEntryDetail,
)
from tramites.domain.enums import DocumentStatus
from tramites.infrastructure.persistence.models.history import DocumentHistory
from tramites.infrastructure.persistence.models.office import Office
from tramites.infrastructure.persistence.models.user import User
from tramites.infrastructure.persistence.repositories.base import BaseRepository
from tramites.shared.utils.datetime import ensure_utc

_FromOffice = aliased(Office, name="from_office")
_ToOffice = aliased(Office, name="to_office")

# sequence breaks ties between entries written at the same instant.
_NEWEST_FIRST = (DocumentHistory.timestamp.desc(), DocumentHistory.sequence.desc())


def _entry_to_dto(h: DocumentHistory) -> HistoryEntry:
    timestamp = ensure_utc(h.timestamp)
    assert timestamp is not None
    return HistoryEntry(
        id=h.id,
        document_id=h.document_id,
        status_at_moment=DocumentStatus(h.status_at_moment),
        observation=h.observation,
        from_office_id=h.from_office_id,
        to_office_id=h.to_office_id,
        user_id=h.user_id,
        timestamp=timestamp,
        sequence=h.sequence,
    )


def _row_to_detail(row: Any) -> HistoryEntryDetail:
    entry, from_name, to_name, user_name, user_last_name, username = row
    display = None
    if user_name is not None:
        display = f"{user_name} {user_last_name}".strip()
    return HistoryEntryDetail(
        entry=_entry_to_dto(entry),
        from_office_name=from_name,
        to_office_name=to_name,
        user_display_name=display,
        user_username=username,
    )


def _detail_query() -> Select[Any]:
    """History rows joined to office names and the acting user (never the hash)."""
    return (
        select(
            DocumentHistory,
            _FromOffice.name,
            _ToOffice.name,
            User.name,
            User.last_name,
            User.username,
        )
        .join(_ToOffice, _ToOffice.id == DocumentHistory.to_office_id)
        .outerjoin(_FromOffice, _FromOffice.id == DocumentHistory.from_office_id)
        .outerjoin(User, User.id == DocumentHistory.user_id)
    )


def _latest_ids(document_ids: list[str]) -> Select[Any]:
    ranked = (
        select(
            DocumentHistory.id.label("id"),
            func.row_number()
            .over(
                partition_by=DocumentHistory.document_id,
                order_by=list(_NEWEST_FIRST),
            )
            .label("rank"),
        )
        .where(DocumentHistory.document_id.in_(document_ids))
        .subquery()
    )
    return select(ranked.c.id).where(ranked.c.rank == 1)


class DocumentHistoryRepository(BaseRepository[DocumentHistory]):
    """Ledger reads are newest first; writes only append."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentHistory)

    async def append(self, entry: HistoryEntryCreate) -> HistoryEntry:
        orm = DocumentHistory(
            document_id=entry.document_id,
            status_at_moment=entry.status_at_moment.value,
            observation=entry.observation,
            from_office_id=entry.from_office_id,
            to_office_id=entry.to_office_id,
            user_id=entry.user_id,
            timestamp=entry.timestamp,
            sequence=entry.sequence,
        )
        return _entry_to_dto(await self._insert(orm))

    async def latest(self, document_id: str) -> HistoryEntry | None:
        result = await self.db.execute(
            select(DocumentHistory)
            .where(DocumentHistory.document_id == document_id)
            .order_by(*_NEWEST_FIRST)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _entry_to_dto(row) if row else None

    async def latest_for_documents(
        self, document_ids: list[str]
    ) -> dict[str, HistoryEntry]:
        if not document_ids:
            return {}
        result = await self.db.execute(
            select(DocumentHistory).where(
                DocumentHistory.id.in_(_latest_ids(document_ids))
            )
        )
        return {h.document_id: _entry_to_dto(h) for h in result.scalars().all()}

    async def latest_details_for_documents(
        self, document_ids: list[str]
    ) -> dict[str, HistoryEntryDetail]:
        if not document_ids:
            return {}
        result = await self.db.execute(
            _detail_query().where(DocumentHistory.id.in_(_latest_ids(document_ids)))
        )
        details = (_row_to_detail(row) for row in result.all())
        return {d.entry.document_id: d for d in details}

    async def all(self, document_id: str) -> list[HistoryEntryDetail]:
        result = await self.db.execute(
            _detail_query()
            .where(DocumentHistory.document_id == document_id)
            .order_by(*_NEWEST_FIRST)
        )
        return [_row_to_detail(row) for row in result.all()]
