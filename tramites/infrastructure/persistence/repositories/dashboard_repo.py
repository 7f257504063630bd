"""Dashboard aggregates. Read-only; no locks taken."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tramites.application.dtos.analytics import AgingDocument, OfficeLoad, StatusCount
from tramites.domain.enums import DocumentStatus
from tramites.infrastructure.persistence.models.document import Document
from tramites.infrastructure.persistence.models.office import Office
from tramites.shared.utils.datetime import ensure_utc


class DashboardRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def count_by_status(self) -> list[StatusCount]:
        result = await self.db.execute(
            select(Document.current_status, func.count(Document.id))
            .group_by(Document.current_status)
            .order_by(Document.current_status)
        )
        return [
            StatusCount(status=DocumentStatus(status), count=int(count))
            for status, count in result.all()
        ]

    async def oldest_in_statuses(
        self, statuses: Iterable[DocumentStatus], limit: int
    ) -> list[AgingDocument]:
        values = [s.value for s in statuses]
        if not values or limit <= 0:
            return []
        result = await self.db.execute(
            select(Document.tracking_code, Office.name, Document.created_at)
            .join(Office, Office.id == Document.current_office_id)
            .where(Document.current_status.in_(values))
            .order_by(Document.created_at.asc(), Document.id)
            .limit(limit)
        )
        rows: list[AgingDocument] = []
        for tracking_code, office_name, created_at in result.all():
            aware = ensure_utc(created_at)
            assert aware is not None
            rows.append(
                AgingDocument(
                    tracking_code=tracking_code,
                    office_name=office_name,
                    created_at=aware,
                )
            )
        return rows

    async def load_by_office(
        self, excluded_statuses: Iterable[DocumentStatus]
    ) -> list[OfficeLoad]:
        """Open documents per holding office, busiest first."""
        excluded = [s.value for s in excluded_statuses]
        count = func.count(Document.id).label("count")
        query = (
            select(Office.id, Office.name, count)
            .select_from(Document)
            .join(Office, Office.id == Document.current_office_id)
        )
        if excluded:
            query = query.where(Document.current_status.not_in(excluded))
        result = await self.db.execute(
            query.group_by(Office.id, Office.name).order_by(count.desc(), Office.name)
        )
        return [
            OfficeLoad(office_id=office_id, office_name=name, count=int(n))
            for office_id, name, n in result.all()
        ]
