"""Office repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tramites.application.dtos.office import OfficeCreate, OfficeResult
from tramites.domain.enums import OfficeType
from tramites.domain.exceptions import ResourceNotFoundException
from tramites.infrastructure.persistence.models.office import Office
from tramites.infrastructure.persistence.repositories.base import BaseRepository
from tramites.shared.utils.datetime import ensure_utc, utc_now


def _office_to_result(o: Office) -> OfficeResult:
    created_at = ensure_utc(o.created_at)
    assert created_at is not None
    return OfficeResult(
        id=o.id,
        name=o.name,
        acronym=o.acronym,
        office_type=OfficeType(o.type),
        parent_office_id=o.parent_office_id,
        created_at=created_at,
    )


class OfficeRepository(BaseRepository[Office]):
    """Office tree storage. Integrity rules live in OfficeService."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Office)

    async def get_by_id(self, office_id: str) -> OfficeResult | None:
        row = await self._get_orm(office_id)
        return _office_to_result(row) if row else None

    async def get_by_name(self, name: str) -> OfficeResult | None:
        result = await self.db.execute(select(Office).where(Office.name == name))
        row = result.scalar_one_or_none()
        return _office_to_result(row) if row else None

    async def list_all(self) -> list[OfficeResult]:
        result = await self.db.execute(select(Office).order_by(Office.name))
        return [_office_to_result(o) for o in result.scalars().all()]

    async def create(self, office: OfficeCreate) -> OfficeResult:
        orm = Office(
            name=office.name,
            acronym=office.acronym,
            type=office.office_type.value,
            parent_office_id=office.parent_office_id,
        )
        return _office_to_result(await self._insert(orm))

    async def set_parent(
        self, office_id: str, parent_office_id: str | None
    ) -> OfficeResult:
        result = await self.db.execute(
            update(Office)
            .where(Office.id == office_id)
            .values(parent_office_id=parent_office_id, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ResourceNotFoundException("office", office_id)
        row = await self.db.execute(
            select(Office)
            .where(Office.id == office_id)
            .execution_options(populate_existing=True)
        )
        return _office_to_result(row.scalar_one())
