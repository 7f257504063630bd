"""Office tree maintenance with write-time integrity checks."""

from __future__ import annotations

from tramites.application.dtos.office import OfficeCreate, OfficeResult, OfficeTreeNode
from tramites.application.interfaces.repositories import IOfficeRepository
from tramites.domain.exceptions import ResourceNotFoundException, ValidationException
from tramites.shared.telemetry.logging import get_logger
from tramites.shared.utils.sanitization import sanitize_text

logger = get_logger(__name__)


class OfficeService:
    """Create and re-parent offices while keeping the hierarchy a strict tree.

    Parent links are plain self-references; this service rejects unknown
    parents, duplicate names and any re-parenting that would close a cycle.
    """

    def __init__(self, office_repo: IOfficeRepository) -> None:
        self.office_repo = office_repo

    async def create_office(self, data: OfficeCreate) -> OfficeResult:
        name = (sanitize_text(data.name) or "").strip()
        acronym = (sanitize_text(data.acronym) or "").strip()
        if not name:
            raise ValidationException("El nombre de la oficina es obligatorio.", field="name")
        if not acronym:
            raise ValidationException("La sigla de la oficina es obligatoria.", field="acronym")
        if await self.office_repo.get_by_name(name) is not None:
            raise ValidationException(
                f"Ya existe una oficina con el nombre '{name}'.", field="name"
            )
        if data.parent_office_id is not None:
            await self._get_or_raise(data.parent_office_id, "parent_office")
        office = await self.office_repo.create(
            OfficeCreate(
                name=name,
                acronym=acronym,
                office_type=data.office_type,
                parent_office_id=data.parent_office_id,
            )
        )
        logger.info("Office created: id=%s name=%s", office.id, office.name)
        return office

    async def reparent(
        self, office_id: str, new_parent_id: str | None
    ) -> OfficeResult:
        """Move office under new_parent_id (None makes it a root)."""
        await self._get_or_raise(office_id, "office")
        if new_parent_id is not None:
            if new_parent_id == office_id:
                raise ValidationException(
                    "Una oficina no puede ser su propia dependencia.",
                    field="parent_office_id",
                )
            await self._get_or_raise(new_parent_id, "parent_office")
            await self._ensure_not_descendant(office_id, new_parent_id)
        office = await self.office_repo.set_parent(office_id, new_parent_id)
        logger.info("Office re-parented: id=%s parent=%s", office_id, new_parent_id)
        return office

    async def list_offices(self) -> list[OfficeResult]:
        return await self.office_repo.list_all()

    async def get_tree(self) -> list[OfficeTreeNode]:
        """Return root offices with nested children, siblings ordered by name."""
        offices = await self.office_repo.list_all()
        nodes = {o.id: OfficeTreeNode(office=o) for o in offices}
        roots: list[OfficeTreeNode] = []
        for office in sorted(offices, key=lambda o: o.name):
            node = nodes[office.id]
            parent = nodes.get(office.parent_office_id) if office.parent_office_id else None
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    async def _get_or_raise(self, office_id: str, resource_type: str) -> OfficeResult:
        office = await self.office_repo.get_by_id(office_id)
        if office is None:
            raise ResourceNotFoundException(
                resource_type, office_id, message="La oficina no existe."
            )
        return office

    async def _ensure_not_descendant(self, office_id: str, candidate_parent_id: str) -> None:
        """Walk up from candidate_parent_id; reaching office_id means a cycle."""
        seen: set[str] = set()
        current: str | None = candidate_parent_id
        while current is not None:
            if current == office_id:
                raise ValidationException(
                    "La nueva dependencia generaría un ciclo en el organigrama.",
                    field="parent_office_id",
                )
            if current in seen:
                break
            seen.add(current)
            ancestor = await self.office_repo.get_by_id(current)
            current = ancestor.parent_office_id if ancestor else None
