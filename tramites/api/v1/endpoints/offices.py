"""Office API: organisation chart reads for staff, writes for SUPER_ADMIN."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tramites.api.v1.dependencies import (
    CurrentActor,
    get_office_service,
    require_capability,
)
from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.office import OfficeCreate, OfficeTreeNode
from tramites.application.services.authorization_service import Capability
from tramites.application.services.office_service import OfficeService
from tramites.schemas.office import (
    OfficeCreateRequest,
    OfficeOut,
    OfficeReparentRequest,
    OfficeTreeOut,
)

router = APIRouter()

OfficeAdmin = Annotated[ActorContext, Depends(require_capability(Capability.MANAGE_OFFICES))]


def _tree_out(node: OfficeTreeNode) -> OfficeTreeOut:
    return OfficeTreeOut(
        id=node.office.id,
        name=node.office.name,
        acronym=node.office.acronym,
        office_type=node.office.office_type,
        children=[_tree_out(child) for child in node.children],
    )


@router.get("", response_model=list[OfficeOut])
async def list_offices(
    _actor: CurrentActor,
    service: Annotated[OfficeService, Depends(get_office_service)],
):
    offices = await service.list_offices()
    return [OfficeOut.model_validate(o, from_attributes=True) for o in offices]


@router.get("/tree", response_model=list[OfficeTreeOut])
async def get_tree(
    _actor: CurrentActor,
    service: Annotated[OfficeService, Depends(get_office_service)],
):
    return [_tree_out(root) for root in await service.get_tree()]


@router.post("", response_model=OfficeOut, status_code=201)
async def create_office(
    body: OfficeCreateRequest,
    _admin: OfficeAdmin,
    service: Annotated[OfficeService, Depends(get_office_service)],
):
    office = await service.create_office(
        OfficeCreate(
            name=body.name,
            acronym=body.acronym,
            office_type=body.office_type,
            parent_office_id=body.parent_office_id,
        )
    )
    return OfficeOut.model_validate(office, from_attributes=True)


@router.patch("/{office_id}/parent", response_model=OfficeOut)
async def reparent_office(
    office_id: str,
    body: OfficeReparentRequest,
    _admin: OfficeAdmin,
    service: Annotated[OfficeService, Depends(get_office_service)],
):
    office = await service.reparent(office_id, body.parent_office_id)
    return OfficeOut.model_validate(office, from_attributes=True)
