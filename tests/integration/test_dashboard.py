"""Dashboard aggregation over seeded documents."""

from datetime import timedelta

import pytest

from tests.fakes import make_intake, make_upload
from tramites.application.dtos.actor import ActorContext
from tramites.application.use_cases.analytics import DashboardAggregator
from tramites.application.use_cases.documents import DocumentLifecycleEngine
from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import AuthorizationException
from tramites.infrastructure.persistence.seed import DESARROLLO_URBANO, MESA_DE_PARTES
from tramites.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from tramites.shared.utils.datetime import utc_now


async def _populate(
    lifecycle: DocumentLifecycleEngine,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> list[str]:
    mp = actors["mp_recepcion"]
    pending = await lifecycle.create_external(make_intake(), make_upload())
    received = await lifecycle.create_internal(make_intake(), make_upload(), mp)
    routed = await lifecycle.create_internal(make_intake(), make_upload(), mp)
    await lifecycle.derive(
        document_id=routed.document.id,
        target_office_id=offices[DESARROLLO_URBANO],
        instructions=None,
        actor=mp,
    )
    closed = await lifecycle.create_internal(make_intake(), make_upload(), mp)
    await lifecycle.attend(
        document_id=closed.document.id, final_status="atendido", observation=None, actor=mp
    )
    return [
        pending.tracking_code,
        received.tracking_code,
        routed.tracking_code,
        closed.tracking_code,
    ]


async def test_snapshot_counts_bottlenecks_and_load(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> None:
    codes = await _populate(lifecycle, actors, offices)
    later = utc_now() + timedelta(days=3, hours=1)
    aggregator = DashboardAggregator(uow, clock=lambda: later)

    snapshot = await aggregator.snapshot(actors["gerente_municipal"])

    counts = {c.status: c.count for c in snapshot.status_counts}
    assert counts == {
        DocumentStatus.CREADO: 1,
        DocumentStatus.RECIBIDO: 1,
        DocumentStatus.DERIVADO: 1,
        DocumentStatus.ATENDIDO: 1,
    }
    assert [c.status for c in snapshot.status_counts] == [
        DocumentStatus.CREADO,
        DocumentStatus.RECIBIDO,
        DocumentStatus.DERIVADO,
        DocumentStatus.ATENDIDO,
    ]

    # Only active documents age; pending and closed ones are excluded.
    assert [b.tracking_code for b in snapshot.bottlenecks] == [codes[1], codes[2]]
    assert all(b.days_open == 3 for b in snapshot.bottlenecks)
    assert snapshot.bottlenecks[1].office_name == DESARROLLO_URBANO

    load = {row.office_name: row.count for row in snapshot.office_load}
    assert load == {MESA_DE_PARTES: 2, DESARROLLO_URBANO: 1}
    assert snapshot.office_load[0].office_name == MESA_DE_PARTES
    assert snapshot.generated_at == later


async def test_bottleneck_limit(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> None:
    codes = await _populate(lifecycle, actors, offices)
    rows = await DashboardAggregator(uow).bottlenecks(limit=1)
    assert [r.tracking_code for r in rows] == [codes[1]]


async def test_empty_database(uow: SqlAlchemyUnitOfWork, offices: dict[str, str]) -> None:
    aggregator = DashboardAggregator(uow)
    assert await aggregator.status_counts() == []
    assert await aggregator.office_load() == []
    assert await aggregator.bottlenecks() == []


async def test_staff_cannot_see_dashboard(
    uow: SqlAlchemyUnitOfWork, actors: dict[str, ActorContext]
) -> None:
    with pytest.raises(AuthorizationException):
        await DashboardAggregator(uow).snapshot(actors["asistente_obras"])
