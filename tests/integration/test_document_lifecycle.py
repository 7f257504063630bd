"""Lifecycle engine end to end on SQLite: intake, validation, routing, closure."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from tests.fakes import RecordingNotifier, make_intake, make_upload
from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.document import DocumentRecord, HistoryEntryDetail
from tramites.application.interfaces.repositories import Repositories
from tramites.application.use_cases.documents import (
    DocumentLifecycleEngine,
    DocumentQueryService,
)
from tramites.application.use_cases.documents.lifecycle import (
    APPROVAL_NOTE,
    PENDING_VALIDATION_NOTE,
)
from tramites.application.use_cases.documents.registration import (
    TransactionalPersistenceCoordinator,
)
from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import (
    AuthorizationException,
    ConfigurationException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from tramites.infrastructure.persistence.seed import DESARROLLO_URBANO, MESA_DE_PARTES
from tramites.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


async def _assert_head_matches(uow: SqlAlchemyUnitOfWork, document: DocumentRecord) -> None:
    """The newest ledger entry must agree with the document's status and office."""

    async def work(repos: Repositories):
        row = await repos.documents.get_by_id(document.id)
        head = await repos.history.latest(document.id)
        return row, head

    row, head = await uow.run(work)
    assert row is not None and head is not None
    assert head.status_at_moment == row.current_status
    assert head.to_office_id == row.current_office_id
    assert head.timestamp == row.updated_at
    assert head.sequence == row.version


async def _snapshot(
    uow: SqlAlchemyUnitOfWork, document_id: str
) -> tuple[DocumentRecord, list[HistoryEntryDetail]]:
    async def work(repos: Repositories):
        row = await repos.documents.get_by_id(document_id)
        ledger = await repos.history.all(document_id)
        return row, ledger

    row, ledger = await uow.run(work)
    assert row is not None
    return row, ledger


async def _submit_public(lifecycle: DocumentLifecycleEngine) -> DocumentRecord:
    result = await lifecycle.create_external(make_intake(), make_upload())
    return result.document


async def test_public_submission_waits_in_intake_office(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    offices: dict[str, str],
    notifier: RecordingNotifier,
) -> None:
    result = await lifecycle.create_external(make_intake(), make_upload())
    document = result.document
    assert document.current_status is DocumentStatus.CREADO
    assert document.current_office_id == offices[MESA_DE_PARTES]
    assert document.owner_office_id == offices[MESA_DE_PARTES]
    assert document.version == 1
    assert result.attachment.file_key == f"documents/{document.id}/solicitud.pdf"

    async def work(repos: Repositories):
        return await repos.history.latest(document.id)

    head = await uow.run(work)
    assert head is not None
    assert head.observation == PENDING_VALIDATION_NOTE
    assert head.user_id is None
    assert head.from_office_id is None
    await _assert_head_matches(uow, document)

    await lifecycle.coordinator.dispatcher.drain()
    assert notifier.sent == [("ana@x.pe", result.tracking_code)]


async def test_internal_registration_is_received_by_actor_office(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
) -> None:
    actor = actors["mp_recepcion"]
    result = await lifecycle.create_internal(make_intake(), make_upload(), actor)
    assert result.document.current_status is DocumentStatus.RECIBIDO
    assert result.document.current_office_id == actor.office_id

    async def work(repos: Repositories):
        return await repos.history.latest(result.document.id)

    head = await uow.run(work)
    assert head is not None and head.user_id == actor.user_id
    await _assert_head_matches(uow, result.document)


async def test_internal_registration_requires_mesa_de_partes(
    lifecycle: DocumentLifecycleEngine, actors: dict[str, ActorContext]
) -> None:
    with pytest.raises(AuthorizationException):
        await lifecycle.create_internal(make_intake(), make_upload(), actors["gerente_obras"])


async def test_invalid_intake_touches_nothing(
    lifecycle: DocumentLifecycleEngine, storage, offices: dict[str, str]
) -> None:
    with pytest.raises(ValidationException):
        await lifecycle.create_external(make_intake(page_count=0), make_upload())
    with pytest.raises(ValidationException):
        await lifecycle.create_external(make_intake(), None)
    assert storage.objects == {}


async def test_missing_intake_office_is_a_configuration_error(
    uow: SqlAlchemyUnitOfWork, coordinator, upload_policy, offices: dict[str, str]
) -> None:
    engine = DocumentLifecycleEngine(
        uow, coordinator, upload_policy, intake_office_name="NO EXISTE"
    )
    with pytest.raises(ConfigurationException):
        await engine.create_external(make_intake(), make_upload())


async def test_approve_then_second_approve_conflicts(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
) -> None:
    document = await _submit_public(lifecycle)
    approved = await lifecycle.approve(document_id=document.id, actor=actors["mp_recepcion"])
    assert approved.current_status is DocumentStatus.RECIBIDO
    assert approved.version == 2
    await _assert_head_matches(uow, approved)

    async def work(repos: Repositories):
        return await repos.history.latest(document.id)

    head = await uow.run(work)
    assert head is not None and head.observation == APPROVAL_NOTE

    with pytest.raises(InvalidStateException):
        await lifecycle.approve(document_id=document.id, actor=actors["mp_recepcion"])


async def test_only_mesa_de_partes_validates(
    lifecycle: DocumentLifecycleEngine, actors: dict[str, ActorContext]
) -> None:
    document = await _submit_public(lifecycle)
    with pytest.raises(AuthorizationException):
        await lifecycle.approve(document_id=document.id, actor=actors["gerente_municipal"])
    with pytest.raises(AuthorizationException):
        await lifecycle.reject(
            document_id=document.id, reason="incompleto", actor=actors["admin"]
        )


async def test_reject_requires_reason_and_prefixes_observation(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
) -> None:
    document = await _submit_public(lifecycle)
    with pytest.raises(ValidationException):
        await lifecycle.reject(document_id=document.id, reason="  ", actor=actors["mp_recepcion"])
    rejected = await lifecycle.reject(
        document_id=document.id, reason="Falta firma", actor=actors["mp_recepcion"]
    )
    assert rejected.current_status is DocumentStatus.RECHAZADO

    async def work(repos: Repositories):
        return await repos.history.latest(document.id)

    head = await uow.run(work)
    assert head is not None and head.observation == "RECHAZADO: Falta firma"
    await _assert_head_matches(uow, rejected)


async def test_derive_and_attend_follow_the_document(
    lifecycle: DocumentLifecycleEngine,
    queries: DocumentQueryService,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> None:
    mp = actors["mp_recepcion"]
    obras = actors["gerente_obras"]
    document = await _submit_public(lifecycle)
    await lifecycle.approve(document_id=document.id, actor=mp)

    derived = await lifecycle.derive(
        document_id=document.id,
        target_office_id=offices[DESARROLLO_URBANO],
        instructions="Evaluar y emitir informe",
        actor=mp,
    )
    assert derived.current_status is DocumentStatus.DERIVADO
    assert derived.current_office_id == offices[DESARROLLO_URBANO]
    assert derived.owner_office_id == offices[MESA_DE_PARTES]
    await _assert_head_matches(uow, derived)

    inbox = await queries.list_inbox(obras)
    assert [item.document.id for item in inbox] == [document.id]
    latest = inbox[0].latest
    assert latest is not None
    assert latest.from_office_name == MESA_DE_PARTES
    assert latest.user_display_name == "María Recepción"
    assert latest.entry.observation == "Evaluar y emitir informe"

    # The sending office no longer holds it.
    with pytest.raises(AuthorizationException):
        await lifecycle.attend(
            document_id=document.id, final_status="atendido", observation=None, actor=mp
        )

    closed = await lifecycle.attend(
        document_id=document.id,
        final_status="archivado",
        observation="Se archivó el expediente",
        actor=obras,
    )
    assert closed.current_status is DocumentStatus.ARCHIVADO
    assert closed.current_office_id == offices[DESARROLLO_URBANO]
    assert closed.version == 4
    await _assert_head_matches(uow, closed)
    assert await queries.list_inbox(obras) == []

    with pytest.raises(InvalidStateException):
        await lifecycle.derive(
            document_id=document.id,
            target_office_id=offices[MESA_DE_PARTES],
            instructions=None,
            actor=obras,
        )


async def test_derive_guards(
    lifecycle: DocumentLifecycleEngine,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> None:
    mp = actors["mp_recepcion"]
    document = await _submit_public(lifecycle)

    # Still creado: must be validated first.
    with pytest.raises(InvalidStateException):
        await lifecycle.derive(
            document_id=document.id,
            target_office_id=offices[DESARROLLO_URBANO],
            instructions=None,
            actor=mp,
        )
    await lifecycle.approve(document_id=document.id, actor=mp)

    with pytest.raises(ValidationException):
        await lifecycle.derive(
            document_id=document.id,
            target_office_id=offices[MESA_DE_PARTES],
            instructions=None,
            actor=mp,
        )
    with pytest.raises(ResourceNotFoundException):
        await lifecycle.derive(
            document_id=document.id, target_office_id="missing", instructions=None, actor=mp
        )
    with pytest.raises(AuthorizationException):
        await lifecycle.derive(
            document_id=document.id,
            target_office_id=offices[MESA_DE_PARTES],
            instructions=None,
            actor=actors["gerente_obras"],
        )
    with pytest.raises(ResourceNotFoundException):
        await lifecycle.approve(document_id="missing", actor=mp)


async def test_attend_rejects_non_closure_status(
    lifecycle: DocumentLifecycleEngine, actors: dict[str, ActorContext]
) -> None:
    mp = actors["mp_recepcion"]
    result = await lifecycle.create_internal(make_intake(), make_upload(), mp)
    with pytest.raises(ValidationException):
        await lifecycle.attend(
            document_id=result.document.id,
            final_status="rechazado",
            observation=None,
            actor=mp,
        )


async def test_refused_validation_changes_nothing(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
) -> None:
    mp = actors["mp_recepcion"]
    document = await _submit_public(lifecycle)
    before, ledger = await _snapshot(uow, document.id)
    assert len(ledger) == 1

    with pytest.raises(AuthorizationException):
        await lifecycle.approve(document_id=document.id, actor=actors["gerente_municipal"])
    with pytest.raises(AuthorizationException):
        await lifecycle.reject(document_id=document.id, reason="incompleto", actor=actors["admin"])
    with pytest.raises(ValidationException):
        await lifecycle.reject(document_id=document.id, reason="", actor=mp)

    after, ledger = await _snapshot(uow, document.id)
    assert after == before
    assert len(ledger) == 1

    approved = await lifecycle.approve(document_id=document.id, actor=mp)
    with pytest.raises(InvalidStateException):
        await lifecycle.approve(document_id=document.id, actor=mp)
    with pytest.raises(InvalidStateException):
        await lifecycle.reject(document_id=document.id, reason="Falta firma", actor=mp)

    after, ledger = await _snapshot(uow, document.id)
    assert after.current_status is DocumentStatus.RECIBIDO
    assert after.version == approved.version == 2
    assert len(ledger) == 2
    assert ledger[0].entry.observation == APPROVAL_NOTE


async def test_reject_only_applies_to_new_submissions(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
) -> None:
    mp = actors["mp_recepcion"]
    internal = await lifecycle.create_internal(make_intake(), make_upload(), mp)
    with pytest.raises(InvalidStateException):
        await lifecycle.reject(document_id=internal.document.id, reason="Duplicado", actor=mp)

    document = await _submit_public(lifecycle)
    await lifecycle.reject(document_id=document.id, reason="Falta firma", actor=mp)
    with pytest.raises(InvalidStateException):
        await lifecycle.reject(document_id=document.id, reason="Otra vez", actor=mp)

    row, ledger = await _snapshot(uow, document.id)
    assert row.current_status is DocumentStatus.RECHAZADO
    assert row.version == 2
    assert len(ledger) == 2


async def test_derive_moves_only_status_and_location(
    lifecycle: DocumentLifecycleEngine,
    uow: SqlAlchemyUnitOfWork,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> None:
    mp = actors["mp_recepcion"]
    document = await _submit_public(lifecycle)
    await lifecycle.approve(document_id=document.id, actor=mp)
    before, ledger_before = await _snapshot(uow, document.id)

    await lifecycle.derive(
        document_id=document.id,
        target_office_id=offices[DESARROLLO_URBANO],
        instructions="Para informe técnico",
        actor=mp,
    )

    after, ledger_after = await _snapshot(uow, document.id)
    assert after == replace(
        before,
        current_status=DocumentStatus.DERIVADO,
        current_office_id=offices[DESARROLLO_URBANO],
        version=before.version + 1,
        updated_at=after.updated_at,
    )
    assert after.updated_at >= before.updated_at
    assert len(ledger_after) == len(ledger_before) + 1
    assert ledger_after[1:] == ledger_before
    head = ledger_after[0].entry
    assert head.from_office_id == offices[MESA_DE_PARTES]
    assert head.to_office_id == offices[DESARROLLO_URBANO]
    assert head.status_at_moment is DocumentStatus.DERIVADO
    assert head.user_id == mp.user_id


async def test_entries_written_at_the_same_instant_keep_their_order(
    uow: SqlAlchemyUnitOfWork,
    storage,
    dispatcher,
    upload_policy,
    actors: dict[str, ActorContext],
    offices: dict[str, str],
) -> None:
    instant = datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)
    coordinator = TransactionalPersistenceCoordinator(
        uow, storage, dispatcher, clock=lambda: instant
    )
    engine = DocumentLifecycleEngine(uow, coordinator, upload_policy, clock=lambda: instant)
    mp = actors["mp_recepcion"]

    document = await _submit_public(engine)
    await engine.approve(document_id=document.id, actor=mp)
    derived = await engine.derive(
        document_id=document.id,
        target_office_id=offices[DESARROLLO_URBANO],
        instructions=None,
        actor=mp,
    )

    _, ledger = await _snapshot(uow, document.id)
    assert {d.entry.timestamp for d in ledger} == {instant}
    assert [d.entry.sequence for d in ledger] == [3, 2, 1]
    assert [d.entry.status_at_moment for d in ledger] == [
        DocumentStatus.DERIVADO,
        DocumentStatus.RECIBIDO,
        DocumentStatus.CREADO,
    ]
    await _assert_head_matches(uow, derived)
