"""TransactionalPersistenceCoordinator failure paths with a scripted unit of work."""

import asyncio

import pytest

from tests.fakes import (
    HangingUnitOfWork,
    InMemoryStorage,
    RecordingNotifier,
    ScriptedUnitOfWork,
    SequenceCodeGenerator,
    make_intake,
    make_upload,
)
from tramites.application.dtos.document import Placement
from tramites.application.services.notification_dispatcher import NotificationDispatcher
from tramites.application.use_cases.documents.registration import (
    TransactionalPersistenceCoordinator,
)
from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import (
    PersistenceException,
    TrackingCodeCollisionException,
    ValidationException,
)
from tramites.infrastructure.exceptions import StorageUploadError

PLACEMENT = Placement(
    office_id="mp",
    status=DocumentStatus.CREADO,
    observation="Registro Web - Pendiente de Validación",
    user_id=None,
)


def _coordinator(
    uow: ScriptedUnitOfWork | HangingUnitOfWork,
    storage: InMemoryStorage,
    notifier: RecordingNotifier,
    codes: SequenceCodeGenerator | None = None,
    max_code_attempts: int = 3,
) -> TransactionalPersistenceCoordinator:
    return TransactionalPersistenceCoordinator(
        uow,
        storage,
        NotificationDispatcher(notifier),
        codes or SequenceCodeGenerator("EXP-2026-AAAA-AAAA", "EXP-2026-BBBB-BBBB", "EXP-2026-CCCC-CCCC"),
        max_code_attempts=max_code_attempts,
    )


async def test_failed_transaction_deletes_blob_once_and_reraises() -> None:
    storage, notifier = InMemoryStorage(), RecordingNotifier()
    coordinator = _coordinator(ScriptedUnitOfWork(PersistenceException()), storage, notifier)
    with pytest.raises(PersistenceException):
        await coordinator.register(make_intake(), make_upload(), PLACEMENT)
    assert len(storage.deleted) == 1
    assert storage.deleted[0].endswith("/solicitud.pdf")
    assert storage.objects == {}
    await coordinator.dispatcher.drain()
    assert notifier.sent == []


async def test_unexpected_error_surfaces_as_persistence_error() -> None:
    storage = InMemoryStorage()
    coordinator = _coordinator(
        ScriptedUnitOfWork(RuntimeError("driver exploded")), storage, RecordingNotifier()
    )
    with pytest.raises(PersistenceException) as exc_info:
        await coordinator.register(make_intake(), make_upload(), PLACEMENT)
    assert exc_info.value.error_code == "PERSISTENCE_ERROR"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert len(storage.deleted) == 1


async def test_domain_error_passes_through_unchanged() -> None:
    storage = InMemoryStorage()
    error = ValidationException("La oficina no existe.", field="office_id")
    coordinator = _coordinator(ScriptedUnitOfWork(error), storage, RecordingNotifier())
    with pytest.raises(ValidationException) as exc_info:
        await coordinator.register(make_intake(), make_upload(), PLACEMENT)
    assert exc_info.value is error
    assert len(storage.deleted) == 1


async def test_failed_compensation_does_not_mask_original_error() -> None:
    storage = InMemoryStorage(fail_delete=True)
    coordinator = _coordinator(
        ScriptedUnitOfWork(PersistenceException()), storage, RecordingNotifier()
    )
    with pytest.raises(PersistenceException):
        await coordinator.register(make_intake(), make_upload(), PLACEMENT)
    assert len(storage.deleted) == 1


async def test_collisions_regenerate_until_attempts_run_out() -> None:
    storage = InMemoryStorage()
    codes = SequenceCodeGenerator("EXP-2026-AAAA-AAAA", "EXP-2026-BBBB-BBBB")
    uow = ScriptedUnitOfWork(TrackingCodeCollisionException(), TrackingCodeCollisionException())
    coordinator = _coordinator(uow, storage, RecordingNotifier(), codes, max_code_attempts=2)
    with pytest.raises(PersistenceException) as exc_info:
        await coordinator.register(make_intake(), make_upload(), PLACEMENT)
    assert exc_info.value.error_code == "PERSISTENCE_ERROR"
    assert uow.calls == 2
    assert codes.issued == ["EXP-2026-AAAA-AAAA", "EXP-2026-BBBB-BBBB"]
    assert len(storage.deleted) == 1


async def test_upload_failure_touches_no_database() -> None:
    uow = ScriptedUnitOfWork()
    storage = InMemoryStorage(fail_upload=True)
    coordinator = _coordinator(uow, storage, RecordingNotifier())
    with pytest.raises(StorageUploadError):
        await coordinator.register(make_intake(), make_upload(), PLACEMENT)
    assert uow.calls == 0
    assert storage.deleted == []


async def test_cancelled_registration_still_deletes_blob() -> None:
    storage, notifier = InMemoryStorage(), RecordingNotifier()
    uow = HangingUnitOfWork()
    coordinator = _coordinator(uow, storage, notifier)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(
            coordinator.register(make_intake(), make_upload(), PLACEMENT), timeout=0.05
        )
    assert uow.calls == 1
    assert len(storage.deleted) == 1
    assert storage.objects == {}
    await coordinator.dispatcher.drain()
    assert notifier.sent == []
