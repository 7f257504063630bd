"""Document state machine rules (pure, no persistence)."""

import pytest

from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import InvalidStateException, ValidationException
from tramites.domain.transitions import (
    LifecycleAction,
    ensure_can_start,
    is_terminal,
    parse_closure_status,
    target_status,
)


@pytest.mark.parametrize("action", [LifecycleAction.APPROVE, LifecycleAction.REJECT])
def test_validation_actions_start_only_from_creado(action: LifecycleAction) -> None:
    ensure_can_start(action, DocumentStatus.CREADO)
    for status in DocumentStatus:
        if status is DocumentStatus.CREADO:
            continue
        with pytest.raises(InvalidStateException):
            ensure_can_start(action, status)


@pytest.mark.parametrize("action", [LifecycleAction.DERIVE, LifecycleAction.ATTEND])
@pytest.mark.parametrize(
    "status",
    [DocumentStatus.RECIBIDO, DocumentStatus.DERIVADO, DocumentStatus.EN_REVISION],
)
def test_routing_actions_start_from_active_statuses(
    action: LifecycleAction, status: DocumentStatus
) -> None:
    ensure_can_start(action, status)


@pytest.mark.parametrize("action", [LifecycleAction.DERIVE, LifecycleAction.ATTEND])
@pytest.mark.parametrize(
    "status",
    [
        DocumentStatus.CREADO,
        DocumentStatus.ATENDIDO,
        DocumentStatus.ARCHIVADO,
        DocumentStatus.RECHAZADO,
    ],
)
def test_routing_actions_refuse_pending_and_terminal(
    action: LifecycleAction, status: DocumentStatus
) -> None:
    with pytest.raises(InvalidStateException) as exc_info:
        ensure_can_start(action, status, "doc1")
    assert exc_info.value.details == {
        "document_id": "doc1",
        "current_status": status.value,
    }


def test_fixed_targets() -> None:
    assert target_status(LifecycleAction.APPROVE) is DocumentStatus.RECIBIDO
    assert target_status(LifecycleAction.REJECT) is DocumentStatus.RECHAZADO
    assert target_status(LifecycleAction.DERIVE) is DocumentStatus.DERIVADO


def test_attend_target_is_the_requested_closure() -> None:
    assert (
        target_status(LifecycleAction.ATTEND, DocumentStatus.ARCHIVADO)
        is DocumentStatus.ARCHIVADO
    )
    with pytest.raises(ValidationException):
        target_status(LifecycleAction.ATTEND)


def test_parse_closure_status_accepts_only_atendido_and_archivado() -> None:
    assert parse_closure_status("atendido") is DocumentStatus.ATENDIDO
    assert parse_closure_status(DocumentStatus.ARCHIVADO) is DocumentStatus.ARCHIVADO
    for bad in ("rechazado", "recibido", "ATENDIDO", "cerrado", ""):
        with pytest.raises(ValidationException) as exc_info:
            parse_closure_status(bad)
        assert exc_info.value.details == {"field": "final_status"}


def test_terminal_statuses() -> None:
    assert {s for s in DocumentStatus if is_terminal(s)} == {
        DocumentStatus.ATENDIDO,
        DocumentStatus.ARCHIVADO,
        DocumentStatus.RECHAZADO,
    }
