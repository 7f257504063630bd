"""Fixed document state machine.

Each lifecycle action has a set of statuses it may start from and a
status it leaves the document in. Nothing here touches persistence.
"""

from enum import Enum

from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import InvalidStateException, ValidationException

TERMINAL_STATUSES = frozenset(
    {DocumentStatus.ATENDIDO, DocumentStatus.ARCHIVADO, DocumentStatus.RECHAZADO}
)
# Documents being worked on inside the routed workflow.
ACTIVE_STATUSES = frozenset(
    {DocumentStatus.RECIBIDO, DocumentStatus.DERIVADO, DocumentStatus.EN_REVISION}
)
CLOSURE_STATUSES = frozenset({DocumentStatus.ATENDIDO, DocumentStatus.ARCHIVADO})


class LifecycleAction(str, Enum):
    """Operations that move an existing document."""

    APPROVE = "approve"
    REJECT = "reject"
    DERIVE = "derive"
    ATTEND = "attend"


_SOURCE_STATUSES: dict[LifecycleAction, frozenset[DocumentStatus]] = {
    LifecycleAction.APPROVE: frozenset({DocumentStatus.CREADO}),
    LifecycleAction.REJECT: frozenset({DocumentStatus.CREADO}),
    LifecycleAction.DERIVE: ACTIVE_STATUSES,
    LifecycleAction.ATTEND: ACTIVE_STATUSES,
}

_FIXED_TARGETS: dict[LifecycleAction, DocumentStatus] = {
    LifecycleAction.APPROVE: DocumentStatus.RECIBIDO,
    LifecycleAction.REJECT: DocumentStatus.RECHAZADO,
    LifecycleAction.DERIVE: DocumentStatus.DERIVADO,
}

_STATE_MESSAGES: dict[LifecycleAction, str] = {
    LifecycleAction.APPROVE: "El documento no existe o ya fue procesado.",
    LifecycleAction.REJECT: "El documento no existe o ya fue procesado.",
    LifecycleAction.DERIVE: "El documento no se encuentra en un estado derivable.",
    LifecycleAction.ATTEND: "El documento no se encuentra en un estado que permita finalizarlo.",
}


def ensure_can_start(
    action: LifecycleAction, current: DocumentStatus, document_id: str | None = None
) -> None:
    """Raise InvalidStateException unless action may start from current."""
    if current not in _SOURCE_STATUSES[action]:
        raise InvalidStateException(
            _STATE_MESSAGES[action],
            document_id=document_id,
            current_status=current.value,
        )


def parse_closure_status(value: str | DocumentStatus) -> DocumentStatus:
    """Return value as a closure status (atendido or archivado).

    Raises:
        ValidationException: For any other value.
    """
    try:
        status = DocumentStatus(value)
    except ValueError:
        status = None
    if status not in CLOSURE_STATUSES:
        raise ValidationException("Estado final inválido.", field="final_status")
    return status


def target_status(
    action: LifecycleAction, requested: DocumentStatus | None = None
) -> DocumentStatus:
    """Status the document holds after action. attend takes the requested closure."""
    if action is LifecycleAction.ATTEND:
        if requested is None:
            raise ValidationException("Estado final inválido.", field="final_status")
        return parse_closure_status(requested)
    return _FIXED_TARGETS[action]


def is_terminal(status: DocumentStatus) -> bool:
    return status in TERMINAL_STATUSES
