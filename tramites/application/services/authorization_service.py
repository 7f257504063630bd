"""Role capabilities: which kinds of operation each role may attempt.

Office-level checks (which specific document an actor may move) live in
OfficeRoutingResolver; this module only answers role questions.
"""

from enum import Enum

from tramites.application.dtos.actor import ActorContext
from tramites.domain.enums import UserRole
from tramites.domain.exceptions import AuthorizationException, ValidationException
from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class Capability(str, Enum):
    REGISTER_INTERNAL = "register_internal"
    VALIDATE_SUBMISSIONS = "validate_submissions"
    LIST_PENDING = "list_pending"
    HANDLE_DOCUMENTS = "handle_documents"
    VIEW_HISTORY = "view_history"
    VIEW_DASHBOARD = "view_dashboard"
    MANAGE_OFFICES = "manage_offices"


_ALL_STAFF = frozenset(UserRole)

ROLE_CAPABILITIES: dict[Capability, frozenset[UserRole]] = {
    Capability.REGISTER_INTERNAL: frozenset({UserRole.MESA_DE_PARTES}),
    Capability.VALIDATE_SUBMISSIONS: frozenset({UserRole.MESA_DE_PARTES}),
    Capability.LIST_PENDING: frozenset({UserRole.MESA_DE_PARTES, UserRole.SUPER_ADMIN}),
    Capability.HANDLE_DOCUMENTS: _ALL_STAFF,
    Capability.VIEW_HISTORY: _ALL_STAFF,
    Capability.VIEW_DASHBOARD: frozenset({UserRole.SUPER_ADMIN, UserRole.GERENTE}),
    Capability.MANAGE_OFFICES: frozenset({UserRole.SUPER_ADMIN}),
}


def has_capability(actor: ActorContext, capability: Capability) -> bool:
    return actor.role in ROLE_CAPABILITIES[capability]


def ensure_capability(actor: ActorContext, capability: Capability) -> None:
    """Raise AuthorizationException (and log it for audit) if actor's role lacks capability."""
    if has_capability(actor, capability):
        return
    logger.warning(
        "Forbidden: user=%s role=%s lacks capability=%s",
        actor.user_id,
        actor.role.value,
        capability.value,
    )
    raise AuthorizationException(action=capability.value)


def require_office(actor: ActorContext) -> str:
    """Return the actor's office id; a user without office cannot hold documents."""
    if not actor.office_id:
        raise ValidationException(
            "El usuario no tiene una oficina asignada.", field="office_id"
        )
    return actor.office_id
