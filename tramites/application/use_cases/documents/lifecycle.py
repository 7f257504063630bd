"""Document lifecycle engine: intake and the four transitions.

Every mutation of a document's status or location is paired with one
ledger append in the same transaction. The row update is conditional on
the status, office and version read in that transaction, so two actors
racing on one document cannot both succeed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.document import (
    DocumentIntake,
    DocumentRecord,
    HistoryEntryCreate,
    Placement,
    RegistrationResult,
    UploadedFile,
)
from tramites.application.interfaces.repositories import IUnitOfWork, Repositories
from tramites.application.services.authorization_service import (
    Capability,
    ensure_capability,
    require_office,
)
from tramites.application.services.office_routing_resolver import OfficeRoutingResolver
from tramites.application.use_cases.documents.intake import UploadPolicy, validate_intake
from tramites.application.use_cases.documents.registration import (
    TransactionalPersistenceCoordinator,
)
from tramites.domain.enums import DocumentStatus
from tramites.domain.exceptions import (
    ConfigurationException,
    InvalidStateException,
    ResourceNotFoundException,
    ValidationException,
)
from tramites.domain.transitions import (
    LifecycleAction,
    ensure_can_start,
    parse_closure_status,
    target_status,
)
from tramites.shared.telemetry.logging import get_logger
from tramites.shared.telemetry.tracing import traced
from tramites.shared.utils.datetime import utc_now
from tramites.shared.utils.sanitization import sanitize_text

logger = get_logger(__name__)

PENDING_VALIDATION_NOTE = "Registro Web - Pendiente de Validación"
APPROVAL_NOTE = "Documento Validado y Recepcionado conforme."
REJECTION_PREFIX = "RECHAZADO: "

_FORBIDDEN_MESSAGES: dict[LifecycleAction, str] = {
    LifecycleAction.APPROVE: "No puedes validar un documento que no está en tu oficina actual.",
    LifecycleAction.REJECT: "No puedes rechazar un documento que no está en tu oficina actual.",
    LifecycleAction.DERIVE: "No puedes derivar un documento que no está en tu oficina actual.",
    LifecycleAction.ATTEND: "No puedes finalizar un documento que no tienes en tu poder.",
}


class DocumentLifecycleEngine:
    """State machine over documents.

    Role checks use the explicit ActorContext; office checks use
    OfficeRoutingResolver inside the transaction that applies the change.
    """

    def __init__(
        self,
        uow: IUnitOfWork,
        coordinator: TransactionalPersistenceCoordinator,
        upload_policy: UploadPolicy,
        *,
        intake_office_name: str = "MESA_DE_PARTES",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow = uow
        self.coordinator = coordinator
        self.upload_policy = upload_policy
        self.intake_office_name = intake_office_name
        self._clock = clock

    # Intake

    @traced("documents.create_internal")
    async def create_internal(
        self, intake: DocumentIntake, upload: UploadedFile | None, actor: ActorContext
    ) -> RegistrationResult:
        """Staff intake: received directly in the actor's office."""
        ensure_capability(actor, Capability.REGISTER_INTERNAL)
        office_id = require_office(actor)
        intake = validate_intake(intake)
        upload = self.upload_policy.check(upload)

        async def resolve(repos: Repositories) -> str:
            office = await OfficeRoutingResolver(repos.offices).resolve_target(office_id)
            return office.id

        resolved_office_id = await self.uow.run(resolve)
        placement = Placement(
            office_id=resolved_office_id,
            status=DocumentStatus.RECIBIDO,
            observation=None,
            user_id=actor.user_id,
        )
        return await self.coordinator.register(intake, upload, placement)

    @traced("documents.create_external")
    async def create_external(
        self, intake: DocumentIntake, upload: UploadedFile | None
    ) -> RegistrationResult:
        """Public intake: parked in the intake office as creado until validated."""
        intake = validate_intake(intake)
        upload = self.upload_policy.check(upload)

        async def resolve(repos: Repositories) -> str:
            office = await repos.offices.get_by_name(self.intake_office_name)
            if office is None:
                raise ConfigurationException(
                    f"La oficina de recepción '{self.intake_office_name}' no está configurada."
                )
            return office.id

        intake_office_id = await self.uow.run(resolve)
        placement = Placement(
            office_id=intake_office_id,
            status=DocumentStatus.CREADO,
            observation=PENDING_VALIDATION_NOTE,
            user_id=None,
        )
        return await self.coordinator.register(intake, upload, placement)

    # Transitions

    @traced("documents.approve")
    async def approve(self, *, document_id: str, actor: ActorContext) -> DocumentRecord:
        ensure_capability(actor, Capability.VALIDATE_SUBMISSIONS)
        office_id = require_office(actor)
        return await self._transition(
            LifecycleAction.APPROVE,
            document_id=document_id,
            actor=actor,
            acting_office_id=office_id,
            destination_office_id=office_id,
            observation=APPROVAL_NOTE,
        )

    @traced("documents.reject")
    async def reject(
        self, *, document_id: str, reason: str, actor: ActorContext
    ) -> DocumentRecord:
        ensure_capability(actor, Capability.VALIDATE_SUBMISSIONS)
        office_id = require_office(actor)
        cleaned = sanitize_text(reason)
        if not cleaned:
            raise ValidationException("El motivo del rechazo es obligatorio.", field="reason")
        return await self._transition(
            LifecycleAction.REJECT,
            document_id=document_id,
            actor=actor,
            acting_office_id=office_id,
            destination_office_id=office_id,
            observation=f"{REJECTION_PREFIX}{cleaned}",
        )

    @traced("documents.derive")
    async def derive(
        self,
        *,
        document_id: str,
        target_office_id: str,
        instructions: str | None,
        actor: ActorContext,
    ) -> DocumentRecord:
        ensure_capability(actor, Capability.HANDLE_DOCUMENTS)
        office_id = require_office(actor)
        if not target_office_id:
            raise ValidationException("La oficina destino es obligatoria.", field="target_office_id")
        if target_office_id == office_id:
            raise ValidationException(
                "La oficina destino debe ser distinta de la oficina actual.",
                field="target_office_id",
            )
        return await self._transition(
            LifecycleAction.DERIVE,
            document_id=document_id,
            actor=actor,
            acting_office_id=office_id,
            destination_office_id=target_office_id,
            observation=sanitize_text(instructions) or None,
        )

    @traced("documents.attend")
    async def attend(
        self,
        *,
        document_id: str,
        final_status: str | DocumentStatus,
        observation: str | None,
        actor: ActorContext,
    ) -> DocumentRecord:
        ensure_capability(actor, Capability.HANDLE_DOCUMENTS)
        office_id = require_office(actor)
        closure = parse_closure_status(final_status)
        return await self._transition(
            LifecycleAction.ATTEND,
            document_id=document_id,
            actor=actor,
            acting_office_id=office_id,
            destination_office_id=office_id,
            observation=sanitize_text(observation) or None,
            requested_status=closure,
        )

    async def _transition(
        self,
        action: LifecycleAction,
        *,
        document_id: str,
        actor: ActorContext,
        acting_office_id: str,
        destination_office_id: str,
        observation: str | None,
        requested_status: DocumentStatus | None = None,
    ) -> DocumentRecord:
        async def work(repos: Repositories) -> DocumentRecord:
            document = await repos.documents.get_by_id(document_id, for_update=True)
            if document is None:
                raise ResourceNotFoundException(
                    "document", document_id, message="El documento no existe."
                )
            ensure_can_start(action, document.current_status, document.id)
            resolver = OfficeRoutingResolver(repos.offices)
            resolver.authorize_outbound(
                document, acting_office_id, message=_FORBIDDEN_MESSAGES[action]
            )
            target = await resolver.resolve_target(destination_office_id)
            new_status = target_status(action, requested_status)
            now = self._clock()
            moved = await repos.documents.apply_transition(
                document, new_status, target.id, now
            )
            if not moved:
                raise InvalidStateException(
                    "El documento fue modificado por otra operación; vuelva a intentarlo.",
                    document_id=document.id,
                )
            await repos.history.append(
                HistoryEntryCreate(
                    document_id=document.id,
                    status_at_moment=new_status,
                    to_office_id=target.id,
                    timestamp=now,
                    sequence=document.version + 1,
                    from_office_id=document.current_office_id,
                    user_id=actor.user_id,
                    observation=observation,
                )
            )
            return replace(
                document,
                current_status=new_status,
                current_office_id=target.id,
                version=document.version + 1,
                updated_at=now,
            )

        updated = await self.uow.run(work)
        logger.info(
            "Document %s: id=%s status=%s office=%s by user=%s",
            action.value,
            updated.id,
            updated.current_status.value,
            updated.current_office_id,
            actor.user_id,
        )
        return updated
