"""Office routing checks for moving a document out of an office."""

from tramites.application.dtos.document import DocumentRecord
from tramites.application.dtos.office import OfficeResult
from tramites.application.interfaces.repositories import IOfficeRepository
from tramites.domain.exceptions import AuthorizationException, ResourceNotFoundException
from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class OfficeRoutingResolver:
    """Validates the source and destination of a document movement.

    Independent of role: the role decides which kinds of action an actor
    may attempt, this decides which specific document.
    """

    def __init__(self, office_repo: IOfficeRepository) -> None:
        self.office_repo = office_repo

    def authorize_outbound(
        self,
        document: DocumentRecord,
        acting_office_id: str,
        message: str = "No puedes derivar un documento que no está en tu oficina actual.",
    ) -> None:
        """Raise AuthorizationException unless the document sits in acting_office_id."""
        if document.current_office_id == acting_office_id:
            return
        logger.warning(
            "Forbidden: office=%s attempted to move document=%s held by office=%s",
            acting_office_id,
            document.id,
            document.current_office_id,
        )
        raise AuthorizationException(message)

    async def resolve_target(self, office_id: str) -> OfficeResult:
        """Return the target office or raise ResourceNotFoundException."""
        office = await self.office_repo.get_by_id(office_id)
        if office is None:
            raise ResourceNotFoundException(
                "office", office_id, message="La oficina destino no existe."
            )
        return office
