"""ORM models. Importing this package registers every table on Base.metadata."""

from tramites.infrastructure.persistence.models.attachment import DocumentAttachment
from tramites.infrastructure.persistence.models.document import Document
from tramites.infrastructure.persistence.models.history import DocumentHistory
from tramites.infrastructure.persistence.models.office import Office
from tramites.infrastructure.persistence.models.user import User

__all__ = ["Document", "DocumentAttachment", "DocumentHistory", "Office", "User"]
