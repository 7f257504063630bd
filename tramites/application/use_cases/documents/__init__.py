"""Document use cases: lifecycle engine, registration coordinator, queries."""

from tramites.application.use_cases.documents.intake import UploadPolicy, validate_intake
from tramites.application.use_cases.documents.lifecycle import DocumentLifecycleEngine
from tramites.application.use_cases.documents.queries import DocumentQueryService
from tramites.application.use_cases.documents.registration import (
    TransactionalPersistenceCoordinator,
)

__all__ = [
    "DocumentLifecycleEngine",
    "DocumentQueryService",
    "TransactionalPersistenceCoordinator",
    "UploadPolicy",
    "validate_intake",
]
