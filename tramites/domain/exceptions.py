"""Domain exceptions for the document tracking service.

Business rule violations raised by the application layer. The
presentation layer maps error_code to an HTTP status in
tramites.core.exception_handlers.
"""

from typing import Any


class TramiteException(Exception):
    """Base exception for all service errors.

    Attributes:
        message: Human-readable error description (Spanish, shown to users).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as the JSON error body returned to clients."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TramiteException):
    """Raised when input is malformed; always before any storage or database call."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TramiteException):
    """Raised when the bearer token or credentials are invalid."""

    def __init__(self, message: str = "Credenciales inválidas") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TramiteException):
    """Raised when the actor's role or office does not allow the operation."""

    def __init__(
        self,
        message: str = "No tiene permiso para realizar esta operación.",
        action: str | None = None,
    ) -> None:
        details = {"action": action} if action else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TramiteException):
    """Raised when a document, office, user or tracking code does not exist."""

    def __init__(
        self, resource_type: str, resource_id: str, message: str | None = None
    ) -> None:
        super().__init__(
            message or f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(TramiteException):
    """Raised when a document's status or location no longer satisfies the operation."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        current_status: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if document_id:
            details["document_id"] = document_id
        if current_status:
            details["current_status"] = current_status
        super().__init__(message, "INVALID_STATE", details)


class ConfigurationException(TramiteException):
    """Raised when required reference data (e.g. the intake office) is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")


class PersistenceException(TramiteException):
    """Raised when a transaction fails; the message never leaks database detail."""

    def __init__(
        self, message: str = "Error al registrar el documento en base de datos"
    ) -> None:
        super().__init__(message, "PERSISTENCE_ERROR")


class TrackingCodeCollisionException(PersistenceException):
    """Raised when an insert hits the unique tracking code; callers regenerate and retry."""

    def __init__(self, tracking_code: str | None = None) -> None:
        super().__init__("Tracking code already in use")
        self.error_code = "TRACKING_CODE_COLLISION"
        if tracking_code:
            self.details = {"tracking_code": tracking_code}
