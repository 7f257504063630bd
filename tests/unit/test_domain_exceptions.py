"""Domain exception payloads and their HTTP status mapping."""

import pytest

from tramites.core.exception_handlers import status_for
from tramites.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConfigurationException,
    InvalidStateException,
    PersistenceException,
    ResourceNotFoundException,
    TrackingCodeCollisionException,
    TramiteException,
    ValidationException,
)
from tramites.infrastructure.exceptions import StoragePermissionError, StorageUploadError


def test_to_dict_shape() -> None:
    exc = ValidationException("El número de folios debe ser al menos 1.", field="page_count")
    assert exc.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "El número de folios debe ser al menos 1.",
        "details": {"field": "page_count"},
    }


def test_collision_is_a_persistence_error_with_its_own_code() -> None:
    exc = TrackingCodeCollisionException("EXP-2026-ABCD-EFGH")
    assert isinstance(exc, PersistenceException)
    assert exc.error_code == "TRACKING_CODE_COLLISION"
    assert exc.details == {"tracking_code": "EXP-2026-ABCD-EFGH"}


def test_persistence_message_hides_database_detail() -> None:
    assert PersistenceException().message == "Error al registrar el documento en base de datos"


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("x"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ResourceNotFoundException("document", "d1"), 404),
        (InvalidStateException("x"), 409),
        (ConfigurationException("x"), 500),
        (PersistenceException(), 500),
        (StorageUploadError("k", "down"), 502),
        (StoragePermissionError("../k"), 400),
        (TramiteException("x", "SOMETHING_ELSE"), 400),
    ],
)
def test_status_for(exc: TramiteException, status: int) -> None:
    assert status_for(exc) == status
