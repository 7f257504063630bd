"""In-memory collaborators and builders shared by the test modules."""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Awaitable, Callable
from typing import Any

from tramites.application.dtos.document import (
    ApplicantSnapshot,
    DocumentIntake,
    UploadedFile,
)
from tramites.application.dtos.storage import StoredObject
from tramites.domain.enums import ApplicantType, DocumentType
from tramites.infrastructure.exceptions import StorageDeleteError, StorageUploadError

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
TEST_PASSWORD = "clave-de-prueba-123"


class InMemoryStorage:
    """IStorageService keeping blobs in a dict; records every delete call."""

    def __init__(self, *, fail_upload: bool = False, fail_delete: bool = False) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        if self.fail_upload:
            raise StorageUploadError(storage_ref, "simulated outage")
        self.objects[storage_ref] = file_data
        return StoredObject(
            key=storage_ref,
            url=f"memory://{storage_ref}",
            checksum=hashlib.sha256(file_data).hexdigest(),
            size=len(file_data),
        )

    async def delete(self, key: str) -> bool:
        self.deleted.append(key)
        if self.fail_delete:
            raise StorageDeleteError(key, "simulated outage")
        return self.objects.pop(key, None) is not None


class RecordingNotifier:
    """INotificationService that records sends, or fails every send."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = fail

    async def send_tracking_code(self, email: str, tracking_code: str) -> None:
        if self.fail:
            raise ConnectionError("mail server unreachable")
        self.sent.append((email, tracking_code))


class SequenceCodeGenerator:
    """Hands out the given tracking codes in order."""

    def __init__(self, *codes: str) -> None:
        self._codes = iter(codes)
        self.issued: list[str] = []

    def generate(self) -> str:
        code = next(self._codes)
        self.issued.append(code)
        return code


class ScriptedUnitOfWork:
    """IUnitOfWork that never runs work; each call returns or raises the next outcome."""

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls = 0

    async def run(self, work: Callable[[Any], Awaitable[Any]]) -> Any:
        self.calls += 1
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class HangingUnitOfWork:
    """IUnitOfWork whose transaction never finishes; the caller must cancel it."""

    def __init__(self) -> None:
        self.calls = 0

    async def run(self, work: Callable[[Any], Awaitable[Any]]) -> Any:
        self.calls += 1
        await asyncio.Event().wait()


def make_intake(**overrides: Any) -> DocumentIntake:
    applicant_fields = {
        "applicant_type": ApplicantType.PERSONA_NATURAL,
        "identifier": "45678912",
        "name": "Ana",
        "lastname": "Quispe",
        "email": "ana@x.pe",
        "phone": None,
        "address": None,
    }
    for key in list(applicant_fields):
        if key in overrides:
            applicant_fields[key] = overrides.pop(key)
    fields: dict[str, Any] = {
        "applicant": ApplicantSnapshot(**applicant_fields),
        "document_type": DocumentType.SOLICITUD,
        "subject": "Solicitud de licencia de funcionamiento",
        "page_count": 3,
    }
    fields.update(overrides)
    return DocumentIntake(**fields)


def make_upload(
    filename: str = "solicitud.pdf",
    content_type: str = "application/pdf",
    content: bytes = PDF_BYTES,
) -> UploadedFile:
    return UploadedFile(filename=filename, content_type=content_type, content=content)
