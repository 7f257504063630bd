"""Document registration: upload, atomic write, compensation, notification."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime
from functools import partial

from tramites.application.dtos.document import (
    AttachmentCreate,
    DocumentCreate,
    DocumentIntake,
    HistoryEntryCreate,
    Placement,
    RegistrationResult,
    UploadedFile,
)
from tramites.application.dtos.storage import StoredObject
from tramites.application.interfaces.repositories import IUnitOfWork, Repositories
from tramites.application.interfaces.services import IStorageService
from tramites.application.services.notification_dispatcher import NotificationDispatcher
from tramites.domain.exceptions import (
    PersistenceException,
    TrackingCodeCollisionException,
    TramiteException,
)
from tramites.domain.tracking_code import TrackingCodeGenerator
from tramites.shared.telemetry.logging import get_logger
from tramites.shared.telemetry.tracing import add_span_attributes, traced
from tramites.shared.utils.datetime import utc_now
from tramites.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class TransactionalPersistenceCoordinator:
    """Registers a new document as one unit: row, attachment and first ledger entry.

    The blob is uploaded before the transaction so its key can be written.
    If the transaction fails or the call is cancelled the blob is deleted
    once, then the failure is re-raised; a failed delete is logged and never
    masks the original error.
    A tracking code collision regenerates the code and retries in a fresh
    transaction. The tracking code mail is dispatched only after commit.
    """

    def __init__(
        self,
        uow: IUnitOfWork,
        storage: IStorageService,
        dispatcher: NotificationDispatcher,
        code_generator: TrackingCodeGenerator | None = None,
        *,
        max_code_attempts: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.uow = uow
        self.storage = storage
        self.dispatcher = dispatcher
        self.code_generator = code_generator or TrackingCodeGenerator()
        self.max_code_attempts = max_code_attempts
        self._clock = clock

    @staticmethod
    def _storage_ref(document_id: str, filename: str) -> str:
        return f"documents/{document_id}/{filename}"

    @traced("documents.register")
    async def register(
        self,
        intake: DocumentIntake,
        upload: UploadedFile,
        placement: Placement,
    ) -> RegistrationResult:
        """Persist a validated submission. Inputs must already be validated."""
        document_id = generate_cuid()
        stored = await self.storage.upload(
            upload.content,
            self._storage_ref(document_id, upload.filename),
            upload.content_type,
            metadata={"document_id": document_id},
        )
        try:
            result = await self._persist_with_fresh_code(
                document_id, intake, upload, placement, stored
            )
        except asyncio.CancelledError:
            logger.warning("Registration cancelled; discarding blob %s", stored.key)
            await asyncio.shield(self._discard_blob(stored.key))
            raise
        except Exception as exc:
            await self._discard_blob(stored.key)
            if isinstance(exc, TramiteException):
                raise
            raise PersistenceException() from exc

        add_span_attributes(tracking_code=result.tracking_code)
        logger.info(
            "Document registered: id=%s code=%s office=%s status=%s",
            result.document.id,
            result.tracking_code,
            placement.office_id,
            placement.status.value,
        )
        self.dispatcher.dispatch_tracking_code(
            intake.applicant.email, result.tracking_code
        )
        return result

    async def _persist_with_fresh_code(
        self,
        document_id: str,
        intake: DocumentIntake,
        upload: UploadedFile,
        placement: Placement,
        stored: StoredObject,
    ) -> RegistrationResult:
        for attempt in range(1, self.max_code_attempts + 1):
            tracking_code = self.code_generator.generate()
            try:
                return await self.uow.run(
                    partial(
                        self._write_records,
                        document_id=document_id,
                        tracking_code=tracking_code,
                        intake=intake,
                        upload=upload,
                        placement=placement,
                        stored=stored,
                    )
                )
            except TrackingCodeCollisionException:
                logger.warning(
                    "Tracking code collision on %s (attempt %d/%d); regenerating",
                    tracking_code,
                    attempt,
                    self.max_code_attempts,
                )
        logger.error(
            "Could not allocate a unique tracking code after %d attempts",
            self.max_code_attempts,
        )
        raise PersistenceException()

    async def _write_records(
        self,
        repos: Repositories,
        *,
        document_id: str,
        tracking_code: str,
        intake: DocumentIntake,
        upload: UploadedFile,
        placement: Placement,
        stored: StoredObject,
    ) -> RegistrationResult:
        now = self._clock()
        document = await repos.documents.create(
            DocumentCreate(
                id=document_id,
                tracking_code=tracking_code,
                intake=intake,
                status=placement.status,
                office_id=placement.office_id,
                created_at=now,
            )
        )
        attachment = await repos.attachments.add(
            AttachmentCreate(
                document_id=document.id,
                file_url=stored.url,
                file_name=upload.filename,
                file_type=upload.content_type,
                file_key=stored.key,
                file_size=stored.size,
                checksum=stored.checksum,
            )
        )
        await repos.history.append(
            HistoryEntryCreate(
                document_id=document.id,
                status_at_moment=placement.status,
                to_office_id=placement.office_id,
                timestamp=now,
                sequence=document.version,
                user_id=placement.user_id,
                observation=placement.observation,
            )
        )
        return RegistrationResult(document=document, attachment=attachment)

    async def _discard_blob(self, key: str) -> None:
        try:
            deleted = await self.storage.delete(key)
        except Exception:
            logger.exception("Compensating delete failed; orphaned blob key=%s", key)
            return
        logger.warning("Registration rolled back; deleted blob key=%s (found=%s)", key, deleted)
