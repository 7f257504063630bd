"""Service interfaces (ports) for external collaborators."""

from __future__ import annotations

from typing import Protocol

from tramites.application.dtos.storage import StoredObject


class IStorageService(Protocol):
    """Binary object store used for document attachments."""

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        """Store file_data under storage_ref. Raises StorageUploadError on failure."""

    async def delete(self, key: str) -> bool:
        """Delete a stored object. Returns False if it did not exist."""


class INotificationService(Protocol):
    """Outbound mail to applicants."""

    async def send_tracking_code(self, email: str, tracking_code: str) -> None:
        """Send the tracking code. May raise; callers treat delivery as best-effort."""
