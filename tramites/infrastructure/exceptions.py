"""Infrastructure exceptions for object storage.

Storage errors extend TramiteException so presentation can map them
to HTTP responses consistently.
"""

from tramites.domain.exceptions import TramiteException


class StorageException(TramiteException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """Upload failed; nothing was written to the database."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            "No se pudo almacenar el archivo adjunto.",
            "STORAGE_UPLOAD_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Delete failed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {storage_ref}",
            "STORAGE_DELETE_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage reference resolves outside the storage root."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"Invalid storage path: {storage_ref}",
            "STORAGE_PERMISSION_ERROR",
            {"storage_ref": storage_ref},
        )
