"""Local filesystem storage for attachments: atomic writes, path validation."""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from tramites.application.dtos.storage import StoredObject
from tramites.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)


class LocalStorageService:
    """Stores blobs under storage_root.

    Keys are validated against the root so a crafted filename cannot
    escape it. Writes go to a temp file in the target directory and are
    renamed into place, so a partially written attachment is never visible.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref) from e
        return full_path

    def _url_for(self, storage_ref: str) -> str:
        if self.base_url:
            return f"{self.base_url}/{storage_ref}"
        return (self.storage_root / storage_ref).as_uri()

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        """Write file_data atomically. An existing key is never overwritten."""
        target_path = self._get_full_path(storage_ref)
        if target_path.exists():
            raise StorageUploadError(storage_ref, "object already exists")
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return StoredObject(
            key=storage_ref,
            url=self._url_for(storage_ref),
            checksum=hashlib.sha256(file_data).hexdigest(),
            size=len(file_data),
        )

    async def delete(self, key: str) -> bool:
        """Remove the blob and any directories it leaves empty."""
        file_path = self._get_full_path(key)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(key, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent
        return True

    async def exists(self, key: str) -> bool:
        return self._get_full_path(key).exists()
