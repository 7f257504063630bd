"""Storage service factory: creates the local or S3 backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tramites.application.interfaces.services import IStorageService
from tramites.domain.exceptions import ConfigurationException

if TYPE_CHECKING:
    from tramites.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: Settings | None = None) -> IStorageService:
        """Create the configured backend.

        Raises:
            ConfigurationException: Unknown backend or missing required config.
        """
        from tramites.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from tramites.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            if not s.storage_root:
                raise ConfigurationException("STORAGE_ROOT required for local backend")
            return LocalStorageService(
                storage_root=s.storage_root,
                base_url=s.storage_base_url,
            )
        if backend == "s3":
            from tramites.infrastructure.external.storage.s3_storage import (
                S3StorageService,
            )

            if not s.s3_bucket:
                raise ConfigurationException("S3_BUCKET required for s3 backend")
            return S3StorageService(
                bucket=s.s3_bucket,
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
            )
        raise ConfigurationException(
            f"Unknown storage backend: {backend}. Supported: 'local', 's3'"
        )
