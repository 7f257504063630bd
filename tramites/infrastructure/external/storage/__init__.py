"""Attachment storage: local filesystem and S3-compatible backends.

Backends are imported lazily by StorageFactory so the S3 client is only
built when selected.
"""

from tramites.infrastructure.external.storage.factory import StorageFactory

__all__ = ["StorageFactory"]
