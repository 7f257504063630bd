"""S3-compatible object storage (AWS S3, MinIO)."""

from __future__ import annotations

import asyncio
import hashlib

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tramites.application.dtos.storage import StoredObject
from tramites.infrastructure.exceptions import StorageDeleteError, StorageUploadError


class S3StorageService:
    """boto3 is synchronous, so every call runs in a worker thread."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    def _url_for(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        checksum = hashlib.sha256(file_data).hexdigest()
        meta = {"sha256": checksum, **(metadata or {})}

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=file_data,
                ContentType=content_type,
                Metadata=meta,
                ServerSideEncryption="AES256",
            )

        try:
            await asyncio.to_thread(_put)
        except (ClientError, BotoCoreError) as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return StoredObject(
            key=storage_ref,
            url=self._url_for(storage_ref),
            checksum=checksum,
            size=len(file_data),
        )

    async def delete(self, key: str) -> bool:
        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=key)
            except ClientError as e:
                if e.response["Error"]["Code"] in ("404", "NoSuchKey", "NotFound"):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=key)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except (ClientError, BotoCoreError) as e:
            raise StorageDeleteError(key, str(e)) from e
