"""MinIO implementation of blob storage."""

import asyncio
import io
import time
from datetime import UTC, datetime, timedelta
from typing import BinaryIO

from minio import Minio
from minio.error import S3Error

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobNotFoundError,
    BlobReadError,
    BlobStorageBase,
    BlobWriteError,
    HealthStatus,
)

_MISSING_CODES = frozenset({"NoSuchKey", "NoSuchObject", "NotFound"})


class MinioBlobStorage(BlobStorageBase):
    """MinIO implementation of blob storage.

    Works against MinIO and any S3-compatible endpoint. Upload URLs are bound
    to method, key and expiry; the content type is not part of the signature.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        secure: bool = False,
        region: str | None = None,
    ) -> None:
        """Initialize MinIO client.

        Args:
            endpoint: MinIO/S3 endpoint (e.g., "localhost:9000").
            access_key: Access key ID.
            secret_key: Secret access key.
            secure: Use HTTPS connection.
            region: Region; setting it avoids a lookup request when presigning.
        """
        self._client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            region=region,
        )
        self._endpoint = endpoint

    async def upload(
        self,
        bucket: str,
        path: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
        public: bool = False,
    ) -> BlobMetadata:
        """Upload a blob to storage."""
        loop = asyncio.get_event_loop()

        if isinstance(data, bytes):
            data_io: BinaryIO = io.BytesIO(data)
            length = len(data)
        else:
            data.seek(0, io.SEEK_END)
            length = data.tell()
            data.seek(0)
            data_io = data

        headers = dict(metadata or {})
        if public:
            headers["x-amz-acl"] = "public-read"

        def _upload() -> None:
            self._client.put_object(
                bucket_name=bucket,
                object_name=path,
                data=data_io,
                length=length,
                content_type=content_type,
                metadata=headers or None,
            )

        try:
            await loop.run_in_executor(None, _upload)
        except Exception as e:
            raise BlobWriteError(bucket, path, str(e)) from e

        return BlobMetadata(
            path=path,
            size_bytes=length,
            content_type=content_type,
            last_modified=datetime.now(UTC),
            etag="",
        )

    async def delete(self, bucket: str, path: str) -> bool:
        """Delete a blob from storage."""
        loop = asyncio.get_event_loop()

        if not await self.exists(bucket, path):
            return False

        await loop.run_in_executor(None, self._client.remove_object, bucket, path)
        return True

    async def exists(self, bucket: str, path: str) -> bool:
        """Check if a blob exists."""
        try:
            await self.get_metadata(bucket, path)
        except BlobNotFoundError:
            return False
        return True

    async def get_metadata(self, bucket: str, path: str) -> BlobMetadata:
        """Get blob metadata without downloading."""
        loop = asyncio.get_event_loop()

        try:
            stat = await loop.run_in_executor(
                None, self._client.stat_object, bucket, path
            )
        except S3Error as e:
            if e.code in _MISSING_CODES:
                raise BlobNotFoundError(bucket, path) from e
            raise BlobReadError(bucket, path, str(e)) from e

        return BlobMetadata(
            path=path,
            size_bytes=stat.size or 0,
            content_type=stat.content_type or "application/octet-stream",
            last_modified=stat.last_modified or datetime.now(UTC),
            etag=stat.etag or "",
        )

    async def generate_presigned_url(
        self,
        bucket: str,
        path: str,
        expiry_seconds: int = 300,
        method: str = "PUT",
        content_type: str | None = None,  # noqa: ARG002
    ) -> str:
        """Generate a presigned URL for direct access."""
        loop = asyncio.get_event_loop()
        expires = timedelta(seconds=expiry_seconds)

        def _presign() -> str:
            if method.upper() == "PUT":
                return str(self._client.presigned_put_object(bucket, path, expires))
            return str(self._client.presigned_get_object(bucket, path, expires))

        return await loop.run_in_executor(None, _presign)

    async def create_bucket(self, bucket: str) -> bool:
        """Create a new bucket."""
        loop = asyncio.get_event_loop()

        def _create() -> bool:
            if self._client.bucket_exists(bucket):
                return False
            self._client.make_bucket(bucket)
            return True

        return await loop.run_in_executor(None, _create)

    async def bucket_exists(self, bucket: str) -> bool:
        """Check if a bucket exists."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._client.bucket_exists, bucket)

    async def health_check(self) -> HealthStatus:
        """Check service health."""
        start = time.perf_counter()
        try:
            loop = asyncio.get_event_loop()
            await loop.run_in_executor(None, self._client.list_buckets)
        except Exception as e:
            return HealthStatus(
                healthy=False,
                latency_ms=(time.perf_counter() - start) * 1000,
                message=f"MinIO health check failed: {e}",
                details={"endpoint": self._endpoint, "error": str(e)},
            )
        return HealthStatus(
            healthy=True,
            latency_ms=(time.perf_counter() - start) * 1000,
            message="MinIO is healthy",
            details={"endpoint": self._endpoint},
        )
