"""AWS S3 implementation of blob storage (boto3)."""

import asyncio
import io
import time
from datetime import UTC, datetime
from typing import Any, BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobNotFoundError,
    BlobReadError,
    BlobStorageBase,
    BlobWriteError,
    HealthStatus,
)

_MISSING_CODES = frozenset({"404", "NoSuchKey", "NotFound", "NoSuchBucket"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3BlobStorage(BlobStorageBase):
    """AWS S3 implementation of blob storage.

    Upload URLs sign the Content-Type, so the client must PUT with exactly the
    content type the URL was issued for. Empty credentials fall back to the
    default boto3 credential chain (environment, profile, instance role).
    """

    def __init__(
        self,
        region: str,
        access_key: str | None = None,
        secret_key: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._region = region
        self._client: Any = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key or None,
            aws_secret_access_key=secret_key or None,
            endpoint_url=endpoint_url,
        )

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
        body = data if isinstance(data, bytes) else data.read()

        params: dict[str, Any] = {
            "Bucket": bucket,
            "Key": path,
            "Body": io.BytesIO(body),
            "ContentType": content_type,
        }
        if metadata:
            params["Metadata"] = metadata
        if public:
            params["ACL"] = "public-read"

        try:
            response = await loop.run_in_executor(
                None, lambda: self._client.put_object(**params)
            )
        except (BotoCoreError, ClientError) as e:
            raise BlobWriteError(bucket, path, str(e)) from e

        return BlobMetadata(
            path=path,
            size_bytes=len(body),
            content_type=content_type,
            last_modified=datetime.now(UTC),
            etag=str(response.get("ETag", "")).strip('"'),
        )

    async def delete(self, bucket: str, path: str) -> bool:
        """Delete a blob from storage."""
        loop = asyncio.get_event_loop()

        if not await self.exists(bucket, path):
            return False

        await loop.run_in_executor(
            None, lambda: self._client.delete_object(Bucket=bucket, Key=path)
        )
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
            head = await loop.run_in_executor(
                None, lambda: self._client.head_object(Bucket=bucket, Key=path)
            )
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                raise BlobNotFoundError(bucket, path) from e
            raise BlobReadError(bucket, path, str(e)) from e
        except BotoCoreError as e:
            raise BlobReadError(bucket, path, str(e)) from e

        return BlobMetadata(
            path=path,
            size_bytes=int(head.get("ContentLength", 0)),
            content_type=head.get("ContentType") or "application/octet-stream",
            last_modified=head.get("LastModified") or datetime.now(UTC),
            etag=str(head.get("ETag", "")).strip('"'),
        )

    async def generate_presigned_url(
        self,
        bucket: str,
        path: str,
        expiry_seconds: int = 300,
        method: str = "PUT",
        content_type: str | None = None,
    ) -> str:
        """Generate a presigned URL for direct access."""
        loop = asyncio.get_event_loop()
        params: dict[str, str] = {"Bucket": bucket, "Key": path}

        if method.upper() == "PUT":
            operation = "put_object"
            if content_type:
                params["ContentType"] = content_type
        else:
            operation = "get_object"

        def _presign() -> str:
            return str(
                self._client.generate_presigned_url(
                    operation,
                    Params=params,
                    ExpiresIn=expiry_seconds,
                    HttpMethod=method.upper(),
                )
            )

        return await loop.run_in_executor(None, _presign)

    async def create_bucket(self, bucket: str) -> bool:
        """Create a new bucket."""
        if await self.bucket_exists(bucket):
            return False

        loop = asyncio.get_event_loop()
        params: dict[str, Any] = {"Bucket": bucket}
        # us-east-1 rejects an explicit location constraint
        if self._region != "us-east-1":
            params["CreateBucketConfiguration"] = {
                "LocationConstraint": self._region
            }
        await loop.run_in_executor(None, lambda: self._client.create_bucket(**params))
        return True

    async def bucket_exists(self, bucket: str) -> bool:
        """Check if a bucket exists."""
        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(
                None, lambda: self._client.head_bucket(Bucket=bucket)
            )
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                return False
            raise
        return True

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
                message=f"S3 health check failed: {e}",
                details={"region": self._region, "error": str(e)},
            )
        return HealthStatus(
            healthy=True,
            latency_ms=(time.perf_counter() - start) * 1000,
            message="S3 is healthy",
            details={"region": self._region},
        )
