"""Abstract base class for blob storage operations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO


class BlobStorageError(Exception):
    """Base class for object storage faults."""

    def __init__(self, bucket: str, path: str, message: str) -> None:
        self.bucket = bucket
        self.path = path
        super().__init__(message)


class BlobNotFoundError(BlobStorageError):
    """Raised when a blob is not found."""

    def __init__(self, bucket: str, path: str) -> None:
        super().__init__(bucket, path, f"Blob not found: {bucket}/{path}")


class BlobReadError(BlobStorageError):
    """Raised when reading a blob or its metadata fails for any other reason."""

    def __init__(self, bucket: str, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(bucket, path, f"Failed to read {bucket}/{path}: {reason}")


class BlobWriteError(BlobStorageError):
    """Raised when writing a blob fails."""

    def __init__(self, bucket: str, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(bucket, path, f"Failed to write {bucket}/{path}: {reason}")


@dataclass
class BlobMetadata:
    """Metadata for a stored blob."""

    path: str
    size_bytes: int
    content_type: str
    last_modified: datetime
    etag: str


@dataclass
class HealthStatus:
    """Health check result."""

    healthy: bool
    latency_ms: float
    message: str | None = None
    details: dict[str, str] | None = None


class BlobStorageBase(ABC):
    """Abstract base class for blob storage operations.

    Implementations:
    - MinIO (local development, any S3-compatible endpoint)
    - AWS S3 (content-type bound upload URLs)
    """

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
        public: bool = False,
    ) -> BlobMetadata:
        """Upload a blob to storage.

        Args:
            bucket: Target bucket name.
            path: Path within the bucket.
            data: File-like object or bytes to upload.
            content_type: MIME type of the content.
            metadata: Optional key-value metadata.
            public: Grant anonymous read access to the object.

        Returns:
            Metadata of the uploaded blob.

        Raises:
            BlobWriteError: On any underlying storage fault.
        """

    @abstractmethod
    async def delete(self, bucket: str, path: str) -> bool:
        """Delete a blob from storage.

        Returns:
            True if deleted, False if didn't exist.
        """

    @abstractmethod
    async def exists(self, bucket: str, path: str) -> bool:
        """Check if a blob exists."""

    @abstractmethod
    async def get_metadata(self, bucket: str, path: str) -> BlobMetadata:
        """Get blob metadata (size, content type, last modified) without downloading.

        Raises:
            BlobNotFoundError: If blob doesn't exist.
            BlobReadError: On any other storage fault.
        """

    @abstractmethod
    async def generate_presigned_url(
        self,
        bucket: str,
        path: str,
        expiry_seconds: int = 300,
        method: str = "PUT",
        content_type: str | None = None,
    ) -> str:
        """Generate a presigned URL for direct access to a single object.

        Args:
            bucket: Bucket name.
            path: Path within the bucket.
            expiry_seconds: URL validity duration.
            method: HTTP method (GET or PUT).
            content_type: Content type the upload must be sent with, where
                the provider can bind it into the signature.

        Returns:
            Presigned URL string.
        """

    @abstractmethod
    async def create_bucket(self, bucket: str) -> bool:
        """Create a new bucket.

        Returns:
            True if created, False if already exists.
        """

    @abstractmethod
    async def bucket_exists(self, bucket: str) -> bool:
        """Check if a bucket exists."""

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """Check service health."""
