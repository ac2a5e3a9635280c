"""Blob storage abstractions and implementations."""

from src.commons.infrastructure.blob.base import (
    BlobMetadata,
    BlobNotFoundError,
    BlobReadError,
    BlobStorageBase,
    BlobStorageError,
    BlobWriteError,
    HealthStatus,
)
from src.commons.infrastructure.blob.minio_provider import MinioBlobStorage
from src.commons.infrastructure.blob.s3_provider import S3BlobStorage

__all__ = [
    # Base classes
    "BlobMetadata",
    "BlobStorageBase",
    "HealthStatus",
    # Implementations
    "MinioBlobStorage",
    "S3BlobStorage",
    # Exceptions
    "BlobStorageError",
    "BlobNotFoundError",
    "BlobReadError",
    "BlobWriteError",
]
