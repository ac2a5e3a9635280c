"""Application layer - use cases and orchestration.

This layer contains:
- Services: Business logic orchestration
- DTOs: Data transfer objects for API boundaries
"""

from src.application.dtos import (
    StorageEvent,
    StorageEventResult,
    UploadUrlRequest,
    UploadUrlResponse,
    VideoPage,
)
from src.application.services import (
    UploadUrlService,
    VideoCatalogService,
    VideoProcessingService,
    VideoRecordStore,
)

__all__ = [
    # DTOs
    "StorageEvent",
    "StorageEventResult",
    "UploadUrlRequest",
    "UploadUrlResponse",
    "VideoPage",
    # Services
    "UploadUrlService",
    "VideoCatalogService",
    "VideoProcessingService",
    "VideoRecordStore",
]
