"""Data transfer objects for API boundaries."""

from src.application.dtos.events import (
    StorageEvent,
    StorageEventRecord,
    StorageEventResult,
)
from src.application.dtos.uploads import UploadUrlRequest, UploadUrlResponse
from src.application.dtos.videos import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    VideoPage,
)

__all__ = [
    # Videos
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "VideoPage",
    # Uploads
    "UploadUrlRequest",
    "UploadUrlResponse",
    # Events
    "StorageEvent",
    "StorageEventRecord",
    "StorageEventResult",
]
