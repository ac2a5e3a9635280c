"""Application services for video upload, processing and management."""

from src.application.services.catalog import VideoCatalogService
from src.application.services.processing import VideoProcessingService
from src.application.services.records import VideoRecordStore, active_filter
from src.application.services.uploads import UploadUrlService

__all__ = [
    "UploadUrlService",
    "VideoCatalogService",
    "VideoProcessingService",
    "VideoRecordStore",
    "active_filter",
]
