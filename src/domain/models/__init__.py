"""Domain models."""

from src.domain.models.video import (
    MUTABLE_FIELDS,
    STATUS_TRANSITIONS,
    VideoRecord,
    VideoStatus,
)

__all__ = [
    "VideoRecord",
    "VideoStatus",
    "STATUS_TRANSITIONS",
    "MUTABLE_FIELDS",
]
