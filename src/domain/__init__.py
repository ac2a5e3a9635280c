"""Domain layer - business models and logic."""

from src.domain.exceptions import (
    DomainException,
    InvalidStatusTransitionException,
    MalformedObjectKeyException,
    RecordValidationException,
    VideoNotFoundException,
)
from src.domain.models import (
    MUTABLE_FIELDS,
    STATUS_TRANSITIONS,
    VideoRecord,
    VideoStatus,
)
from src.domain.value_objects import VideoObjectKey, thumbnail_key_for

__all__ = [
    # Exceptions
    "DomainException",
    "VideoNotFoundException",
    "RecordValidationException",
    "MalformedObjectKeyException",
    "InvalidStatusTransitionException",
    # Video
    "VideoRecord",
    "VideoStatus",
    "STATUS_TRANSITIONS",
    "MUTABLE_FIELDS",
    # Value Objects
    "VideoObjectKey",
    "thumbnail_key_for",
]
