"""Domain exceptions for the video sharing system."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.models.video import VideoStatus


class DomainException(Exception):
    """Base exception for domain errors."""


class VideoNotFoundException(DomainException):
    """Raised when a requested video record does not exist."""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")


class RecordValidationException(DomainException):
    """Raised when input for a video record is missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class MalformedObjectKeyException(DomainException):
    """Raised when an object key does not follow the `<prefix>/<id>.<ext>` layout."""

    def __init__(self, key: str, reason: str = "Unexpected key layout") -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Malformed object key '{key}': {reason}")


class InvalidStatusTransitionException(DomainException):
    """Raised when a processing step would move a record along an undefined edge."""

    def __init__(self, video_id: str, current: VideoStatus, target: VideoStatus) -> None:
        self.video_id = video_id
        self.current = current
        self.target = target
        super().__init__(
            f"Video {video_id} cannot move from {current.value} to {target.value}"
        )
