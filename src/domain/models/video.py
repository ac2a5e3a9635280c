"""Video record domain model."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator
from pydantic.alias_generators import to_camel


class VideoStatus(str, Enum):
    """Lifecycle status of an uploaded video."""

    UPLOADING = "uploading"  # Upload URL issued, bytes not yet confirmed
    PROCESSING = "processing"  # Object stored, derived artifacts being produced
    ACTIVE = "active"  # Listed and playable
    FAILED = "failed"  # Processing aborted, see error_message


# Edges the processing worker may follow. Administrative updates through the
# catalog are not bound by this graph.
STATUS_TRANSITIONS: dict[VideoStatus, frozenset[VideoStatus]] = {
    VideoStatus.UPLOADING: frozenset({VideoStatus.PROCESSING}),
    VideoStatus.PROCESSING: frozenset({VideoStatus.ACTIVE, VideoStatus.FAILED}),
    VideoStatus.ACTIVE: frozenset(),
    VideoStatus.FAILED: frozenset({VideoStatus.PROCESSING}),  # Redelivered notification
}

# Wire names of the attributes a partial update may touch
MUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "description",
        "uploader",
        "tags",
        "status",
        "views",
        "fileSize",
        "duration",
        "errorMessage",
        "thumbnailKey",
    }
)


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


# Fixed-width UTC layout: lexicographic order is time order
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime) -> str:
    """Render a datetime in the stored layout, normalized to UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


class VideoRecord(BaseModel):
    """Canonical entity for an uploaded video.

    Serialized with camelCase names (``fileName``, ``storageKey``, ...), which
    is both the HTTP wire format and the stored document layout.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Opaque unique identifier, immutable",
    )
    title: str = Field(default="", description="Display title")
    description: str = Field(default="", description="Free-text description")
    uploader: str = Field(default="", description="Who uploaded the video")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")

    file_name: str = Field(default="", description="Original client file name")
    storage_key: str = Field(default="", description="Object key of the source video")
    file_type: str = Field(default="", description="MIME type of the source video")

    status: VideoStatus = Field(default=VideoStatus.UPLOADING)
    views: int = Field(default=0, ge=0)
    file_size: int = Field(default=0, ge=0, description="Source size in bytes")
    duration: float = Field(default=0, ge=0, description="Duration in seconds")
    thumbnail_key: str | None = Field(
        default=None,
        description="Object key of the derived thumbnail",
    )
    error_message: str | None = Field(
        default=None,
        description="Error details, only while status is FAILED",
    )

    upload_date: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_invariants(self) -> Self:
        if self.status == VideoStatus.FAILED and not self.error_message:
            raise ValueError("A failed video must carry an error message")
        if self.status != VideoStatus.FAILED and self.error_message:
            raise ValueError("Only failed videos carry an error message")
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt must not precede createdAt")
        return self

    @field_serializer("upload_date", "created_at", "updated_at", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    @property
    def is_active(self) -> bool:
        """Check if the video is listed and playable."""
        return self.status == VideoStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        """Check if the processing worker is done with this video."""
        return not STATUS_TRANSITIONS[self.status]

    def can_transition_to(self, new_status: VideoStatus) -> bool:
        """Check whether the processing worker may move this record to a status."""
        return new_status in STATUS_TRANSITIONS[self.status]

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored/wire layout (camelCase, JSON types)."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Build a record from a stored document."""
        return cls.model_validate(document)
