"""Object key value objects for uploaded videos and their thumbnails."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from src.domain.exceptions import MalformedObjectKeyException, RecordValidationException

# <prefix>/<id>.<ext>, exactly one path separator
OBJECT_KEY_PATTERN = re.compile(
    r"^(?P<prefix>[^/]+)/(?P<video_id>[A-Za-z0-9_-]+)\.(?P<extension>[A-Za-z0-9]+)$"
)
EXTENSION_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

DEFAULT_VIDEO_PREFIX = "videos"
DEFAULT_THUMBNAIL_PREFIX = "thumbnails"


class VideoObjectKey(BaseModel):
    """Value object for the storage key of an uploaded video.

    Keys are namespaced as ``<prefix>/<id>.<ext>``, so the video id can be
    recovered from the key alone and the thumbnail key can be derived from
    the id without a database lookup.

    Examples:
        >>> key = VideoObjectKey.parse("videos/abc123.mp4")
        >>> key.video_id
        'abc123'
        >>> key.thumbnail_key()
        'thumbnails/abc123.png'
    """

    prefix: str = Field(default=DEFAULT_VIDEO_PREFIX, min_length=1)
    video_id: str = Field(min_length=1)
    extension: str = Field(min_length=1)

    @classmethod
    def parse(cls, key: str, expected_prefix: str | None = None) -> VideoObjectKey:
        """Split an object key into prefix, video id and extension.

        Args:
            key: The object key from a storage notification.
            expected_prefix: If given, the key must live under this prefix.

        Returns:
            The parsed key.

        Raises:
            MalformedObjectKeyException: If the key violates the layout.
        """
        if not key:
            raise MalformedObjectKeyException(key, "Key is empty")

        if "/" not in key:
            raise MalformedObjectKeyException(key, "Missing path separator")

        match = OBJECT_KEY_PATTERN.match(key)
        if match is None:
            raise MalformedObjectKeyException(key, "Expected <prefix>/<id>.<ext>")

        if expected_prefix is not None and match["prefix"] != expected_prefix:
            raise MalformedObjectKeyException(
                key, f"Expected prefix '{expected_prefix}', got '{match['prefix']}'"
            )

        return cls(
            prefix=match["prefix"],
            video_id=match["video_id"],
            extension=match["extension"],
        )

    @classmethod
    def for_upload(
        cls,
        video_id: str,
        file_name: str,
        prefix: str = DEFAULT_VIDEO_PREFIX,
    ) -> VideoObjectKey:
        """Build the key for a new upload from the client's file name.

        The extension is the part of the file name after its last dot.

        Raises:
            RecordValidationException: If the file name has no usable extension.
        """
        base, dot, extension = file_name.rpartition(".")
        if not dot or not base:
            raise RecordValidationException(
                f"File name '{file_name}' has no extension", field="fileName"
            )
        if not EXTENSION_PATTERN.match(extension):
            raise RecordValidationException(
                f"Unsupported file extension '{extension}'", field="fileName"
            )
        return cls(prefix=prefix, video_id=video_id, extension=extension)

    def thumbnail_key(
        self,
        extension: str = "png",
        prefix: str = DEFAULT_THUMBNAIL_PREFIX,
    ) -> str:
        """Deterministic key of the thumbnail derived from this video."""
        return thumbnail_key_for(self.video_id, extension, prefix)

    def __str__(self) -> str:
        return f"{self.prefix}/{self.video_id}.{self.extension}"


def thumbnail_key_for(
    video_id: str,
    extension: str = "png",
    prefix: str = DEFAULT_THUMBNAIL_PREFIX,
) -> str:
    """Deterministic thumbnail key for a video id."""
    return f"{prefix}/{video_id}.{extension}"
