"""Domain value objects."""

from src.domain.value_objects.object_key import VideoObjectKey, thumbnail_key_for

__all__ = [
    "VideoObjectKey",
    "thumbnail_key_for",
]
