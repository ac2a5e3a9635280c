"""Abstract base classes for post-upload media analysis."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class MediaAnalysisError(Exception):
    """Raised when a thumbnail or probe cannot be produced from a stored object."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Media analysis failed for {key}: {reason}")


@dataclass
class Thumbnail:
    """An encoded thumbnail image."""

    data: bytes
    content_type: str
    extension: str
    width: int
    height: int


@dataclass
class MediaInfo:
    """Information probed from a stored video."""

    duration_seconds: float
    width: int | None = None
    height: int | None = None
    codec: str | None = None


class ThumbnailGeneratorBase(ABC):
    """Produces the thumbnail stored next to every uploaded video.

    Implementations:
    - Solid-colour placeholder (no media decoding)
    - FFmpeg frame capture
    """

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension of generated thumbnails, used to derive their key."""

    @abstractmethod
    async def generate(self, bucket: str, key: str) -> Thumbnail:
        """Create a thumbnail for a stored video.

        Args:
            bucket: Bucket holding the source video.
            key: Object key of the source video.

        Returns:
            Encoded thumbnail.

        Raises:
            MediaAnalysisError: If the source cannot be decoded.
        """


class MediaProberBase(ABC):
    """Extracts playback metadata (duration, dimensions) from a stored video."""

    @abstractmethod
    async def probe(self, bucket: str, key: str) -> MediaInfo:
        """Probe a stored video.

        Raises:
            MediaAnalysisError: If the source cannot be probed.
        """
