"""Media analysis services for uploaded videos."""

from src.infrastructure.media.base import (
    MediaAnalysisError,
    MediaInfo,
    MediaProberBase,
    Thumbnail,
    ThumbnailGeneratorBase,
)
from src.infrastructure.media.ffmpeg import FFmpegThumbnailGenerator, FFprobeMediaProber
from src.infrastructure.media.placeholder import (
    PlaceholderMediaProber,
    PlaceholderThumbnailGenerator,
)

__all__ = [
    # Base classes
    "ThumbnailGeneratorBase",
    "MediaProberBase",
    "Thumbnail",
    "MediaInfo",
    "MediaAnalysisError",
    # Implementations
    "PlaceholderThumbnailGenerator",
    "PlaceholderMediaProber",
    "FFmpegThumbnailGenerator",
    "FFprobeMediaProber",
]
