"""Infrastructure layer - external service implementations."""

from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from src.infrastructure.media import (
    FFmpegThumbnailGenerator,
    FFprobeMediaProber,
    MediaAnalysisError,
    MediaInfo,
    MediaProberBase,
    PlaceholderMediaProber,
    PlaceholderThumbnailGenerator,
    Thumbnail,
    ThumbnailGeneratorBase,
)

__all__ = [
    # Factory
    "InfrastructureFactory",
    "get_factory",
    "reset_factory",
    # Media
    "ThumbnailGeneratorBase",
    "MediaProberBase",
    "Thumbnail",
    "MediaInfo",
    "MediaAnalysisError",
    "PlaceholderThumbnailGenerator",
    "PlaceholderMediaProber",
    "FFmpegThumbnailGenerator",
    "FFprobeMediaProber",
]
