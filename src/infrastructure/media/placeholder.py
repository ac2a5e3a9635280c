"""Placeholder media analysis: a solid-colour thumbnail and zero duration."""

import asyncio
import io

from PIL import Image

from src.infrastructure.media.base import (
    MediaInfo,
    MediaProberBase,
    Thumbnail,
    ThumbnailGeneratorBase,
)

_PIL_FORMATS = {"png": ("PNG", "image/png"), "jpg": ("JPEG", "image/jpeg")}


class PlaceholderThumbnailGenerator(ThumbnailGeneratorBase):
    """Renders a flat-colour image instead of decoding the video."""

    def __init__(
        self,
        width: int = 640,
        height: int = 360,
        background: tuple[int, int, int] = (52, 152, 219),
        format: str = "png",
    ) -> None:
        if format not in _PIL_FORMATS:
            raise ValueError(f"Unsupported thumbnail format: {format}")
        self._size = (width, height)
        self._background = background
        self._format = format

    @property
    def extension(self) -> str:
        return self._format

    async def generate(self, bucket: str, key: str) -> Thumbnail:  # noqa: ARG002
        pil_format, content_type = _PIL_FORMATS[self._format]

        def _render() -> bytes:
            buffer = io.BytesIO()
            Image.new("RGB", self._size, self._background).save(buffer, pil_format)
            return buffer.getvalue()

        loop = asyncio.get_event_loop()
        data = await loop.run_in_executor(None, _render)
        return Thumbnail(
            data=data,
            content_type=content_type,
            extension=self._format,
            width=self._size[0],
            height=self._size[1],
        )


class PlaceholderMediaProber(MediaProberBase):
    """Reports a zero duration until a real prober is configured."""

    async def probe(self, bucket: str, key: str) -> MediaInfo:  # noqa: ARG002
        return MediaInfo(duration_seconds=0.0)
