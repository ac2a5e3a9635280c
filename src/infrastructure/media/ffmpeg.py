"""FFmpeg implementations of thumbnail generation and media probing.

Both read the source through a short-lived presigned GET URL, so the video
is never copied to local disk; ffmpeg fetches only the byte ranges it needs.
"""

import asyncio
import io
import json
import subprocess

from PIL import Image

from src.commons.infrastructure.blob.base import BlobStorageBase
from src.infrastructure.media.base import (
    MediaAnalysisError,
    MediaInfo,
    MediaProberBase,
    Thumbnail,
    ThumbnailGeneratorBase,
)

_CODECS = {"png": ("png", "image/png"), "jpg": ("mjpeg", "image/jpeg")}


async def _run(cmd: list[str], key: str) -> bytes:
    loop = asyncio.get_event_loop()
    try:
        result = await loop.run_in_executor(
            None,
            lambda: subprocess.run(cmd, capture_output=True, check=True),
        )
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
        raise MediaAnalysisError(key, stderr or f"exit code {e.returncode}") from e
    except FileNotFoundError as e:
        raise MediaAnalysisError(key, f"{cmd[0]} is not installed") from e
    return result.stdout


class FFmpegThumbnailGenerator(ThumbnailGeneratorBase):
    """Captures a single frame with ffmpeg and scales it to the thumbnail box.

    Requires ffmpeg to be installed and available in PATH.
    """

    def __init__(
        self,
        blob_storage: BlobStorageBase,
        ffmpeg_path: str = "ffmpeg",
        width: int = 640,
        height: int = 360,
        format: str = "png",
        capture_at_seconds: float = 1.0,
        url_expiry_seconds: int = 300,
    ) -> None:
        if format not in _CODECS:
            raise ValueError(f"Unsupported thumbnail format: {format}")
        self._blob = blob_storage
        self._ffmpeg = ffmpeg_path
        self._width = width
        self._height = height
        self._format = format
        self._capture_at = capture_at_seconds
        self._url_expiry = url_expiry_seconds

    @property
    def extension(self) -> str:
        return self._format

    async def generate(self, bucket: str, key: str) -> Thumbnail:
        source_url = await self._blob.generate_presigned_url(
            bucket, key, expiry_seconds=self._url_expiry, method="GET"
        )
        codec, content_type = _CODECS[self._format]

        scale_filter = (
            f"scale={self._width}:{self._height}:force_original_aspect_ratio=decrease"
        )
        cmd = [
            self._ffmpeg,
            "-v",
            "error",
            "-ss",
            str(self._capture_at),
            "-i",
            source_url,
            "-frames:v",
            "1",
            "-vf",
            scale_filter,
            "-f",
            "image2pipe",
            "-c:v",
            codec,
            "-",
        ]
        data = await _run(cmd, key)

        # Clips shorter than the capture offset produce no frame
        if not data:
            raise MediaAnalysisError(key, "No frame at capture offset")

        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size

        return Thumbnail(
            data=data,
            content_type=content_type,
            extension=self._format,
            width=width,
            height=height,
        )


class FFprobeMediaProber(MediaProberBase):
    """Reads duration and dimensions with ffprobe.

    Requires ffprobe to be installed and available in PATH.
    """

    def __init__(
        self,
        blob_storage: BlobStorageBase,
        ffprobe_path: str = "ffprobe",
        url_expiry_seconds: int = 300,
    ) -> None:
        self._blob = blob_storage
        self._ffprobe = ffprobe_path
        self._url_expiry = url_expiry_seconds

    async def probe(self, bucket: str, key: str) -> MediaInfo:
        source_url = await self._blob.generate_presigned_url(
            bucket, key, expiry_seconds=self._url_expiry, method="GET"
        )
        cmd = [
            self._ffprobe,
            "-v",
            "quiet",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            source_url,
        ]
        output = await _run(cmd, key)

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise MediaAnalysisError(key, "ffprobe returned invalid JSON") from e

        video_stream = next(
            (s for s in data.get("streams", []) if s.get("codec_type") == "video"),
            None,
        )
        if video_stream is None:
            raise MediaAnalysisError(key, "No video stream found")

        format_info = data.get("format", {})
        return MediaInfo(
            duration_seconds=float(format_info.get("duration") or 0),
            width=int(video_stream.get("width", 0)) or None,
            height=int(video_stream.get("height", 0)) or None,
            codec=video_stream.get("codec_name"),
        )
