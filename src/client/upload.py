"""Client-side upload flow: signed URL, direct transfer, record finalization."""

import mimetypes
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Self

from src.client.api_client import VideoApiClient
from src.commons.settings.models import ClientSettings
from src.commons.telemetry import LogContext, get_logger

ProgressCallback = Callable[[float], None]

DEFAULT_CHUNK_SIZE = 1024 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Progress checkpoints, in percent
PROGRESS_START = 0.0
PROGRESS_REQUESTING_URL = 5.0
PROGRESS_URL_RECEIVED = 10.0
PROGRESS_TRANSFER_SPAN = 70.0
PROGRESS_FINALIZING = 85.0
PROGRESS_DONE = 100.0


@dataclass
class UploadResult:
    """Outcome of an upload. Never raised, always returned."""

    success: bool
    video_id: str | None = None
    error: str | None = None


class ProgressReporter:
    """Forwards progress values to a callback only when they increase."""

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._last = -1.0

    @property
    def last(self) -> float:
        return self._last

    def __call__(self, value: float) -> None:
        value = min(value, PROGRESS_DONE)
        if value <= self._last:
            return
        self._last = value
        if self._callback is not None:
            self._callback(value)


class UploadOrchestrator:
    """Uploads a local video file and registers its metadata.

    Steps:
    1. Request a signed upload URL (creates the ``uploading`` record)
    2. PUT the file straight to object storage
    3. Merge title, description, tags and size into the record

    Processing to ``active`` happens server-side once storage reports the
    object. Nothing is rolled back on failure.
    """

    def __init__(
        self,
        client: VideoApiClient,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._client = client
        self._chunk_size = chunk_size
        self._logger = get_logger(__name__)

    @classmethod
    def from_settings(cls, client: VideoApiClient, settings: ClientSettings) -> Self:
        return cls(client, chunk_size=settings.chunk_size)

    async def upload(
        self,
        source: str | Path | BinaryIO,
        title: str,
        description: str = "",
        tags: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
        file_name: str | None = None,
        content_type: str | None = None,
    ) -> UploadResult:
        """Upload a video.

        Args:
            source: Path of the file, or a binary file object opened for reading.
            title: Display title; must not be blank.
            description: Optional description.
            tags: Optional tags.
            on_progress: Receives strictly increasing percentages from 0 to 100.
            file_name: Name sent to the server. Defaults to the file's name.
            content_type: MIME type. Guessed from the file name when omitted.

        Returns:
            Result with the new video id, or the error that stopped the upload.
        """
        report = ProgressReporter(on_progress)
        report(PROGRESS_START)

        if not title or not title.strip():
            return UploadResult(success=False, error="Title is required")

        if isinstance(source, str | Path):
            path = Path(source)
            if not path.is_file():
                return UploadResult(success=False, error=f"File not found: {path}")
            try:
                with path.open("rb") as handle:
                    return await self._upload_handle(
                        handle,
                        file_name or path.name,
                        title,
                        description,
                        tags or [],
                        content_type,
                        report,
                    )
            except OSError as e:
                return UploadResult(success=False, error=f"Could not read {path}: {e}")

        name = file_name or Path(getattr(source, "name", "") or "upload").name
        return await self._upload_handle(
            source, name, title, description, tags or [], content_type, report
        )

    async def _upload_handle(
        self,
        handle: BinaryIO,
        file_name: str,
        title: str,
        description: str,
        tags: list[str],
        content_type: str | None,
        report: ProgressReporter,
    ) -> UploadResult:
        content_type = (
            content_type or mimetypes.guess_type(file_name)[0] or DEFAULT_CONTENT_TYPE
        )
        video_id: str | None = None

        try:
            size = handle.seek(0, 2)
            handle.seek(0)

            report(PROGRESS_REQUESTING_URL)
            signed = await self._client.request_upload_url(file_name, content_type)
            video_id = signed.video_id
            report(PROGRESS_URL_RECEIVED)

            with LogContext(video_id=video_id):
                self._logger.info(
                    "Uploading video",
                    extra={"file_name": file_name, "size_bytes": size},
                )
                await self._client.upload_to_signed_url(
                    signed.upload_url,
                    self._read_chunks(handle, size, report),
                    size,
                    content_type,
                )
                report(PROGRESS_URL_RECEIVED + PROGRESS_TRANSFER_SPAN)

                report(PROGRESS_FINALIZING)
                await self._client.update_video(
                    video_id,
                    {
                        "title": title.strip(),
                        "description": description,
                        "tags": tags,
                        "fileSize": size,
                    },
                )
                report(PROGRESS_DONE)
                self._logger.info("Upload completed")

        except Exception as e:
            self._logger.warning(
                f"Upload failed: {e}",
                extra={"video_id": video_id, "error_type": type(e).__name__},
            )
            return UploadResult(success=False, video_id=video_id, error=str(e))

        return UploadResult(success=True, video_id=video_id)

    async def _read_chunks(
        self,
        handle: BinaryIO,
        size: int,
        report: ProgressReporter,
    ) -> AsyncIterator[bytes]:
        sent = 0
        while chunk := handle.read(self._chunk_size):
            sent += len(chunk)
            yield chunk
            if size:
                report(PROGRESS_URL_RECEIVED + PROGRESS_TRANSFER_SPAN * sent / size)
