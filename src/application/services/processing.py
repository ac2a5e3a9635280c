"""Post-upload processing: drives records from ``uploading`` to a final status."""

from urllib.parse import unquote_plus

from src.application.dtos.events import StorageEvent, StorageEventResult
from src.application.services.records import VideoRecordStore
from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.settings.models import BlobStorageSettings
from src.commons.telemetry import LogContext, get_logger, timed
from src.domain.exceptions import (
    InvalidStatusTransitionException,
    VideoNotFoundException,
)
from src.domain.models.video import VideoRecord, VideoStatus
from src.domain.value_objects.object_key import VideoObjectKey
from src.infrastructure.media.base import MediaProberBase, ThumbnailGeneratorBase


class VideoProcessingService:
    """Reacts to object-created notifications for uploaded videos.

    Pipeline steps per object:
    1. Recover the video id from the object key
    2. Move the record to ``processing``
    3. Generate and store the thumbnail
    4. Merge size, type, duration and thumbnail key into the record
    5. Move the record to ``active``

    A failure in steps 2-5 marks the record ``failed`` and re-raises, so the
    notifier can redeliver. A redelivered notification retries a ``failed``
    record; only ``active`` records are skipped.
    """

    def __init__(
        self,
        blob_storage: BlobStorageBase,
        store: VideoRecordStore,
        thumbnail_generator: ThumbnailGeneratorBase,
        media_prober: MediaProberBase,
        blob_settings: BlobStorageSettings,
    ) -> None:
        self._blob = blob_storage
        self._store = store
        self._thumbnails = thumbnail_generator
        self._prober = media_prober
        self._videos_bucket = blob_settings.buckets.videos
        self._thumbnails_bucket = blob_settings.buckets.thumbnails
        self._video_prefix = blob_settings.video_prefix
        self._thumbnail_prefix = blob_settings.thumbnail_prefix
        self._logger = get_logger(__name__)

    async def handle_notification(self, event: StorageEvent) -> StorageEventResult:
        """Process every object-created record of a notification, in order.

        Records of other event types, or for other buckets, are skipped. The
        first failing record aborts the batch.
        """
        processed = 0
        skipped = 0

        for entry in event.records:
            if not entry.is_object_created:
                skipped += 1
                continue

            bucket = entry.raw_bucket
            key = unquote_plus(entry.raw_key)
            if bucket != self._videos_bucket:
                self._logger.warning(
                    "Ignoring object outside the videos bucket",
                    extra={"bucket": bucket, "object_key": key},
                )
                skipped += 1
                continue

            if await self.process_object(bucket, key):
                processed += 1
            else:
                skipped += 1

        return StorageEventResult(
            message="Video processing completed",
            processed=processed,
            skipped=skipped,
        )

    @timed
    async def process_object(self, bucket: str, key: str) -> bool:
        """Process one stored video.

        Returns:
            True if the record reached ``active``, False if it was already
            ``active`` and was skipped.

        Raises:
            MalformedObjectKeyException: If the key does not name a video.
            VideoNotFoundException: If no record exists for the video id.
        """
        object_key = VideoObjectKey.parse(key, expected_prefix=self._video_prefix)
        video_id = object_key.video_id

        with LogContext(video_id=video_id, object_key=key):
            record = await self._store.get(video_id)
            if record is None:
                raise VideoNotFoundException(video_id)

            if record.is_active:
                self._logger.info(
                    "Skipping video that already finished processing",
                    extra={"status": record.status.value},
                )
                return False

            try:
                await self._start(record)
                await self._analyze(bucket, object_key)
                await self._transition(video_id, VideoStatus.ACTIVE)
            except Exception as e:
                await self._mark_failed(video_id, e)
                raise

            self._logger.info("Video processing completed")
            return True

    async def _start(self, record: VideoRecord) -> None:
        if record.status == VideoStatus.PROCESSING:
            # Redelivered notification or an interrupted run
            self._logger.info("Resuming video already in processing")
            return
        if record.status == VideoStatus.FAILED:
            self._logger.info(
                "Retrying video that failed processing",
                extra={"previous_error": record.error_message},
            )
        if not record.can_transition_to(VideoStatus.PROCESSING):
            raise InvalidStatusTransitionException(
                record.id, record.status, VideoStatus.PROCESSING
            )
        await self._transition(record.id, VideoStatus.PROCESSING)

    async def _analyze(self, bucket: str, object_key: VideoObjectKey) -> None:
        key = str(object_key)

        thumbnail = await self._thumbnails.generate(bucket, key)
        thumbnail_key = object_key.thumbnail_key(
            thumbnail.extension, self._thumbnail_prefix
        )
        await self._blob.upload(
            self._thumbnails_bucket,
            thumbnail_key,
            thumbnail.data,
            content_type=thumbnail.content_type,
            public=True,
        )
        self._logger.info(
            "Thumbnail stored",
            extra={"thumbnail_key": thumbnail_key, "size_bytes": len(thumbnail.data)},
        )

        metadata = await self._blob.get_metadata(bucket, key)
        media = await self._prober.probe(bucket, key)

        fields: dict[str, object] = {
            "fileSize": metadata.size_bytes,
            "duration": media.duration_seconds,
            "thumbnailKey": thumbnail_key,
        }
        if metadata.content_type:
            fields["fileType"] = metadata.content_type

        if await self._store.update_fields(object_key.video_id, fields) is None:
            raise VideoNotFoundException(object_key.video_id)
        self._logger.debug("Video metadata merged", extra=fields)

    async def _transition(
        self,
        video_id: str,
        status: VideoStatus,
        error_message: str | None = None,
    ) -> None:
        if await self._store.set_status(video_id, status, error_message) is None:
            raise VideoNotFoundException(video_id)

    async def _mark_failed(self, video_id: str, error: Exception) -> None:
        message = str(error) or type(error).__name__
        self._logger.error(
            "Video processing failed",
            extra={"error": message, "error_type": type(error).__name__},
        )
        try:
            await self._transition(video_id, VideoStatus.FAILED, message)
        except Exception:
            self._logger.exception("Could not mark video as failed")
