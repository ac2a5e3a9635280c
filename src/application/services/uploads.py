"""Issues pre-signed upload URLs and the placeholder records behind them."""

from uuid import uuid4

from src.application.dtos.uploads import UploadUrlResponse
from src.application.services.records import VideoRecordStore
from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.settings.models import BlobStorageSettings
from src.commons.telemetry import LogContext, get_logger
from src.domain.models.video import VideoRecord, VideoStatus
from src.domain.value_objects.object_key import VideoObjectKey


class UploadUrlService:
    """Starts the upload flow for a new video.

    The client receives a URL it can PUT the file to directly; the record is
    created in ``uploading`` so the processing worker finds it when the
    object lands.
    """

    def __init__(
        self,
        blob_storage: BlobStorageBase,
        store: VideoRecordStore,
        blob_settings: BlobStorageSettings,
    ) -> None:
        self._blob = blob_storage
        self._store = store
        self._videos_bucket = blob_settings.buckets.videos
        self._video_prefix = blob_settings.video_prefix
        self._expiry = blob_settings.upload_url_expiry_seconds
        self._logger = get_logger(__name__)

    async def issue_upload_url(self, file_name: str, file_type: str) -> UploadUrlResponse:
        """Reserve an id, sign an upload URL and write the placeholder record.

        Args:
            file_name: Client file name; its last extension names the object.
            file_type: MIME type the client will upload with.

        Raises:
            RecordValidationException: If the file name has no extension.
            BlobStorageError: If the URL cannot be signed.
        """
        video_id = str(uuid4())
        object_key = VideoObjectKey.for_upload(video_id, file_name, self._video_prefix)
        key = str(object_key)

        with LogContext(video_id=video_id):
            upload_url = await self._blob.generate_presigned_url(
                self._videos_bucket,
                key,
                expiry_seconds=self._expiry,
                method="PUT",
                content_type=file_type,
            )

            record = VideoRecord(
                id=video_id,
                file_name=file_name,
                storage_key=key,
                file_type=file_type,
                status=VideoStatus.UPLOADING,
            )
            await self._store.put(record)

            self._logger.info(
                "Upload URL issued",
                extra={"object_key": key, "expires_in": self._expiry},
            )

        return UploadUrlResponse(upload_url=upload_url, video_id=video_id, s3_key=key)
