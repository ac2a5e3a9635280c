"""Unit tests for upload URL issuance."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.services.uploads import UploadUrlService
from src.commons.infrastructure.blob.base import BlobWriteError
from src.commons.settings.models import BlobStorageSettings
from src.domain.exceptions import RecordValidationException
from src.domain.models.video import VideoStatus


@pytest.fixture
def blob_storage():
    storage = MagicMock()
    storage.generate_presigned_url = AsyncMock(
        return_value="http://localhost:9000/video-share-videos/videos/x.mp4?X-Amz-Signature=abc"
    )
    return storage


@pytest.fixture
def service(blob_storage, record_store):
    return UploadUrlService(blob_storage, record_store, BlobStorageSettings())


class TestUploadUrlService:
    """Tests for UploadUrlService."""

    async def test_issue_upload_url(self, service, blob_storage, record_store):
        response = await service.issue_upload_url("holiday.mp4", "video/mp4")

        assert response.s3_key == f"videos/{response.video_id}.mp4"
        assert response.upload_url.startswith("http://localhost:9000/")
        blob_storage.generate_presigned_url.assert_awaited_once_with(
            "video-share-videos",
            response.s3_key,
            expiry_seconds=300,
            method="PUT",
            content_type="video/mp4",
        )

        record = await record_store.get(response.video_id)
        assert record.status == VideoStatus.UPLOADING
        assert record.file_name == "holiday.mp4"
        assert record.file_type == "video/mp4"
        assert record.storage_key == response.s3_key
        assert record.views == 0

    async def test_each_call_reserves_a_new_id(self, service):
        first = await service.issue_upload_url("a.mp4", "video/mp4")
        second = await service.issue_upload_url("a.mp4", "video/mp4")

        assert first.video_id != second.video_id

    async def test_response_wire_names(self, service):
        response = await service.issue_upload_url("a.webm", "video/webm")

        data = response.model_dump(by_alias=True)
        assert set(data) == {"uploadUrl", "videoId", "s3Key"}

    async def test_file_name_without_extension(self, service, document_db):
        with pytest.raises(RecordValidationException):
            await service.issue_upload_url("README", "video/mp4")

        assert document_db.collections.get("videos", {}) == {}

    async def test_signing_failure_writes_no_record(
        self, service, blob_storage, document_db
    ):
        blob_storage.generate_presigned_url.side_effect = BlobWriteError(
            "video-share-videos", "videos/x.mp4", "credentials missing"
        )

        with pytest.raises(BlobWriteError):
            await service.issue_upload_url("a.mp4", "video/mp4")

        assert document_db.collections.get("videos", {}) == {}

    async def test_custom_bucket_and_prefix(self, blob_storage, record_store):
        settings = BlobStorageSettings(video_prefix="uploads", upload_url_expiry_seconds=60)
        settings.buckets.videos = "media"
        service = UploadUrlService(blob_storage, record_store, settings)

        response = await service.issue_upload_url("a.mov", "video/quicktime")

        assert response.s3_key.startswith("uploads/")
        args, kwargs = blob_storage.generate_presigned_url.call_args
        assert args[0] == "media"
        assert kwargs["expiry_seconds"] == 60
