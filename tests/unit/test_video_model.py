"""Unit tests for the video record model."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.domain.models.video import (
    MUTABLE_FIELDS,
    STATUS_TRANSITIONS,
    VideoRecord,
    VideoStatus,
    format_timestamp,
    utc_now,
)


class TestVideoStatus:
    """Tests for VideoStatus enum and transition graph."""

    def test_status_values(self):
        assert VideoStatus.UPLOADING.value == "uploading"
        assert VideoStatus.PROCESSING.value == "processing"
        assert VideoStatus.ACTIVE.value == "active"
        assert VideoStatus.FAILED.value == "failed"

    def test_every_status_has_edges(self):
        assert set(STATUS_TRANSITIONS) == set(VideoStatus)

    def test_processing_ends_in_active_or_failed(self):
        assert STATUS_TRANSITIONS[VideoStatus.PROCESSING] == {
            VideoStatus.ACTIVE,
            VideoStatus.FAILED,
        }

    def test_active_is_final(self):
        assert not STATUS_TRANSITIONS[VideoStatus.ACTIVE]

    def test_failed_can_be_retried(self):
        assert STATUS_TRANSITIONS[VideoStatus.FAILED] == {VideoStatus.PROCESSING}


class TestVideoRecord:
    """Tests for VideoRecord model."""

    def test_defaults(self):
        record = VideoRecord(title="Clip")

        assert len(record.id) == 36
        assert record.status == VideoStatus.UPLOADING
        assert record.views == 0
        assert record.file_size == 0
        assert record.duration == 0
        assert record.tags == []
        assert record.error_message is None
        assert record.upload_date.tzinfo is not None

    def test_ids_are_unique(self):
        assert VideoRecord().id != VideoRecord().id

    def test_to_document_uses_camel_case(self):
        record = VideoRecord(
            title="Clip",
            file_name="clip.mp4",
            storage_key="videos/x.mp4",
            file_size=10,
        )

        document = record.to_document()

        assert document["fileName"] == "clip.mp4"
        assert document["storageKey"] == "videos/x.mp4"
        assert document["fileSize"] == 10
        assert document["status"] == "uploading"
        assert isinstance(document["uploadDate"], str)
        assert "errorMessage" not in document
        assert "thumbnailKey" not in document

    def test_timestamps_are_fixed_width(self):
        whole_second = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
        record = VideoRecord(
            upload_date=whole_second,
            created_at=whole_second,
            updated_at=whole_second,
        )

        document = record.to_document()

        assert document["uploadDate"] == "2024-05-01T12:00:00.000000Z"
        assert document["uploadDate"] < format_timestamp(
            whole_second + timedelta(microseconds=500000)
        )

    def test_format_timestamp_normalizes_to_utc(self):
        offset = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

        assert format_timestamp(offset) == "2024-05-01T12:30:00.000000Z"
        assert format_timestamp(datetime(2024, 5, 1)) == "2024-05-01T00:00:00.000000Z"

    def test_from_document_round_trip(self):
        record = VideoRecord(title="Clip", tags=["a", "b"], thumbnail_key="thumbnails/x.png")

        restored = VideoRecord.from_document(record.to_document())

        assert restored == record

    def test_accepts_snake_case_names(self):
        record = VideoRecord(file_name="clip.mp4")
        assert record.file_name == "clip.mp4"

    def test_failed_requires_error_message(self):
        with pytest.raises(ValidationError):
            VideoRecord(status=VideoStatus.FAILED)

        record = VideoRecord(status=VideoStatus.FAILED, error_message="decode error")
        assert record.error_message == "decode error"

    def test_error_message_only_when_failed(self):
        with pytest.raises(ValidationError):
            VideoRecord(status=VideoStatus.ACTIVE, error_message="stale")

    def test_updated_at_not_before_created_at(self):
        now = utc_now()
        with pytest.raises(ValidationError):
            VideoRecord(created_at=now, updated_at=now - timedelta(seconds=1))

    def test_negative_views_rejected(self):
        with pytest.raises(ValidationError):
            VideoRecord(views=-1)

    def test_is_terminal(self):
        assert not VideoRecord(status=VideoStatus.UPLOADING).is_terminal
        assert not VideoRecord(status=VideoStatus.PROCESSING).is_terminal
        assert VideoRecord(status=VideoStatus.ACTIVE).is_terminal
        assert not VideoRecord(status=VideoStatus.FAILED, error_message="x").is_terminal

    def test_can_transition_to(self):
        record = VideoRecord(status=VideoStatus.UPLOADING)
        assert record.can_transition_to(VideoStatus.PROCESSING)
        assert not record.can_transition_to(VideoStatus.ACTIVE)


class TestMutableFields:
    """Tests for the update allow-list."""

    def test_identity_and_storage_fields_are_immutable(self):
        for name in ("id", "fileName", "storageKey", "fileType", "createdAt", "uploadDate"):
            assert name not in MUTABLE_FIELDS

    def test_allow_list_uses_wire_names(self):
        assert "fileSize" in MUTABLE_FIELDS
        assert "errorMessage" in MUTABLE_FIELDS
        assert "file_size" not in MUTABLE_FIELDS
