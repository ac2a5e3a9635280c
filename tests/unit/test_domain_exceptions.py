"""Unit tests for domain exceptions."""

from src.domain.exceptions import (
    DomainException,
    InvalidStatusTransitionException,
    MalformedObjectKeyException,
    RecordValidationException,
    VideoNotFoundException,
)
from src.domain.models.video import VideoStatus


class TestDomainException:
    """Tests for base DomainException."""

    def test_is_exception(self):
        exc = DomainException("Test error")
        assert isinstance(exc, Exception)

    def test_message(self):
        exc = DomainException("Custom message")
        assert str(exc) == "Custom message"


class TestVideoNotFoundException:
    """Tests for VideoNotFoundException."""

    def test_attributes(self):
        exc = VideoNotFoundException("video-123")
        assert exc.video_id == "video-123"
        assert "video-123" in str(exc)
        assert isinstance(exc, DomainException)


class TestRecordValidationException:
    """Tests for RecordValidationException."""

    def test_attributes(self):
        exc = RecordValidationException("Title is required", field="title")
        assert exc.field == "title"
        assert str(exc) == "Title is required"
        assert isinstance(exc, DomainException)

    def test_field_is_optional(self):
        assert RecordValidationException("bad").field is None


class TestMalformedObjectKeyException:
    """Tests for MalformedObjectKeyException."""

    def test_attributes(self):
        exc = MalformedObjectKeyException("videos/abc", "Missing extension")
        assert exc.key == "videos/abc"
        assert exc.reason == "Missing extension"
        assert "videos/abc" in str(exc)
        assert "Missing extension" in str(exc)


class TestInvalidStatusTransitionException:
    """Tests for InvalidStatusTransitionException."""

    def test_attributes(self):
        exc = InvalidStatusTransitionException(
            "video-1", VideoStatus.ACTIVE, VideoStatus.PROCESSING
        )
        assert exc.video_id == "video-1"
        assert exc.current == VideoStatus.ACTIVE
        assert exc.target == VideoStatus.PROCESSING
        assert "active" in str(exc)
        assert "processing" in str(exc)
