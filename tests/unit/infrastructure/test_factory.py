"""Unit tests for infrastructure factory."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.commons.settings.models import Settings
from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)
from src.infrastructure.media import (
    FFmpegThumbnailGenerator,
    FFprobeMediaProber,
    PlaceholderMediaProber,
    PlaceholderThumbnailGenerator,
)


@pytest.fixture(autouse=True)
def reset_factory_before_each():
    """Reset factory singleton before each test."""
    reset_factory()
    yield
    reset_factory()


@pytest.fixture
def settings():
    """Create settings for a local MinIO + MongoDB stack."""
    settings = Settings()
    settings.blob_storage.endpoint = "localhost:9000"
    settings.blob_storage.access_key = "minioadmin"
    settings.blob_storage.secret_key = "minioadmin"
    settings.document_db.database = "test_db"
    return settings


class TestInfrastructureFactory:
    """Tests for InfrastructureFactory."""

    def test_factory_init(self, settings):
        """Test factory initialization."""
        factory = InfrastructureFactory(settings)
        assert factory.settings is settings
        assert factory._instances == {}

    @patch("src.infrastructure.factory.MinioBlobStorage")
    def test_get_blob_storage_minio(self, mock_minio_class, settings):
        """Test getting MinIO blob storage."""
        mock_instance = MagicMock()
        mock_minio_class.return_value = mock_instance

        factory = InfrastructureFactory(settings)
        blob = factory.get_blob_storage()

        assert blob is mock_instance
        assert factory.get_blob_storage() is blob
        mock_minio_class.assert_called_once_with(
            endpoint="localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
            secure=False,
            region="us-east-1",
        )

    @patch("src.infrastructure.factory.S3BlobStorage")
    def test_get_blob_storage_s3_regional(self, mock_s3_class, settings):
        """Test S3 without an endpoint uses the regional AWS endpoint."""
        settings.blob_storage.provider = "s3"
        settings.blob_storage.endpoint = ""
        settings.blob_storage.access_key = ""
        settings.blob_storage.secret_key = ""

        InfrastructureFactory(settings).get_blob_storage()

        mock_s3_class.assert_called_once_with(
            region="us-east-1",
            access_key=None,
            secret_key=None,
            endpoint_url=None,
        )

    @patch("src.infrastructure.factory.S3BlobStorage")
    def test_get_blob_storage_s3_custom_endpoint(self, mock_s3_class, settings):
        settings.blob_storage.provider = "s3"
        settings.blob_storage.use_ssl = True

        InfrastructureFactory(settings).get_blob_storage()

        assert (
            mock_s3_class.call_args.kwargs["endpoint_url"] == "https://localhost:9000"
        )

    def test_unsupported_blob_provider(self, settings):
        settings.blob_storage.provider = "gcs"  # type: ignore[assignment]

        with pytest.raises(ValueError, match="Unsupported blob storage provider"):
            InfrastructureFactory(settings).get_blob_storage()

    @patch("src.infrastructure.factory.MongoDBDocumentDB")
    def test_get_document_db_without_auth(self, mock_mongo_class, settings):
        """Test getting document database without authentication."""
        mock_instance = MagicMock()
        mock_mongo_class.return_value = mock_instance

        factory = InfrastructureFactory(settings)
        doc_db = factory.get_document_db()

        assert doc_db is mock_instance
        mock_mongo_class.assert_called_once_with(
            connection_string="mongodb://localhost:27017",
            database_name="test_db",
        )

    @patch("src.infrastructure.factory.MongoDBDocumentDB")
    def test_get_document_db_with_auth(self, mock_mongo_class, settings):
        """Test getting document database with authentication."""
        settings.document_db.username = "user"
        settings.document_db.password = "pass"

        InfrastructureFactory(settings).get_document_db()

        call_args = mock_mongo_class.call_args
        assert "user:pass" in call_args.kwargs["connection_string"]
        assert "authSource=admin" in call_args.kwargs["connection_string"]

    def test_placeholder_analyzer_by_default(self, settings):
        factory = InfrastructureFactory(settings)

        generator = factory.get_thumbnail_generator()

        assert isinstance(generator, PlaceholderThumbnailGenerator)
        assert isinstance(factory.get_media_prober(), PlaceholderMediaProber)
        assert factory.get_thumbnail_generator() is generator

    @patch("src.infrastructure.factory.MinioBlobStorage")
    def test_ffmpeg_analyzer(self, mock_minio_class, settings):
        settings.processing.analyzer = "ffmpeg"
        settings.processing.thumbnail.format = "jpg"
        factory = InfrastructureFactory(settings)

        generator = factory.get_thumbnail_generator()

        assert isinstance(generator, FFmpegThumbnailGenerator)
        assert generator.extension == "jpg"
        assert isinstance(factory.get_media_prober(), FFprobeMediaProber)
        mock_minio_class.assert_called_once()

    @patch("src.infrastructure.factory.MongoDBDocumentDB")
    async def test_close_all(self, mock_mongo_class, settings):
        """Test closing all connections."""
        mock_instance = MagicMock()
        mock_instance.close = AsyncMock()
        mock_mongo_class.return_value = mock_instance

        factory = InfrastructureFactory(settings)
        factory.get_document_db()

        await factory.close_all()

        mock_instance.close.assert_awaited_once()
        assert factory._instances == {}

    @patch("src.infrastructure.factory.MongoDBDocumentDB")
    async def test_close_all_tolerates_failures(self, mock_mongo_class, settings):
        mock_instance = MagicMock()
        mock_instance.close = AsyncMock(side_effect=RuntimeError("already closed"))
        mock_mongo_class.return_value = mock_instance

        factory = InfrastructureFactory(settings)
        factory.get_document_db()

        await factory.close_all()

        assert factory._instances == {}


class TestGetFactory:
    """Tests for get_factory singleton."""

    def test_get_factory_requires_settings_first_call(self):
        """Test that get_factory requires settings on first call."""
        with pytest.raises(ValueError, match="Settings required"):
            get_factory()

    def test_get_factory_returns_singleton(self, settings):
        """Test that get_factory returns same instance."""
        factory1 = get_factory(settings)
        factory2 = get_factory()

        assert factory1 is factory2

    def test_reset_factory(self, settings):
        """Test that reset_factory clears singleton."""
        factory1 = get_factory(settings)
        reset_factory()
        factory2 = get_factory(settings)

        assert factory1 is not factory2
