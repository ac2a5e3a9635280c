"""Infrastructure factory for creating service instances from configuration."""

from typing import Any, cast

from src.commons.infrastructure.blob import (
    BlobStorageBase,
    MinioBlobStorage,
    S3BlobStorage,
)
from src.commons.infrastructure.documentdb import DocumentDBBase, MongoDBDocumentDB
from src.commons.settings.models import Settings
from src.commons.telemetry import get_logger
from src.infrastructure.media import (
    FFmpegThumbnailGenerator,
    FFprobeMediaProber,
    MediaProberBase,
    PlaceholderMediaProber,
    PlaceholderThumbnailGenerator,
    ThumbnailGeneratorBase,
)

logger = get_logger(__name__)


class InfrastructureFactory:
    """Factory for creating infrastructure service instances.

    Creates concrete implementations based on configuration settings.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize factory with settings.

        Args:
            settings: Application settings.
        """
        self._settings = settings
        self._instances: dict[str, Any] = {}

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_blob_storage(self) -> BlobStorageBase:
        """Get blob storage instance.

        Returns:
            Configured blob storage provider.

        Raises:
            ValueError: If provider is not supported.
        """
        if "blob_storage" not in self._instances:
            blob_settings = self._settings.blob_storage
            provider = blob_settings.provider

            if provider == "minio":
                self._instances["blob_storage"] = MinioBlobStorage(
                    endpoint=blob_settings.endpoint,
                    access_key=blob_settings.access_key,
                    secret_key=blob_settings.secret_key,
                    secure=blob_settings.use_ssl,
                    region=blob_settings.region,
                )
            elif provider == "s3":
                scheme = "https" if blob_settings.use_ssl else "http"
                self._instances["blob_storage"] = S3BlobStorage(
                    region=blob_settings.region,
                    access_key=blob_settings.access_key or None,
                    secret_key=blob_settings.secret_key or None,
                    # Empty endpoint means the regional AWS endpoint
                    endpoint_url=(
                        f"{scheme}://{blob_settings.endpoint}"
                        if blob_settings.endpoint
                        else None
                    ),
                )
            else:
                raise ValueError(f"Unsupported blob storage provider: {provider}")

        return cast("BlobStorageBase", self._instances["blob_storage"])

    def get_document_db(self) -> DocumentDBBase:
        """Get document database instance.

        Returns:
            Configured document database provider.
        """
        if "document_db" not in self._instances:
            doc_settings = self._settings.document_db
            # Build connection string from settings
            if doc_settings.username and doc_settings.password:
                connection_string = (
                    f"mongodb://{doc_settings.username}:{doc_settings.password}"
                    f"@{doc_settings.host}:{doc_settings.port}"
                    f"/?authSource={doc_settings.auth_source}"
                )
            else:
                connection_string = f"mongodb://{doc_settings.host}:{doc_settings.port}"
            self._instances["document_db"] = MongoDBDocumentDB(
                connection_string=connection_string,
                database_name=doc_settings.database,
            )
        return cast("DocumentDBBase", self._instances["document_db"])

    def get_thumbnail_generator(self) -> ThumbnailGeneratorBase:
        """Get thumbnail generator instance.

        Returns:
            Placeholder or ffmpeg generator, depending on ``processing.analyzer``.
        """
        if "thumbnail_generator" not in self._instances:
            processing = self._settings.processing
            thumb = processing.thumbnail

            if processing.analyzer == "ffmpeg":
                self._instances["thumbnail_generator"] = FFmpegThumbnailGenerator(
                    blob_storage=self.get_blob_storage(),
                    ffmpeg_path=processing.ffmpeg_path,
                    width=thumb.width,
                    height=thumb.height,
                    format=thumb.format,
                    capture_at_seconds=thumb.capture_at_seconds,
                    url_expiry_seconds=self._settings.blob_storage.upload_url_expiry_seconds,
                )
            else:
                self._instances["thumbnail_generator"] = PlaceholderThumbnailGenerator(
                    width=thumb.width,
                    height=thumb.height,
                    background=thumb.background,
                    format=thumb.format,
                )
        return cast("ThumbnailGeneratorBase", self._instances["thumbnail_generator"])

    def get_media_prober(self) -> MediaProberBase:
        """Get media prober instance.

        Returns:
            Placeholder or ffprobe prober, depending on ``processing.analyzer``.
        """
        if "media_prober" not in self._instances:
            processing = self._settings.processing

            if processing.analyzer == "ffmpeg":
                self._instances["media_prober"] = FFprobeMediaProber(
                    blob_storage=self.get_blob_storage(),
                    ffprobe_path=processing.ffprobe_path,
                    url_expiry_seconds=self._settings.blob_storage.upload_url_expiry_seconds,
                )
            else:
                self._instances["media_prober"] = PlaceholderMediaProber()
        return cast("MediaProberBase", self._instances["media_prober"])

    async def close_all(self) -> None:
        """Close all service connections."""
        for name, instance in self._instances.items():
            if not hasattr(instance, "close"):
                continue
            try:
                close_result = instance.close()
                if hasattr(close_result, "__await__"):
                    await close_result
            except Exception as e:
                logger.warning(f"Failed to close {name}: {e}")

        self._instances.clear()


class _FactoryHolder:
    """Holder for the factory singleton to avoid global statements."""

    instance: InfrastructureFactory | None = None


def get_factory(settings: Settings | None = None) -> InfrastructureFactory:
    """Get or create the infrastructure factory singleton.

    Args:
        settings: Settings to use. Required on first call.

    Returns:
        Infrastructure factory instance.

    Raises:
        ValueError: If settings not provided on first call.
    """
    if _FactoryHolder.instance is None:
        if settings is None:
            raise ValueError("Settings required to initialize factory")
        _FactoryHolder.instance = InfrastructureFactory(settings)

    return _FactoryHolder.instance


def reset_factory() -> None:
    """Reset the factory singleton (for testing)."""
    _FactoryHolder.instance = None
