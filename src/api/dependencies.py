"""FastAPI dependency injection for services and settings."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.application.services.catalog import VideoCatalogService
from src.application.services.processing import VideoProcessingService
from src.application.services.records import VideoRecordStore
from src.application.services.uploads import UploadUrlService
from src.commons.settings.loader import get_settings as _load_settings
from src.commons.settings.models import Settings
from src.infrastructure.factory import (
    InfrastructureFactory,
    get_factory,
    reset_factory,
)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Application settings loaded from config files and environment.
    """
    return _load_settings()


def get_infrastructure_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> InfrastructureFactory:
    """Get infrastructure factory with all providers.

    Args:
        settings: Application settings.

    Returns:
        Configured infrastructure factory.
    """
    return get_factory(settings)


def get_record_store(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VideoRecordStore:
    """Get the video record store over the configured document database."""
    return VideoRecordStore(
        document_db=factory.get_document_db(),
        collection=settings.document_db.collections.videos,
    )


def get_catalog_service(
    store: Annotated[VideoRecordStore, Depends(get_record_store)],
) -> VideoCatalogService:
    return VideoCatalogService(store)


def get_upload_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    store: Annotated[VideoRecordStore, Depends(get_record_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadUrlService:
    return UploadUrlService(
        blob_storage=factory.get_blob_storage(),
        store=store,
        blob_settings=settings.blob_storage,
    )


def get_processing_service(
    factory: Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)],
    store: Annotated[VideoRecordStore, Depends(get_record_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VideoProcessingService:
    """Get the post-upload processing service with all dependencies.

    Args:
        factory: Infrastructure factory.
        store: Video record store.
        settings: Application settings.

    Returns:
        Configured processing service.
    """
    return VideoProcessingService(
        blob_storage=factory.get_blob_storage(),
        store=store,
        thumbnail_generator=factory.get_thumbnail_generator(),
        media_prober=factory.get_media_prober(),
        blob_settings=settings.blob_storage,
    )


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
FactoryDep = Annotated[InfrastructureFactory, Depends(get_infrastructure_factory)]
CatalogServiceDep = Annotated[VideoCatalogService, Depends(get_catalog_service)]
UploadServiceDep = Annotated[UploadUrlService, Depends(get_upload_service)]
ProcessingServiceDep = Annotated[
    VideoProcessingService, Depends(get_processing_service)
]


async def init_services(settings: Settings) -> None:
    """Initialize all infrastructure services on startup.

    Args:
        settings: Application settings.
    """
    # Initialize factory with settings
    factory = get_factory(settings)

    # Pre-initialize critical services to fail fast
    factory.get_blob_storage()
    factory.get_document_db()


async def shutdown_services() -> None:
    """Shutdown all infrastructure services."""
    try:
        factory = get_factory()
        await factory.close_all()
    except ValueError:
        pass  # Factory not initialized
    finally:
        reset_factory()
        get_settings.cache_clear()
