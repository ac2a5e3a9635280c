"""Settings management module."""

from src.commons.settings.loader import SettingsLoader, get_settings, reset_settings
from src.commons.settings.models import (
    AppSettings,
    BlobStorageSettings,
    BucketSettings,
    ClientSettings,
    DocumentCollectionSettings,
    DocumentDBSettings,
    ProcessingSettings,
    ServerSettings,
    Settings,
    TelemetrySettings,
    ThumbnailSettings,
)

__all__ = [
    # Loader
    "SettingsLoader",
    "get_settings",
    "reset_settings",
    # Main settings
    "Settings",
    "AppSettings",
    "ServerSettings",
    # Storage
    "BlobStorageSettings",
    "BucketSettings",
    "DocumentDBSettings",
    "DocumentCollectionSettings",
    # Processing
    "ProcessingSettings",
    "ThumbnailSettings",
    # Client & telemetry
    "ClientSettings",
    "TelemetrySettings",
]
