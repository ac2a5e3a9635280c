"""Pydantic settings models for application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseModel):
    """Application-level settings."""

    name: str = "video-share-server"
    version: str = "0.1.0"
    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1, le=32)
    reload: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    cors_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    cors_headers: list[str] = Field(
        default_factory=lambda: ["Content-Type", "Authorization"]
    )
    api_prefix: str = ""
    docs_enabled: bool = True


class BucketSettings(BaseModel):
    """Bucket name configuration."""

    videos: str = "video-share-videos"
    thumbnails: str = "video-share-thumbnails"


class BlobStorageSettings(BaseModel):
    """Object storage settings (MinIO/S3)."""

    provider: Literal["minio", "s3"] = "minio"
    endpoint: str = "localhost:9000"
    access_key: str = ""
    secret_key: str = ""
    use_ssl: bool = False
    region: str = "us-east-1"
    buckets: BucketSettings = Field(default_factory=BucketSettings)
    upload_url_expiry_seconds: int = Field(default=300, ge=1, le=604800)
    video_prefix: str = "videos"
    thumbnail_prefix: str = "thumbnails"


class DocumentCollectionSettings(BaseModel):
    """Document DB collection names."""

    videos: str = "videos"


class DocumentDBSettings(BaseModel):
    """Document database settings (MongoDB)."""

    provider: Literal["mongodb"] = "mongodb"
    host: str = "localhost"
    port: int = 27017
    username: str = ""
    password: str = ""
    database: str = "video_share"
    auth_source: str = "admin"
    collections: DocumentCollectionSettings = Field(
        default_factory=DocumentCollectionSettings
    )


class ThumbnailSettings(BaseModel):
    """Derived thumbnail configuration."""

    width: int = Field(default=640, ge=16, le=3840)
    height: int = Field(default=360, ge=16, le=2160)
    # RGB background of the placeholder image
    background: tuple[int, int, int] = (52, 152, 219)
    format: Literal["png", "jpg"] = "png"
    capture_at_seconds: float = Field(default=1.0, ge=0)


class ProcessingSettings(BaseModel):
    """Post-upload processing settings."""

    analyzer: Literal["placeholder", "ffmpeg"] = "placeholder"
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    thumbnail: ThumbnailSettings = Field(default_factory=ThumbnailSettings)


class ClientSettings(BaseModel):
    """Settings for the Python API client and upload orchestrator."""

    api_base_url: str = "http://localhost:8000"
    cdn_domain: str = ""
    timeout_seconds: float = Field(default=30.0, gt=0)
    upload_timeout_seconds: float = Field(default=300.0, gt=0)
    chunk_size: int = Field(default=1024 * 1024, ge=1024)


class TelemetrySettings(BaseModel):
    """Logging settings."""

    log_format: Literal["json", "text"] = "json"
    log_level: str = "INFO"


class Settings(BaseSettings):
    """Root settings container with environment loading."""

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    blob_storage: BlobStorageSettings = Field(default_factory=BlobStorageSettings)
    document_db: DocumentDBSettings = Field(default_factory=DocumentDBSettings)
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VIDEOSHARE__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
