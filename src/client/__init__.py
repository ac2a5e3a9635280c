"""Python client for the video sharing API."""

from src.client.api_client import (
    ApiClientError,
    UpstreamUnavailableError,
    VideoApiClient,
)
from src.client.credentials import (
    CredentialProvider,
    EnvironmentCredentialProvider,
    StaticCredentialProvider,
)
from src.client.upload import (
    ProgressCallback,
    ProgressReporter,
    UploadOrchestrator,
    UploadResult,
)

__all__ = [
    # HTTP client
    "VideoApiClient",
    "ApiClientError",
    "UpstreamUnavailableError",
    # Credentials
    "CredentialProvider",
    "StaticCredentialProvider",
    "EnvironmentCredentialProvider",
    # Upload flow
    "UploadOrchestrator",
    "UploadResult",
    "ProgressCallback",
    "ProgressReporter",
]
