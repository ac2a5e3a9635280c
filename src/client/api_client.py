"""Async HTTP client for the video sharing API."""

from collections.abc import AsyncIterable
from typing import Any, Self

import httpx

from src.application.dtos.uploads import UploadUrlResponse
from src.application.dtos.videos import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, VideoPage
from src.client.credentials import CredentialProvider, StaticCredentialProvider
from src.commons.settings.models import ClientSettings
from src.commons.telemetry import get_logger
from src.domain.models.video import VideoRecord
from src.domain.value_objects.object_key import thumbnail_key_for


class ApiClientError(Exception):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"{error} ({status_code}): {message}")


class UpstreamUnavailableError(Exception):
    """Raised when the API or the storage endpoint cannot be reached."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not reach {url}: {reason}")


def _raise_for_error(response: httpx.Response) -> None:
    if not response.is_error:
        return
    error = response.reason_phrase or "HTTP error"
    message = response.text
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = str(body.get("error") or error)
        message = str(body.get("message") or message)
    raise ApiClientError(response.status_code, error, message)


class VideoApiClient:
    """Client for the video catalog and upload endpoints.

    Usage:
        async with VideoApiClient("http://localhost:8000") as client:
            page = await client.list_videos(search="cats")
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider | None = None,
        cdn_domain: str = "",
        timeout: float = 30.0,
        upload_timeout: float = 300.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the API.
            credentials: Source of the bearer token. Defaults to no token.
            cdn_domain: Public domain serving videos and thumbnails.
            timeout: Timeout for API requests in seconds.
            upload_timeout: Timeout for the upload PUT in seconds.
            transport: Custom httpx transport (tests).
        """
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials or StaticCredentialProvider()
        self._cdn_base = self._normalize_cdn(cdn_domain)
        self._upload_timeout = httpx.Timeout(upload_timeout)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._logger = get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        credentials: CredentialProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        return cls(
            base_url=settings.api_base_url,
            credentials=credentials,
            cdn_domain=settings.cdn_domain,
            timeout=settings.timeout_seconds,
            upload_timeout=settings.upload_timeout_seconds,
            transport=transport,
        )

    @staticmethod
    def _normalize_cdn(domain: str) -> str:
        domain = domain.rstrip("/")
        if domain and "://" not in domain:
            domain = f"https://{domain}"
        return domain

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = {**self._credentials.auth_headers(), **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(f"{self._base_url}{path}", str(e)) from e
        _raise_for_error(response)
        return response

    # =========================================================================
    # Catalog
    # =========================================================================

    async def list_videos(
        self,
        search: str | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> VideoPage:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        response = await self._request("GET", "/videos", params=params)
        return VideoPage.model_validate(response.json())

    async def get_video(self, video_id: str) -> VideoRecord:
        response = await self._request("GET", f"/videos/{video_id}")
        return VideoRecord.from_document(response.json())

    async def create_video(self, payload: dict[str, Any]) -> VideoRecord:
        response = await self._request("POST", "/videos", json=payload)
        return VideoRecord.from_document(response.json())

    async def update_video(self, video_id: str, fields: dict[str, Any]) -> VideoRecord:
        response = await self._request("PUT", f"/videos/{video_id}", json=fields)
        return VideoRecord.from_document(response.json())

    async def delete_video(self, video_id: str) -> None:
        await self._request("DELETE", f"/videos/{video_id}")

    async def record_view(self, video_id: str) -> VideoRecord:
        response = await self._request("POST", f"/videos/{video_id}/view")
        return VideoRecord.from_document(response.json())

    # =========================================================================
    # Uploads
    # =========================================================================

    async def request_upload_url(self, file_name: str, file_type: str) -> UploadUrlResponse:
        response = await self._request(
            "POST",
            "/upload/signed-url",
            json={"fileName": file_name, "fileType": file_type},
        )
        return UploadUrlResponse.model_validate(response.json())

    async def upload_to_signed_url(
        self,
        upload_url: str,
        content: AsyncIterable[bytes],
        size: int,
        content_type: str,
    ) -> None:
        """Send a file body to a pre-signed URL with a single PUT.

        The URL carries its own signature, so no Authorization header is
        sent. ``Content-Length`` is set up front so the body is not sent
        with chunked transfer encoding, which signed PUTs reject.

        Raises:
            ApiClientError: If storage rejects the upload.
            UpstreamUnavailableError: If storage cannot be reached.
        """
        headers = {"Content-Type": content_type, "Content-Length": str(size)}
        try:
            response = await self._client.put(
                upload_url,
                content=content,
                headers=headers,
                timeout=self._upload_timeout,
            )
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(upload_url.split("?", 1)[0], str(e)) from e
        _raise_for_error(response)
        self._logger.debug("Upload transferred", extra={"size_bytes": size})

    # =========================================================================
    # Public URLs
    # =========================================================================

    def thumbnail_url(self, video_id: str, extension: str = "png") -> str:
        """Public URL of a video's thumbnail."""
        return f"{self._cdn_base}/{thumbnail_key_for(video_id, extension)}"

    def video_url(self, record: VideoRecord) -> str:
        """Public URL of a video's source file."""
        return f"{self._cdn_base}/{record.storage_key}"
