"""Video catalog service: browse, search and administer video records."""

from typing import Any

from pydantic import ValidationError

from src.application.dtos.videos import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    VideoPage,
)
from src.application.services.records import VideoRecordStore
from src.commons.telemetry import get_logger
from src.domain.exceptions import RecordValidationException, VideoNotFoundException
from src.domain.models.video import MUTABLE_FIELDS, VideoRecord, VideoStatus, utc_now

# Fields the server owns on creation; client values are overwritten
_SERVER_ASSIGNED = ("status", "views", "errorMessage", "uploadDate", "createdAt", "updatedAt")


def _invalid(error: ValidationError) -> RecordValidationException:
    """Turn the first pydantic error into a domain validation error."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    message = str(first["msg"])
    if field:
        message = f"{field}: {message}"
    return RecordValidationException(message, field=field)


class VideoCatalogService:
    """CRUD and listing over video records.

    Only ``active`` records are listed; single-record reads, updates and
    deletes reach records in any status.
    """

    def __init__(self, store: VideoRecordStore) -> None:
        self._store = store
        self._logger = get_logger(__name__)

    async def list_videos(
        self,
        search: str | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> VideoPage:
        """Return one page of active videos, newest upload first.

        Args:
            search: Case-insensitive substring matched against title or
                description. Blank means no filter.
            page: 1-based page number.
            limit: Page size.

        Raises:
            RecordValidationException: If page or limit is out of range.
        """
        if page < 1:
            raise RecordValidationException("page must be at least 1", field="page")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise RecordValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )

        total = await self._store.count_active(search)
        videos = await self._store.list_active(
            search, skip=(page - 1) * limit, limit=limit
        )
        self._logger.debug(
            "Listed videos",
            extra={"search": search, "page": page, "returned": len(videos), "total": total},
        )
        return VideoPage(
            videos=videos,
            total=total,
            page=page,
            limit=limit,
            has_more=page * limit < total,
        )

    async def get_video(self, video_id: str) -> VideoRecord:
        record = await self._store.get(video_id)
        if record is None:
            raise VideoNotFoundException(video_id)
        return record

    async def create_video(self, payload: dict[str, Any]) -> VideoRecord:
        """Create a listed video directly, bypassing the upload flow.

        The record starts ``active`` with zero views. An ``id`` is assigned
        unless the payload carries one.

        Raises:
            RecordValidationException: If the title is missing, a value is
                malformed, or the id is already taken.
        """
        title = payload.get("title")
        if not isinstance(title, str) or not title.strip():
            raise RecordValidationException("title is required", field="title")

        data = {k: v for k, v in payload.items() if k not in _SERVER_ASSIGNED}
        if not data.get("id"):
            data.pop("id", None)
        now = utc_now()
        data.update(
            status=VideoStatus.ACTIVE,
            views=0,
            uploadDate=now,
            createdAt=now,
            updatedAt=now,
        )
        try:
            record = VideoRecord.model_validate(data)
        except ValidationError as e:
            raise _invalid(e) from e

        if await self._store.get(record.id) is not None:
            raise RecordValidationException(
                f"Video already exists: {record.id}", field="id"
            )

        await self._store.put(record)
        self._logger.info(
            "Video created",
            extra={"video_id": record.id, "title": record.title},
        )
        return record

    async def update_video(self, video_id: str, fields: dict[str, Any]) -> VideoRecord:
        """Merge a partial update into a record.

        Only fields in ``MUTABLE_FIELDS`` may be set. Setting ``status`` to
        ``failed`` needs an ``errorMessage``; any other status clears it.

        Raises:
            RecordValidationException: On unknown, immutable or malformed fields.
            VideoNotFoundException: If the record does not exist.
        """
        rejected = sorted(set(fields) - MUTABLE_FIELDS)
        if rejected:
            raise RecordValidationException(
                f"Fields cannot be updated: {', '.join(rejected)}",
                field=rejected[0],
            )

        current = await self._store.get(video_id)
        if current is None:
            raise VideoNotFoundException(video_id)

        changes = dict(fields)
        unset_fields: list[str] = []
        if "errorMessage" in changes and not changes["errorMessage"]:
            del changes["errorMessage"]

        if "status" in changes:
            if changes["status"] == VideoStatus.FAILED.value:
                if not (changes.get("errorMessage") or current.error_message):
                    raise RecordValidationException(
                        "errorMessage is required when status is failed",
                        field="errorMessage",
                    )
            else:
                changes.pop("errorMessage", None)
                unset_fields.append("errorMessage")

        merged = {**current.to_document(), **changes}
        for name in unset_fields:
            merged.pop(name, None)
        try:
            validated = VideoRecord.model_validate(merged).to_document()
        except ValidationError as e:
            raise _invalid(e) from e

        set_fields = {name: validated[name] for name in changes if name in validated}
        updated = await self._store.update_fields(
            video_id, set_fields, unset_fields or None
        )
        if updated is None:
            raise VideoNotFoundException(video_id)

        self._logger.info(
            "Video updated",
            extra={"video_id": video_id, "fields": sorted(set_fields)},
        )
        return updated

    async def delete_video(self, video_id: str) -> None:
        """Remove a record. Stored objects are left in place."""
        if not await self._store.delete(video_id):
            raise VideoNotFoundException(video_id)

    async def record_view(self, video_id: str) -> VideoRecord:
        """Count one view."""
        record = await self._store.increment_views(video_id)
        if record is None:
            raise VideoNotFoundException(video_id)
        return record
