"""Typed access to video records in the document database."""

import re
from typing import Any

from src.commons.infrastructure.documentdb.base import DocumentDBBase
from src.commons.telemetry import get_logger
from src.domain.models.video import (
    VideoRecord,
    VideoStatus,
    format_timestamp,
    utc_now,
)


def timestamp() -> str:
    """Current UTC time in the stored datetime layout."""
    return format_timestamp(utc_now())


def active_filter(search: str | None = None) -> dict[str, Any]:
    """Build the query for listed videos, optionally narrowed by a search term.

    The term matches title or description as a literal, case-insensitive
    substring.
    """
    filters: dict[str, Any] = {"status": VideoStatus.ACTIVE.value}
    term = (search or "").strip()
    if term:
        pattern = {"$regex": re.escape(term), "$options": "i"}
        filters["$or"] = [{"title": pattern}, {"description": pattern}]
    return filters


class VideoRecordStore:
    """Reads and writes `VideoRecord` documents.

    Every method is a single-document operation; concurrent writers to the
    same record resolve last-write-wins per field.
    """

    def __init__(self, document_db: DocumentDBBase, collection: str) -> None:
        self._db = document_db
        self._collection = collection
        self._logger = get_logger(__name__)

    async def put(self, record: VideoRecord) -> VideoRecord:
        """Write a whole record, creating or replacing it."""
        await self._db.replace(self._collection, record.id, record.to_document())
        self._logger.debug(
            "Video record written",
            extra={"video_id": record.id, "status": record.status.value},
        )
        return record

    async def get(self, video_id: str) -> VideoRecord | None:
        document = await self._db.find_by_id(self._collection, video_id)
        if document is None:
            return None
        return VideoRecord.from_document(document)

    async def update_fields(
        self,
        video_id: str,
        set_fields: dict[str, Any],
        unset_fields: list[str] | None = None,
    ) -> VideoRecord | None:
        """Merge stored-layout fields into a record and refresh ``updatedAt``.

        Returns:
            The record after the write, or None if it doesn't exist.
        """
        document = await self._db.update(
            self._collection,
            video_id,
            {**set_fields, "updatedAt": timestamp()},
            unset_fields,
        )
        if document is None:
            return None
        return VideoRecord.from_document(document)

    async def set_status(
        self,
        video_id: str,
        status: VideoStatus,
        error_message: str | None = None,
    ) -> VideoRecord | None:
        """Move a record to a status.

        ``errorMessage`` is written alongside ``failed`` and removed for every
        other status.
        """
        set_fields: dict[str, Any] = {"status": status.value}
        unset_fields: list[str] = []
        if status == VideoStatus.FAILED:
            set_fields["errorMessage"] = error_message or "Processing failed"
        else:
            unset_fields.append("errorMessage")

        record = await self.update_fields(video_id, set_fields, unset_fields)
        if record is not None:
            self._logger.info(
                f"Video status updated to {status.value}",
                extra={"video_id": video_id, "status": status.value},
            )
        return record

    async def increment_views(self, video_id: str) -> VideoRecord | None:
        document = await self._db.increment(
            self._collection,
            video_id,
            "views",
            1,
            set_fields={"updatedAt": timestamp()},
        )
        if document is None:
            return None
        return VideoRecord.from_document(document)

    async def delete(self, video_id: str) -> bool:
        deleted = await self._db.delete(self._collection, video_id)
        if deleted:
            self._logger.info("Video record deleted", extra={"video_id": video_id})
        return deleted

    async def list_active(
        self,
        search: str | None = None,
        skip: int = 0,
        limit: int = 12,
    ) -> list[VideoRecord]:
        """Listed videos, newest upload first."""
        documents = await self._db.find(
            self._collection,
            active_filter(search),
            skip=skip,
            limit=limit,
            sort=[("uploadDate", -1)],
        )
        return [VideoRecord.from_document(doc) for doc in documents]

    async def count_active(self, search: str | None = None) -> int:
        return await self._db.count(self._collection, active_filter(search))

    async def ensure_indexes(self) -> None:
        """Create the index backing the listing query."""
        name = await self._db.create_index(
            self._collection,
            [("status", 1), ("uploadDate", -1)],
            name="status_upload_date",
        )
        self._logger.info("Index ensured", extra={"index": name})
