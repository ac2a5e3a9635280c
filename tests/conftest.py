"""Shared fixtures: an in-memory document database and record helpers."""

import copy
import re
from datetime import timedelta
from typing import Any
from uuid import uuid4

import pytest

from src.application.services.records import VideoRecordStore
from src.commons.infrastructure.blob.base import HealthStatus
from src.commons.infrastructure.documentdb.base import DocumentDBBase
from src.domain.models.video import VideoRecord, VideoStatus, utc_now


class InMemoryDocumentDB(DocumentDBBase):
    """Dict-backed document store understanding the query subset the app uses:
    equality, ``$or`` and ``$regex``/``$options``.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.indexes: list[tuple[str, list[tuple[str, int]]]] = []

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self.collections.setdefault(name, {})

    @classmethod
    def _matches(cls, document: dict[str, Any], filters: dict[str, Any]) -> bool:
        for key, condition in filters.items():
            if key == "$or":
                if not any(cls._matches(document, sub) for sub in condition):
                    return False
                continue
            value = document.get(key)
            if isinstance(condition, dict) and "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not re.search(condition["$regex"], str(value or ""), flags):
                    return False
            elif value != condition:
                return False
        return True

    async def insert(self, collection: str, document: dict[str, Any]) -> str:
        doc_id = document.get("id") or str(uuid4())
        self._collection(collection)[doc_id] = {**copy.deepcopy(document), "id": doc_id}
        return doc_id

    async def replace(
        self, collection: str, document_id: str, document: dict[str, Any]
    ) -> None:
        self._collection(collection)[document_id] = {
            **copy.deepcopy(document),
            "id": document_id,
        }

    async def find_by_id(
        self, collection: str, document_id: str
    ) -> dict[str, Any] | None:
        document = self._collection(collection).get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def find(
        self,
        collection: str,
        filters: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[dict[str, Any]]:
        documents = [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if self._matches(doc, filters)
        ]
        for field, direction in reversed(sort or []):
            documents.sort(key=lambda d: d.get(field) or "", reverse=direction < 0)
        return documents[skip : skip + limit]

    async def count(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> int:
        return sum(
            1
            for doc in self._collection(collection).values()
            if self._matches(doc, filters or {})
        )

    async def update(
        self,
        collection: str,
        document_id: str,
        set_fields: dict[str, Any],
        unset_fields: list[str] | None = None,
    ) -> dict[str, Any] | None:
        document = self._collection(collection).get(document_id)
        if document is None:
            return None
        document.update(copy.deepcopy(set_fields))
        for name in unset_fields or []:
            document.pop(name, None)
        return copy.deepcopy(document)

    async def increment(
        self,
        collection: str,
        document_id: str,
        field: str,
        amount: int = 1,
        set_fields: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        document = self._collection(collection).get(document_id)
        if document is None:
            return None
        document[field] = document.get(field, 0) + amount
        document.update(copy.deepcopy(set_fields or {}))
        return copy.deepcopy(document)

    async def delete(self, collection: str, document_id: str) -> bool:
        return self._collection(collection).pop(document_id, None) is not None

    async def create_index(
        self,
        collection: str,
        fields: list[tuple[str, int]],
        unique: bool = False,  # noqa: ARG002
        name: str | None = None,
    ) -> str:
        self.indexes.append((collection, fields))
        return name or "_".join(f"{f}_{d}" for f, d in fields)

    async def health_check(self) -> HealthStatus:
        return HealthStatus(healthy=True, latency_ms=0.0)


@pytest.fixture
def document_db() -> InMemoryDocumentDB:
    return InMemoryDocumentDB()


@pytest.fixture
def record_store(document_db: InMemoryDocumentDB) -> VideoRecordStore:
    return VideoRecordStore(document_db, "videos")


@pytest.fixture
def make_record():
    """Build records with distinct, increasing upload dates."""
    base = utc_now() - timedelta(days=30)
    counter = {"n": 0}

    def _make(**overrides: Any) -> VideoRecord:
        counter["n"] += 1
        stamp = base + timedelta(minutes=counter["n"])
        values: dict[str, Any] = {
            "title": f"Video {counter['n']}",
            "description": "",
            "file_name": f"clip{counter['n']}.mp4",
            "file_type": "video/mp4",
            "status": VideoStatus.ACTIVE,
            "upload_date": stamp,
            "created_at": stamp,
            "updated_at": stamp,
        }
        values.update(overrides)
        record = VideoRecord(**values)
        if not record.storage_key:
            record.storage_key = f"videos/{record.id}.mp4"
        return record

    return _make
