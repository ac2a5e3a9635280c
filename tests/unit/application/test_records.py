"""Unit tests for the video record store."""

from datetime import UTC, datetime, timedelta

from src.application.services.records import active_filter
from src.domain.models.video import VideoStatus


class TestActiveFilter:
    """Tests for the listing query builder."""

    def test_without_search(self):
        assert active_filter() == {"status": "active"}
        assert active_filter("   ") == {"status": "active"}

    def test_search_is_escaped_and_case_insensitive(self):
        filters = active_filter(" c++ (live) ")

        pattern = {"$regex": r"c\+\+\ \(live\)", "$options": "i"}
        assert filters["$or"] == [{"title": pattern}, {"description": pattern}]


class TestVideoRecordStore:
    """Tests for VideoRecordStore against the in-memory database."""

    async def test_put_and_get(self, record_store, make_record):
        record = make_record(title="Clip")

        await record_store.put(record)
        loaded = await record_store.get(record.id)

        assert loaded == record

    async def test_get_missing(self, record_store):
        assert await record_store.get("missing") is None

    async def test_put_replaces_whole_record(self, record_store, make_record):
        record = make_record(tags=["a"])
        await record_store.put(record)

        await record_store.put(record.model_copy(update={"tags": []}))

        loaded = await record_store.get(record.id)
        assert loaded.tags == []

    async def test_update_fields_refreshes_updated_at(self, record_store, make_record):
        record = make_record()
        await record_store.put(record)

        updated = await record_store.update_fields(record.id, {"title": "Renamed"})

        assert updated.title == "Renamed"
        assert updated.updated_at > record.updated_at
        assert updated.created_at == record.created_at

    async def test_update_fields_missing(self, record_store):
        assert await record_store.update_fields("missing", {"title": "x"}) is None

    async def test_set_status_failed_stores_message(self, record_store, make_record):
        record = make_record(status=VideoStatus.PROCESSING)
        await record_store.put(record)

        failed = await record_store.set_status(
            record.id, VideoStatus.FAILED, "decode error"
        )

        assert failed.status == VideoStatus.FAILED
        assert failed.error_message == "decode error"

    async def test_set_status_failed_default_message(self, record_store, make_record):
        record = make_record(status=VideoStatus.PROCESSING)
        await record_store.put(record)

        failed = await record_store.set_status(record.id, VideoStatus.FAILED)

        assert failed.error_message == "Processing failed"

    async def test_set_status_clears_error_message(
        self, record_store, make_record, document_db
    ):
        record = make_record(status=VideoStatus.FAILED, error_message="boom")
        await record_store.put(record)

        active = await record_store.set_status(record.id, VideoStatus.ACTIVE)

        assert active.error_message is None
        assert "errorMessage" not in document_db.collections["videos"][record.id]

    async def test_increment_views(self, record_store, make_record):
        record = make_record(views=4)
        await record_store.put(record)

        updated = await record_store.increment_views(record.id)

        assert updated.views == 5
        assert await record_store.increment_views("missing") is None

    async def test_delete(self, record_store, make_record):
        record = make_record()
        await record_store.put(record)

        assert await record_store.delete(record.id) is True
        assert await record_store.delete(record.id) is False
        assert await record_store.get(record.id) is None

    async def test_list_active_newest_first(self, record_store, make_record):
        older = make_record()
        newer = make_record()
        hidden = make_record(status=VideoStatus.UPLOADING)
        for record in (older, hidden, newer):
            await record_store.put(record)

        listed = await record_store.list_active()

        assert [r.id for r in listed] == [newer.id, older.id]
        assert await record_store.count_active() == 2

    async def test_list_active_orders_whole_seconds(self, record_store, make_record):
        whole_second = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
        half_past = whole_second + timedelta(microseconds=500000)
        earlier = make_record(
            upload_date=whole_second, created_at=whole_second, updated_at=whole_second
        )
        later = make_record(
            upload_date=half_past, created_at=half_past, updated_at=half_past
        )
        for record in (earlier, later):
            await record_store.put(record)

        listed = await record_store.list_active()

        assert [r.id for r in listed] == [later.id, earlier.id]

    async def test_list_active_search(self, record_store, make_record):
        await record_store.put(make_record(title="Cooking pasta"))
        await record_store.put(make_record(title="Hiking", description="Mountain PASTA picnic"))
        await record_store.put(make_record(title="Cycling"))

        listed = await record_store.list_active("pasta")

        assert {r.title for r in listed} == {"Cooking pasta", "Hiking"}
        assert await record_store.count_active("pasta") == 2

    async def test_ensure_indexes(self, record_store, document_db):
        await record_store.ensure_indexes()

        assert document_db.indexes == [("videos", [("status", 1), ("uploadDate", -1)])]
