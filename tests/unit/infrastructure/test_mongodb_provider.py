"""Unit tests for MongoDB document database provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo import ReturnDocument


class TestMongoDBDocumentDB:
    """Tests for MongoDBDocumentDB provider.

    These tests verify the ID mapping behavior between domain model 'id'
    and MongoDB's '_id' field, and the shape of the update documents.
    """

    @pytest.fixture
    def mock_motor_client(self):
        """Create a mock Motor client."""
        with patch(
            "src.commons.infrastructure.documentdb.mongodb_provider.AsyncIOMotorClient"
        ) as mock_client_class:
            mock_client = MagicMock()
            mock_db = MagicMock()
            mock_collection = MagicMock()

            mock_client.__getitem__ = MagicMock(return_value=mock_db)
            mock_db.__getitem__ = MagicMock(return_value=mock_collection)

            mock_client_class.return_value = mock_client

            yield {
                "client_class": mock_client_class,
                "client": mock_client,
                "db": mock_db,
                "collection": mock_collection,
            }

    @pytest.fixture
    def mongodb_provider(self, mock_motor_client):
        """Create MongoDB provider with mocked client."""
        from src.commons.infrastructure.documentdb.mongodb_provider import (
            MongoDBDocumentDB,
        )

        return MongoDBDocumentDB(
            connection_string="mongodb://localhost:27017",
            database_name="test_db",
        )

    # =========================================================================
    # Insert / Replace Tests
    # =========================================================================

    async def test_insert_uses_id_as_mongodb_id(
        self, mongodb_provider, mock_motor_client
    ):
        """Test that insert uses document 'id' as MongoDB '_id'."""
        collection = mock_motor_client["collection"]
        collection.insert_one = AsyncMock(
            return_value=MagicMock(inserted_id="test-uuid-123")
        )

        document = {"id": "test-uuid-123", "title": "Test Video"}

        result = await mongodb_provider.insert("videos", document)

        call_args = collection.insert_one.call_args[0][0]
        assert call_args["_id"] == "test-uuid-123"
        assert "id" not in call_args
        assert result == "test-uuid-123"

    async def test_insert_does_not_modify_original_document(
        self, mongodb_provider, mock_motor_client
    ):
        """Test that insert doesn't modify the original document."""
        collection = mock_motor_client["collection"]
        collection.insert_one = AsyncMock(
            return_value=MagicMock(inserted_id="test-uuid")
        )

        original_document = {"id": "test-uuid", "title": "Test"}

        await mongodb_provider.insert("videos", original_document)

        assert "id" in original_document
        assert "_id" not in original_document

    async def test_replace_upserts_by_id(self, mongodb_provider, mock_motor_client):
        """Test that replace overwrites the whole document with upsert."""
        collection = mock_motor_client["collection"]
        collection.replace_one = AsyncMock()

        await mongodb_provider.replace(
            "videos", "test-uuid", {"id": "test-uuid", "title": "New"}
        )

        args, kwargs = collection.replace_one.call_args
        assert args[0] == {"_id": "test-uuid"}
        assert args[1] == {"_id": "test-uuid", "title": "New"}
        assert kwargs["upsert"] is True

    # =========================================================================
    # Find Tests
    # =========================================================================

    async def test_find_by_id_returns_id_field(
        self, mongodb_provider, mock_motor_client
    ):
        """Test find_by_id maps '_id' back to 'id'."""
        collection = mock_motor_client["collection"]
        collection.find_one = AsyncMock(
            return_value={"_id": "test-uuid-123", "title": "Test Video"}
        )

        result = await mongodb_provider.find_by_id("videos", "test-uuid-123")

        collection.find_one.assert_called_with({"_id": "test-uuid-123"})
        assert result == {"id": "test-uuid-123", "title": "Test Video"}

    async def test_find_by_id_not_found(self, mongodb_provider, mock_motor_client):
        """Test find_by_id when document not found."""
        collection = mock_motor_client["collection"]
        collection.find_one = AsyncMock(return_value=None)

        result = await mongodb_provider.find_by_id("videos", "nonexistent")

        assert result is None

    async def test_find_applies_sort_skip_and_limit(
        self, mongodb_provider, mock_motor_client
    ):
        """Test that find returns documents with 'id' and pages the cursor."""
        collection = mock_motor_client["collection"]

        async def mock_cursor():
            yield {"_id": "uuid-1", "title": "Video 1"}
            yield {"_id": "uuid-2", "title": "Video 2"}

        cursor_mock = MagicMock()
        cursor_mock.sort = MagicMock(return_value=cursor_mock)
        cursor_mock.skip = MagicMock(return_value=cursor_mock)
        cursor_mock.limit = MagicMock(return_value=cursor_mock)
        cursor_mock.__aiter__ = lambda self: mock_cursor()

        collection.find = MagicMock(return_value=cursor_mock)

        results = await mongodb_provider.find(
            "videos",
            {"status": "active"},
            skip=12,
            limit=12,
            sort=[("uploadDate", -1)],
        )

        collection.find.assert_called_with({"status": "active"})
        cursor_mock.sort.assert_called_with([("uploadDate", -1)])
        cursor_mock.skip.assert_called_with(12)
        cursor_mock.limit.assert_called_with(12)
        assert [doc["id"] for doc in results] == ["uuid-1", "uuid-2"]
        assert all("_id" not in doc for doc in results)

    async def test_count_with_filters(self, mongodb_provider, mock_motor_client):
        collection = mock_motor_client["collection"]
        collection.count_documents = AsyncMock(return_value=7)

        assert await mongodb_provider.count("videos", {"status": "active"}) == 7
        collection.count_documents.assert_called_with({"status": "active"})

    async def test_count_without_filters_uses_estimate(
        self, mongodb_provider, mock_motor_client
    ):
        collection = mock_motor_client["collection"]
        collection.estimated_document_count = AsyncMock(return_value=3)

        assert await mongodb_provider.count("videos") == 3

    # =========================================================================
    # Update Tests
    # =========================================================================

    async def test_update_sets_and_unsets(self, mongodb_provider, mock_motor_client):
        """Test update builds $set and $unset and returns the new document."""
        collection = mock_motor_client["collection"]
        collection.find_one_and_update = AsyncMock(
            return_value={"_id": "test-uuid", "status": "active"}
        )

        result = await mongodb_provider.update(
            "videos", "test-uuid", {"status": "active"}, ["errorMessage"]
        )

        args, kwargs = collection.find_one_and_update.call_args
        assert args[0] == {"_id": "test-uuid"}
        assert args[1] == {
            "$set": {"status": "active"},
            "$unset": {"errorMessage": ""},
        }
        assert kwargs["return_document"] == ReturnDocument.AFTER
        assert result == {"id": "test-uuid", "status": "active"}

    async def test_update_without_unset(self, mongodb_provider, mock_motor_client):
        collection = mock_motor_client["collection"]
        collection.find_one_and_update = AsyncMock(return_value={"_id": "x"})

        await mongodb_provider.update("videos", "x", {"title": "T"})

        assert collection.find_one_and_update.call_args[0][1] == {
            "$set": {"title": "T"}
        }

    async def test_update_not_found(self, mongodb_provider, mock_motor_client):
        """Test update when document not found."""
        collection = mock_motor_client["collection"]
        collection.find_one_and_update = AsyncMock(return_value=None)

        result = await mongodb_provider.update(
            "videos", "nonexistent-uuid", {"status": "active"}
        )

        assert result is None

    async def test_increment(self, mongodb_provider, mock_motor_client):
        """Test increment uses $inc and optional $set."""
        collection = mock_motor_client["collection"]
        collection.find_one_and_update = AsyncMock(
            return_value={"_id": "test-uuid", "views": 5}
        )

        result = await mongodb_provider.increment(
            "videos", "test-uuid", "views", set_fields={"updatedAt": "now"}
        )

        assert collection.find_one_and_update.call_args[0][1] == {
            "$inc": {"views": 1},
            "$set": {"updatedAt": "now"},
        }
        assert result == {"id": "test-uuid", "views": 5}

    # =========================================================================
    # Delete / Index Tests
    # =========================================================================

    async def test_delete(self, mongodb_provider, mock_motor_client):
        """Test delete by string ID."""
        collection = mock_motor_client["collection"]
        collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))

        result = await mongodb_provider.delete("videos", "test-uuid")

        collection.delete_one.assert_called_with({"_id": "test-uuid"})
        assert result is True

    async def test_delete_not_found(self, mongodb_provider, mock_motor_client):
        collection = mock_motor_client["collection"]
        collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))

        assert await mongodb_provider.delete("videos", "nonexistent") is False

    async def test_create_index_passes_name(self, mongodb_provider, mock_motor_client):
        collection = mock_motor_client["collection"]
        collection.create_index = AsyncMock(return_value="status_upload_date")

        name = await mongodb_provider.create_index(
            "videos",
            [("status", 1), ("uploadDate", -1)],
            name="status_upload_date",
        )

        collection.create_index.assert_called_with(
            [("status", 1), ("uploadDate", -1)],
            unique=False,
            name="status_upload_date",
        )
        assert name == "status_upload_date"

    # =========================================================================
    # Health Tests
    # =========================================================================

    async def test_health_check_healthy(self, mongodb_provider, mock_motor_client):
        mock_motor_client["client"].admin.command = AsyncMock(return_value={"ok": 1})

        status = await mongodb_provider.health_check()

        assert status.healthy is True
        assert status.details == {"database": "test_db"}

    async def test_health_check_unhealthy(self, mongodb_provider, mock_motor_client):
        mock_motor_client["client"].admin.command = AsyncMock(
            side_effect=ConnectionError("refused")
        )

        status = await mongodb_provider.health_check()

        assert status.healthy is False
        assert "refused" in status.message
