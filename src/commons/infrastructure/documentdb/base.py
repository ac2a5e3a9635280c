"""Abstract base class for document database operations."""

from abc import ABC, abstractmethod
from typing import Any

from src.commons.infrastructure.blob.base import HealthStatus


class DocumentDBBase(ABC):
    """Abstract base class for document database operations.

    Documents are addressed by their 'id' field. Every write touches a single
    document atomically; there are no multi-document transactions.
    """

    @abstractmethod
    async def insert(
        self,
        collection: str,
        document: dict[str, Any],
    ) -> str:
        """Insert a new document.

        Args:
            collection: Collection/table name.
            document: Document to insert.

        Returns:
            The document ID.
        """

    @abstractmethod
    async def replace(
        self,
        collection: str,
        document_id: str,
        document: dict[str, Any],
    ) -> None:
        """Write a whole document under an ID, creating or overwriting it.

        Args:
            collection: Collection/table name.
            document_id: Document ID.
            document: Complete document body.
        """

    @abstractmethod
    async def find_by_id(
        self,
        collection: str,
        document_id: str,
    ) -> dict[str, Any] | None:
        """Find a document by ID.

        Returns:
            Document if found, None otherwise.
        """

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[dict[str, Any]]:
        """Find documents matching filters.

        Args:
            collection: Collection/table name.
            filters: Query filters.
            skip: Number of documents to skip.
            limit: Maximum documents to return.
            sort: Sort order [(field, direction)].
                  Direction: 1 for ascending, -1 for descending.

        Returns:
            List of matching documents.
        """

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """Count documents matching filters."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        document_id: str,
        set_fields: dict[str, Any],
        unset_fields: list[str] | None = None,
    ) -> dict[str, Any] | None:
        """Set and remove named fields of one document in a single write.

        Args:
            collection: Collection/table name.
            document_id: Document ID to update.
            set_fields: Fields to assign.
            unset_fields: Fields to remove.

        Returns:
            The document after the update, or None if it doesn't exist.
        """

    @abstractmethod
    async def increment(
        self,
        collection: str,
        document_id: str,
        field: str,
        amount: int = 1,
        set_fields: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Atomically add to a numeric field.

        Returns:
            The document after the update, or None if it doesn't exist.
        """

    @abstractmethod
    async def delete(
        self,
        collection: str,
        document_id: str,
    ) -> bool:
        """Delete a document.

        Returns:
            True if deleted, False if not found.
        """

    @abstractmethod
    async def create_index(
        self,
        collection: str,
        fields: list[tuple[str, int]],
        unique: bool = False,
        name: str | None = None,
    ) -> str:
        """Create an index on the collection.

        Returns:
            Index name.
        """

    @abstractmethod
    async def health_check(self) -> HealthStatus:
        """Check service health."""
