"""
Ports (interfaces) for progress and catalog storage.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import CatalogEntry, ProgressRecord


class ProgressRepository(ABC):
    """
    Port for reading and writing per-item progress records.

    Implementations:
        - SqliteProgressRepository: Stores records in the local SQLite database.
    """

    @abstractmethod
    async def get(self, item: int) -> ProgressRecord | None:
        """
        Fetch the progress record for a single item.

        Returns:
            The record, or None if the item has never been attempted.
        """
        pass

    @abstractmethod
    async def put(self, record: ProgressRecord) -> None:
        """
        Insert or replace the record for ``record.item``.

        At most one record exists per item after this call.

        Raises:
            StoreError: If the write fails.
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[ProgressRecord]:
        """Return every stored progress record."""
        pass


class CatalogRepository(ABC):
    """
    Port for the read-mostly problem catalog.

    Implementations:
        - SqliteCatalogRepository: Reads the ``problems`` table.
    """

    @abstractmethod
    async def list_all_items(self) -> list[CatalogEntry]:
        """Return every catalog entry, sorted by order."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> CatalogEntry | None:
        """Fetch a single entry by id, or None if unknown."""
        pass

    @abstractmethod
    async def add_item(self, entry: CatalogEntry) -> bool:
        """
        Insert an entry unless one with the same id already exists.

        Returns:
            True if a row was inserted, False if it was ignored.
        """
        pass
