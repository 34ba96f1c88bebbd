"""
Mflix API - Abstract Document Store Interface
==============================================

What:  Abstract base class defining the operations resource services need
       from the document store.
How:   Concrete implementations inherit from Store and implement every method.
       MongoStore wraps a Motor database; tests substitute in-memory fakes.
Who:   Called by ResourceService subclasses, injected per request.

Contract:
    - Every method is a single store round-trip, atomic on its own.
    - Filters are plain dicts of field → value equality (ObjectIds already
      converted by the ResourceLocator).
    - Failures are raised as StoreError; callers never see driver exceptions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bson import ObjectId

Document = Dict[str, Any]


class Store(ABC):
    """Asynchronous document store capability."""

    @abstractmethod
    async def find_one(self, collection: str, filter: Document) -> Optional[Document]:
        """Return the first document matching `filter`, or None."""
        ...

    @abstractmethod
    async def find(self, collection: str, filter: Document, limit: int) -> List[Document]:
        """Return at most `limit` documents matching `filter`."""
        ...

    @abstractmethod
    async def insert_one(self, collection: str, document: Document) -> ObjectId:
        """
        Insert a new document.

        Returns:
            The store-assigned `_id` of the inserted document.
        """
        ...

    @abstractmethod
    async def replace_one(self, collection: str, filter: Document, document: Document) -> int:
        """
        Replace the whole document matching `filter` (no partial merge).

        Returns:
            Number of matched documents (0 or 1).
        """
        ...

    @abstractmethod
    async def delete_one(self, collection: str, filter: Document) -> int:
        """
        Delete the first document matching `filter`.

        Returns:
            Number of deleted documents (0 or 1).
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """
        Check that the store is reachable.

        Who:     Called by the health check endpoint.
        Returns: True if reachable, False otherwise. Never raises.
        """
        ...
