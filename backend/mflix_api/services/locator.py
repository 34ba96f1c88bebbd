"""
Mflix API - Resource Locator
=============================

What:  Turns a collection and validated identifiers into store queries.
How:   `one()` builds a single-document filter on `_id`, conjoined with the
       parent reference field for nested resources; `many()` builds a listing
       filter capped at the configured limit.

Nested scoping:
    A comment lives in its own collection and points to its movie through
    `movie_id`. Addressing it as /movies/{m}/comments/{c} produces
        {"_id": c, "movie_id": m}
    so a comment that exists under another movie simply matches nothing and
    the caller reports 404.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from bson import ObjectId

from mflix_api.config import settings


@dataclass(frozen=True)
class Query:
    """A store query: collection, equality filter and optional result cap."""

    collection: str
    filter: Dict[str, Any] = field(default_factory=dict)
    limit: Optional[int] = None


class ResourceLocator:
    """Builds queries for one collection, optionally nested under a parent."""

    def __init__(
        self,
        collection: str,
        parent_field: Optional[str] = None,
        list_limit: Optional[int] = None,
    ):
        self.collection = collection
        self.parent_field = parent_field
        self.list_limit = list_limit or settings.list_limit

    def _scope(self, parent_id: Optional[ObjectId]) -> Dict[str, Any]:
        if self.parent_field is None:
            return {}
        if not isinstance(parent_id, ObjectId):
            raise ValueError(f"{self.collection} queries require a parent ObjectId")
        return {self.parent_field: parent_id}

    def one(self, resource_id: ObjectId, parent_id: Optional[ObjectId] = None) -> Query:
        """Query selecting the single document `resource_id` (within its parent)."""
        if not isinstance(resource_id, ObjectId):
            raise ValueError("resource_id must be a validated ObjectId")
        return Query(
            collection=self.collection,
            filter={"_id": resource_id, **self._scope(parent_id)},
        )

    def many(self, parent_id: Optional[ObjectId] = None) -> Query:
        """Query listing up to `list_limit` documents (within the parent)."""
        return Query(
            collection=self.collection,
            filter=self._scope(parent_id),
            limit=self.list_limit,
        )
