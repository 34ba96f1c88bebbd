"""
Mflix API - Resource Service (shared request skeleton)
=======================================================

What:  Base class implementing list / get / create / update / delete for one
       resource family on top of a Store.
How:   Every operation follows the same steps:
         1. validate all path identifiers (parent first), 400 on failure
         2. build the query with the ResourceLocator
         3. run one store operation
         4. 404 when a valid identifier matched nothing
         5. wrap the outcome in an Envelope
       Any failure of step 3 becomes StoreError (500).
Who:   Subclassed by MovieService, CommentService and TheaterService;
       instantiated per request with the injected Store.

Design:
    Services are stateless apart from the Store they receive, so concurrent
    requests share nothing in process.
"""

import logging
from typing import Any, Awaitable, ClassVar, Dict, Optional, TypeVar

from bson import ObjectId

from mflix_api.config import settings
from mflix_api.exceptions import MflixError, NotFoundError, StoreError
from mflix_api.models.documents import StoreDocument
from mflix_api.schemas.envelope import Envelope
from mflix_api.services.identifiers import require_valid_ids
from mflix_api.services.locator import ResourceLocator
from mflix_api.services.store_base import Document, Store

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceService:
    """
    CRUD operations for one collection, optionally nested under a parent.

    Class attributes configured by subclasses:
        collection:       store collection name
        resource:         singular label ("movie"), used in messages and data keys
        plural:           data key for listings ("movies")
        parent_resource:  label of the parent for nested resources ("movie")
        parent_field:     parent reference field in the document ("movie_id")
    """

    collection: ClassVar[str]
    resource: ClassVar[str]
    plural: ClassVar[str]
    parent_resource: ClassVar[Optional[str]] = None
    parent_field: ClassVar[Optional[str]] = None

    def __init__(self, store: Store, list_limit: Optional[int] = None):
        self.store = store
        self.locator = ResourceLocator(
            self.collection,
            parent_field=self.parent_field,
            list_limit=list_limit or settings.list_limit,
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    def _validate(
        self, resource_id: Optional[str] = None, parent_id: Optional[str] = None
    ) -> tuple:
        """Validate parent then own id; returns (resource_oid, parent_oid)."""
        pairs = []
        if self.parent_resource is not None:
            pairs.append((self.parent_resource, parent_id))
        pairs.append((self.resource, resource_id))
        converted = require_valid_ids(pairs)
        if self.parent_resource is not None:
            return converted[1], converted[0]
        return converted[0], None

    async def _run(self, operation: str, call: Awaitable[T]) -> T:
        """Await a store call, converting unexpected failures to StoreError."""
        try:
            return await call
        except MflixError:
            raise
        except Exception as e:
            logger.error(
                "Store %s on '%s' failed: %s", operation, self.collection, str(e), exc_info=True
            )
            raise StoreError(
                detail=str(e) or type(e).__name__,
                context={"operation": operation, "collection": self.collection},
            ) from e

    def _not_found(self, resource_id: ObjectId) -> NotFoundError:
        logger.info("%s %s not found", self.resource.capitalize(), resource_id)
        return NotFoundError(resource=self.resource, resource_id=str(resource_id))

    def _prepare(self, document: StoreDocument, parent_oid: Optional[ObjectId]) -> Document:
        """Document to write; nested resources get their parent reference from the path."""
        data = document.to_document()
        if self.parent_field is not None:
            data[self.parent_field] = parent_oid
        return data

    async def _check_parent(self, parent_oid: Optional[ObjectId]) -> None:
        """Hook for referential checks before a write; no-op by default."""
        return None

    # ── Operations ────────────────────────────────────────────────────────

    async def list_documents(self, parent_id: Optional[str] = None) -> Envelope:
        """List up to `list_limit` documents (scoped to the parent if nested)."""
        if self.parent_resource is not None:
            (parent_oid,) = require_valid_ids([(self.parent_resource, parent_id)])
        else:
            parent_oid = None
        query = self.locator.many(parent_oid)
        documents = await self._run(
            "find", self.store.find(query.collection, query.filter, query.limit)
        )
        # The cap is enforced here as well, whatever the store returned
        return Envelope.ok({self.plural: list(documents)[: query.limit]})

    async def get_document(self, resource_id: str, parent_id: Optional[str] = None) -> Envelope:
        oid, parent_oid = self._validate(resource_id, parent_id)
        query = self.locator.one(oid, parent_oid)
        document = await self._run("find_one", self.store.find_one(query.collection, query.filter))
        if document is None:
            raise self._not_found(oid)
        return Envelope.ok({self.resource: document})

    async def create_document(
        self,
        document: StoreDocument,
        resource_id: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> Envelope:
        """
        Insert a new document with a store-assigned id.

        A `resource_id` from the path is validated like on every other
        single-resource verb but is not used as the new `_id`.
        """
        _, parent_oid = self._validate(resource_id, parent_id)
        await self._check_parent(parent_oid)
        data = self._prepare(document, parent_oid)
        inserted_id = await self._run("insert_one", self.store.insert_one(self.collection, data))
        logger.info("%s created: %s", self.resource.capitalize(), inserted_id)
        return Envelope.created(
            message=f"{self.resource.capitalize()} created successfully",
            data={self.resource: {"_id": inserted_id, **data}},
        )

    async def update_document(
        self,
        resource_id: str,
        document: StoreDocument,
        parent_id: Optional[str] = None,
    ) -> Envelope:
        """Replace the whole document; last write wins."""
        oid, parent_oid = self._validate(resource_id, parent_id)
        query = self.locator.one(oid, parent_oid)
        data = self._prepare(document, parent_oid)
        matched = await self._run(
            "replace_one", self.store.replace_one(query.collection, query.filter, data)
        )
        if not matched:
            raise self._not_found(oid)
        logger.info("%s updated: %s", self.resource.capitalize(), oid)
        return Envelope.updated(
            message=f"{self.resource.capitalize()} updated successfully",
            data={self.resource: {"_id": oid, **data}},
        )

    async def delete_document(self, resource_id: str, parent_id: Optional[str] = None) -> Envelope:
        oid, parent_oid = self._validate(resource_id, parent_id)
        query = self.locator.one(oid, parent_oid)
        deleted = await self._run(
            "delete_one", self.store.delete_one(query.collection, query.filter)
        )
        if not deleted:
            raise self._not_found(oid)
        logger.info("%s deleted: %s", self.resource.capitalize(), oid)
        payload: Dict[str, Any] = {f"{self.resource}_id": oid, "deleted_count": deleted}
        return Envelope.deleted(payload)
