"""
Mflix API - MongoDB Store Implementation
=========================================

What:  Concrete Store backed by an AsyncIOMotorDatabase.
How:   Each method is one Motor call; PyMongoError is translated to StoreError
       with the driver's message as detail.
Who:   Built per request by `get_store()` around the shared client.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from mflix_api.exceptions import StoreError
from mflix_api.services.store_base import Document, Store

logger = logging.getLogger(__name__)


class MongoStore(Store):
    """
    Store implementation over a Motor database handle.

    The handle is cheap: it shares the connection pool of the client that
    created it, so instantiating one per request costs nothing.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database

    @asynccontextmanager
    async def _operation(self, name: str, collection: str) -> AsyncIterator[None]:
        try:
            yield
        except PyMongoError as e:
            logger.error("MongoDB %s on '%s' failed: %s", name, collection, str(e))
            raise StoreError(
                detail=str(e),
                context={"operation": name, "collection": collection},
            ) from e

    async def find_one(self, collection: str, filter: Document) -> Optional[Document]:
        async with self._operation("find_one", collection):
            return await self.database[collection].find_one(filter)

    async def find(self, collection: str, filter: Document, limit: int) -> List[Document]:
        async with self._operation("find", collection):
            cursor = self.database[collection].find(filter).limit(limit)
            return await cursor.to_list(length=limit)

    async def insert_one(self, collection: str, document: Document) -> ObjectId:
        async with self._operation("insert_one", collection):
            # insert_one mutates its argument by adding _id
            result = await self.database[collection].insert_one(dict(document))
            return result.inserted_id

    async def replace_one(self, collection: str, filter: Document, document: Document) -> int:
        async with self._operation("replace_one", collection):
            result = await self.database[collection].replace_one(filter, document)
            return result.matched_count

    async def delete_one(self, collection: str, filter: Document) -> int:
        async with self._operation("delete_one", collection):
            result = await self.database[collection].delete_one(filter)
            return result.deleted_count

    async def ping(self) -> bool:
        try:
            await self.database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
