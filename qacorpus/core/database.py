"""Database connectivity layer for the QA corpus tool."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from qacorpus.core.config import settings
from qacorpus.core.exceptions import InvalidDocumentIdError, StoreError
from qacorpus.models.responses import CollectionStats
from qacorpus.services.statistics import STATS_PIPELINE, summarize
from qacorpus.utils.monitoring import record_store_error

logger = logging.getLogger(__name__)


def to_object_id(document_id: str) -> ObjectId:
    """Translate the external string form of an id into a MongoDB `ObjectId`."""

    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidDocumentIdError(f"Invalid document id: {document_id!r}") from exc


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    serialized = dict(document)
    if isinstance(serialized.get("_id"), ObjectId):
        serialized["_id"] = str(serialized["_id"])
    return serialized


class DocumentStore:
    """Lazily connects to MongoDB and owns the single client handle.

    One instance is created per application and shared by every request.
    The motor client pools connections itself.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        database: Optional[str] = None,
        collection: Optional[str] = None,
        *,
        client_factory: Callable[[str], AsyncIOMotorClient] = AsyncIOMotorClient,
    ) -> None:
        self.uri = uri or settings.MONGODB_URI
        self.database_name = database or settings.MONGODB_DATABASE
        self.collection_name = collection or settings.MONGODB_COLLECTION
        self._client_factory = client_factory
        self._lock = asyncio.Lock()
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    @property
    def connected(self) -> bool:
        return self.db is not None

    async def connect(self) -> AsyncIOMotorDatabase:
        """Open the connection on first use; later calls return the same handle."""

        if self.db is not None:
            return self.db

        async with self._lock:
            if self.db is None:
                client = self._client_factory(self.uri)
                try:
                    await client.admin.command("ping")
                except PyMongoError as exc:
                    client.close()
                    record_store_error("connect")
                    raise StoreError(f"Could not connect to MongoDB: {exc}") from exc
                self.client = client
                self.db = client[self.database_name]
                logger.info("Connected to MongoDB database %s", self.database_name)
        return self.db

    async def ping(self) -> None:
        """Round-trip to the server, connecting first if needed."""

        await self.connect()
        try:
            await self.client.admin.command("ping")
        except PyMongoError as exc:
            record_store_error("ping")
            raise StoreError(str(exc)) from exc

    async def _collection(self) -> AsyncIOMotorCollection:
        db = await self.connect()
        return db[self.collection_name]

    async def insert_many(self, documents: Iterable[Dict[str, Any]]) -> int:
        """Insert every document in one ``insert_many`` call; returns the inserted count."""

        # insert_many adds `_id` to its arguments, keep the caller's dicts untouched.
        payload = [dict(document) for document in documents]
        collection = await self._collection()
        try:
            result = await collection.insert_many(payload, ordered=True)
        except PyMongoError as exc:
            record_store_error("insert_many")
            raise StoreError(str(exc)) from exc
        return len(result.inserted_ids)

    async def find(self, query: Optional[Dict[str, Any]] = None, limit: int = 10) -> List[Dict[str, Any]]:
        collection = await self._collection()
        try:
            documents = await collection.find(query or {}).limit(limit).to_list(length=limit)
        except PyMongoError as exc:
            record_store_error("find")
            raise StoreError(str(exc)) from exc
        return [serialize_document(document) for document in documents]

    async def find_by_id(self, document_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(document_id)
        collection = await self._collection()
        try:
            document = await collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            record_store_error("find_one")
            raise StoreError(str(exc)) from exc
        return serialize_document(document) if document is not None else None

    async def delete_by_id(self, document_id: str) -> int:
        object_id = to_object_id(document_id)
        collection = await self._collection()
        try:
            result = await collection.delete_one({"_id": object_id})
        except PyMongoError as exc:
            record_store_error("delete_one")
            raise StoreError(str(exc)) from exc
        return result.deleted_count

    async def distinct(self, field: str, query: Optional[Dict[str, Any]] = None) -> List[Any]:
        collection = await self._collection()
        try:
            return await collection.distinct(field, query or {})
        except PyMongoError as exc:
            record_store_error("distinct")
            raise StoreError(str(exc)) from exc

    async def aggregate_stats(self) -> CollectionStats:
        collection = await self._collection()
        try:
            rows = await collection.aggregate(STATS_PIPELINE).to_list(length=1)
        except PyMongoError as exc:
            record_store_error("aggregate")
            raise StoreError(str(exc)) from exc
        return summarize(rows[0] if rows else None)

    async def close(self) -> None:
        """Release the client; safe to call repeatedly or before any connect."""

        if self.client is None:
            return
        self.client.close()
        self.client = None
        self.db = None
        logger.info("MongoDB connection closed")
