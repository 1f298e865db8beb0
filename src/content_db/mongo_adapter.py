"""
MongoDB document store.
Provides the same interface as SQLiteDocumentStore over native MongoDB collections.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.errors import PyMongoError

from .collections import (
    ASCENDING as ORDER_ASC,
    COLLECTION_INDEXES,
    SERVER_TIMESTAMP,
    OrderSpec,
    validate_order,
)
from .errors import NotFound, StoreUnavailable

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "mandala_cms"


def to_document_id(doc_id: str) -> Union[ObjectId, str]:
    """Generated ids are ObjectIds; named singletons (pages, profiles) keep their string id"""
    if ObjectId.is_valid(doc_id):
        return ObjectId(doc_id)
    return doc_id


def from_mongo(document: Dict[str, Any]) -> Dict[str, Any]:
    """Replace MongoDB's _id with the string id the services expect"""
    document = dict(document)
    document["id"] = str(document.pop("_id"))
    return document


def split_server_timestamps(document: Dict[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """Separate literal fields from fields the server clock must fill"""
    fields = {}
    server_fields = []
    for key, value in document.items():
        if key == "id":
            continue
        if value is SERVER_TIMESTAMP:
            server_fields.append(key)
        else:
            fields[key] = value
    return fields, server_fields


@contextmanager
def _translate_errors(operation: str, collection: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.error(f"MongoDB error during {operation} on {collection}: {e}")
        raise StoreUnavailable(str(e)) from e


class MongoDocumentStore:
    """MongoDB adapter for document-based database operations"""

    def __init__(
        self,
        connection_string: str,
        database: Optional[str] = None,
        server_selection_timeout_ms: int = 5000,
    ):
        if not connection_string:
            raise ValueError("MongoDB connection string required. Set MONGODB_URI or pass connection_string")

        self.connection_string = connection_string
        self.client = AsyncMongoClient(
            connection_string,
            tz_aware=True,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
        )
        self.db = self.client.get_default_database(default=database or DEFAULT_DATABASE)
        logger.info(f"Configured MongoDB database: {self.db.name}")

    async def init_collections(self) -> None:
        """Create indexes for every known collection"""
        for collection, indexes in COLLECTION_INDEXES.items():
            with _translate_errors("init_collections", collection):
                for order in indexes:
                    keys = [
                        (field, ASCENDING if direction == ORDER_ASC else DESCENDING)
                        for field, direction in order
                    ]
                    await self.db[collection].create_index(keys)
        logger.info("MongoDB collections and indexes initialized successfully")

    async def create_document(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document under a server-side ObjectId and return its id"""
        doc_id = ObjectId()
        fields, server_fields = split_server_timestamps(document)

        with _translate_errors("create_document", collection):
            if server_fields:
                update: Dict[str, Any] = {"$currentDate": {key: True for key in server_fields}}
                if fields:
                    update["$set"] = fields
                await self.db[collection].update_one({"_id": doc_id}, update, upsert=True)
            else:
                await self.db[collection].insert_one({"_id": doc_id, **fields})

        logger.info(f"Created document in {collection} with ID: {doc_id}")
        return str(doc_id)

    async def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Get a document by ID"""
        with _translate_errors("get_document", collection):
            document = await self.db[collection].find_one({"_id": to_document_id(doc_id)})
        if document:
            return from_mongo(document)
        return None

    async def set_document(
        self, collection: str, doc_id: str, document: Dict[str, Any], merge: bool = True
    ) -> None:
        """Write a document under a caller-chosen id, merging or replacing"""
        fields, server_fields = split_server_timestamps(document)
        query = {"_id": to_document_id(doc_id)}

        with _translate_errors("set_document", collection):
            if merge:
                update: Dict[str, Any] = {}
                if fields:
                    update["$set"] = fields
                if server_fields:
                    update["$currentDate"] = {key: True for key in server_fields}
                if update:
                    await self.db[collection].update_one(query, update, upsert=True)
            else:
                pipeline: List[Dict[str, Any]] = [{"$replaceWith": {"$literal": fields}}]
                if server_fields:
                    pipeline.append({"$set": {key: "$$NOW" for key in server_fields}})
                await self.db[collection].update_one(query, pipeline, upsert=True)

        logger.info(f"Set document in {collection} with ID: {doc_id}")

    async def update_document(self, collection: str, doc_id: str, patch: Dict[str, Any]) -> None:
        """Merge the patch's top-level fields into an existing document"""
        fields, server_fields = split_server_timestamps(patch)
        update: Dict[str, Any] = {}
        if fields:
            update["$set"] = fields
        if server_fields:
            update["$currentDate"] = {key: True for key in server_fields}
        if not update:
            raise ValueError("Update patch is empty")

        with _translate_errors("update_document", collection):
            result = await self.db[collection].update_one({"_id": to_document_id(doc_id)}, update)

        if result.matched_count == 0:
            logger.warning(f"No document found to update in {collection} with ID: {doc_id}")
            raise NotFound(collection, doc_id)
        logger.info(f"Updated document in {collection} with ID: {doc_id}")

    async def delete_document(self, collection: str, doc_id: str) -> None:
        """Delete a document by ID"""
        with _translate_errors("delete_document", collection):
            result = await self.db[collection].delete_one({"_id": to_document_id(doc_id)})

        if result.deleted_count == 0:
            logger.warning(f"No document found to delete in {collection} with ID: {doc_id}")
            raise NotFound(collection, doc_id)
        logger.info(f"Deleted document from {collection} with ID: {doc_id}")

    async def query_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[OrderSpec] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Query documents with equality filters and ordering"""
        validate_order(order_by or [])
        sort = [
            (field, ASCENDING if direction == ORDER_ASC else DESCENDING)
            for field, direction in order_by or []
        ]
        sort.append(("_id", ASCENDING))

        with _translate_errors("query_documents", collection):
            cursor = self.db[collection].find(filters or {}).sort(sort)
            if limit is not None:
                cursor = cursor.limit(limit)
            documents = [from_mongo(doc) async for doc in cursor]
        return documents

    async def count_documents(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching the filters"""
        with _translate_errors("count_documents", collection):
            return await self.db[collection].count_documents(filters or {})

    async def close(self) -> None:
        """Close MongoDB connection"""
        await self.client.close()
        logger.info("MongoDB connection closed")
