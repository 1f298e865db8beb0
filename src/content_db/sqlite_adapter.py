"""
SQLite JSON document store.

Keeps every collection in a single ``documents`` table and uses the JSON1
functions for filtering, ordering and partial merges. Blocking sqlite3 calls
run in worker threads so callers can await them like any other store.
"""

import asyncio
import json
import logging
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterator, List, Optional

from .collections import COLLECTION_INDEXES, SERVER_TIMESTAMP, OrderSpec, validate_order
from .errors import NotFound, StoreUnavailable

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_timestamp(value: datetime) -> str:
    """Fixed-width UTC form so string order matches chronological order"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _json_path(field: str) -> str:
    return f'$."{field}"'


class SQLiteDocumentStore:
    """Document store backed by a local SQLite database file"""

    def __init__(self, db_path: str = "mandala_cms.db"):
        self.db_path = db_path
        self._clock_lock = threading.Lock()
        self._last_timestamp: Optional[datetime] = None

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, translating driver failures into StoreUnavailable"""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite store error on {self.db_path}: {e}")
            raise StoreUnavailable(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def _now(self) -> datetime:
        """Store clock; every reading is strictly later than the previous one"""
        with self._clock_lock:
            now = datetime.now(timezone.utc)
            if self._last_timestamp is not None and now <= self._last_timestamp:
                now = self._last_timestamp + timedelta(microseconds=1)
            self._last_timestamp = now
            return now

    def _resolve_server_timestamps(self, document: Dict[str, Any]) -> Dict[str, Any]:
        now = None
        resolved = {}
        for key, value in document.items():
            if value is SERVER_TIMESTAMP:
                # One clock reading per write so created_at == updated_at on create
                now = now or self._now()
                value = now
            resolved[key] = value
        return resolved

    def _serialize_value(self, value: Any) -> str:
        def json_serializer(obj):
            if isinstance(obj, datetime):
                return format_timestamp(obj)
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

        return json.dumps(value, default=json_serializer)

    def _deserialize_document(self, doc_id: str, json_str: str) -> Dict[str, Any]:
        document = json.loads(json_str)
        document["id"] = doc_id
        return document

    def _bind_value(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return format_timestamp(value)
        return value

    # ------------------------------------------------------------------ #
    # Synchronous implementations, executed in worker threads
    # ------------------------------------------------------------------ #

    def _init_collections(self) -> None:
        with self._connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS documents (
                    collection TEXT NOT NULL,
                    doc_id TEXT NOT NULL,
                    document TEXT NOT NULL,
                    PRIMARY KEY (collection, doc_id)
                )
            ''')
            for collection, indexes in COLLECTION_INDEXES.items():
                for order in indexes:
                    name = "_".join(["idx", collection] + [field for field, _ in order])
                    columns = ", ".join(
                        f"json_extract(document, '{_json_path(field)}') {direction.upper()}"
                        for field, direction in order
                    )
                    conn.execute(
                        f"CREATE INDEX IF NOT EXISTS {name} ON documents(collection, {columns})"
                    )
        logger.info(f"SQLite document collections initialized in {self.db_path}")

    def _create_document(self, collection: str, document: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        payload = self._resolve_server_timestamps(document)
        payload.pop("id", None)
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO documents (collection, doc_id, document) VALUES (?, ?, ?)",
                (collection, doc_id, self._serialize_value(payload)),
            )
        logger.info(f"Created document in {collection} with ID: {doc_id}")
        return doc_id

    def _get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT document FROM documents WHERE collection = ? AND doc_id = ?",
                (collection, doc_id),
            ).fetchone()
        if row:
            return self._deserialize_document(doc_id, row["document"])
        return None

    def _set_document(
        self, collection: str, doc_id: str, document: Dict[str, Any], merge: bool
    ) -> None:
        payload = self._resolve_server_timestamps(document)
        payload.pop("id", None)
        with self._connection() as conn:
            if merge:
                row = conn.execute(
                    "SELECT document FROM documents WHERE collection = ? AND doc_id = ?",
                    (collection, doc_id),
                ).fetchone()
                if row:
                    payload = {**json.loads(row["document"]), **payload}
            conn.execute(
                "INSERT OR REPLACE INTO documents (collection, doc_id, document) VALUES (?, ?, ?)",
                (collection, doc_id, self._serialize_value(payload)),
            )
        logger.info(f"Set document in {collection} with ID: {doc_id}")

    def _update_document(self, collection: str, doc_id: str, patch: Dict[str, Any]) -> None:
        payload = self._resolve_server_timestamps(patch)
        payload.pop("id", None)
        if not payload:
            raise ValueError("Update patch is empty")

        assignments = []
        params: List[Any] = []
        for key, value in payload.items():
            assignments.append("?, json(?)")
            params.extend([_json_path(key), self._serialize_value(value)])
        params.extend([collection, doc_id])

        with self._connection() as conn:
            cursor = conn.execute(
                f"UPDATE documents SET document = json_set(document, {', '.join(assignments)}) "
                "WHERE collection = ? AND doc_id = ?",
                params,
            )
            updated = cursor.rowcount > 0

        if not updated:
            logger.warning(f"No document found to update in {collection} with ID: {doc_id}")
            raise NotFound(collection, doc_id)
        logger.info(f"Updated document in {collection} with ID: {doc_id}")

    def _delete_document(self, collection: str, doc_id: str) -> None:
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM documents WHERE collection = ? AND doc_id = ?",
                (collection, doc_id),
            )
            deleted = cursor.rowcount > 0

        if not deleted:
            logger.warning(f"No document found to delete in {collection} with ID: {doc_id}")
            raise NotFound(collection, doc_id)
        logger.info(f"Deleted document from {collection} with ID: {doc_id}")

    def _build_where(self, collection: str, filters: Optional[Dict[str, Any]]):
        where_clauses = ["collection = ?"]
        params: List[Any] = [collection]
        for key, value in (filters or {}).items():
            if value is None:
                where_clauses.append("json_extract(document, ?) IS NULL")
                params.append(_json_path(key))
            else:
                where_clauses.append("json_extract(document, ?) = ?")
                params.extend([_json_path(key), self._bind_value(value)])
        return " WHERE " + " AND ".join(where_clauses), params

    def _query_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]],
        order_by: Optional[OrderSpec],
        limit: Optional[int],
    ) -> List[Dict[str, Any]]:
        where_sql, params = self._build_where(collection, filters)
        order_terms = []
        for field, direction in order_by or []:
            order_terms.append(f"json_extract(document, ?) {direction.upper()}")
            params.append(_json_path(field))
        order_terms.append("doc_id ASC")

        query = f"SELECT doc_id, document FROM documents{where_sql} ORDER BY {', '.join(order_terms)}"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._deserialize_document(row["doc_id"], row["document"]) for row in rows]

    def _count_documents(self, collection: str, filters: Optional[Dict[str, Any]]) -> int:
        where_sql, params = self._build_where(collection, filters)
        with self._connection() as conn:
            row = conn.execute(f"SELECT COUNT(*) AS count FROM documents{where_sql}", params).fetchone()
        return row["count"]

    # ------------------------------------------------------------------ #
    # Async interface
    # ------------------------------------------------------------------ #

    async def init_collections(self) -> None:
        """Create the documents table and per-collection indexes"""
        await asyncio.to_thread(self._init_collections)

    async def create_document(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document under a store-generated id and return the id"""
        return await asyncio.to_thread(self._create_document, collection, document)

    async def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Get a document by ID, or None when absent"""
        return await asyncio.to_thread(self._get_document, collection, doc_id)

    async def set_document(
        self, collection: str, doc_id: str, document: Dict[str, Any], merge: bool = True
    ) -> None:
        """Write a document under a caller-chosen id"""
        await asyncio.to_thread(self._set_document, collection, doc_id, document, merge)

    async def update_document(self, collection: str, doc_id: str, patch: Dict[str, Any]) -> None:
        """Merge the patch's top-level fields into an existing document"""
        await asyncio.to_thread(self._update_document, collection, doc_id, patch)

    async def delete_document(self, collection: str, doc_id: str) -> None:
        """Delete a document by ID"""
        await asyncio.to_thread(self._delete_document, collection, doc_id)

    async def query_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[OrderSpec] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Query documents with equality filters and ordering"""
        validate_order(order_by or [])
        return await asyncio.to_thread(
            self._query_documents, collection, filters, order_by, limit
        )

    async def count_documents(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching the filters"""
        return await asyncio.to_thread(self._count_documents, collection, filters)

    async def close(self) -> None:
        # Connections are opened per call
        return None
