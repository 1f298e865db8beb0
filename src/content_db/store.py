"""Document store interface and backend selection."""

import logging
from typing import Any, Dict, List, Optional, Protocol

from .collections import OrderSpec

logger = logging.getLogger(__name__)

SQLITE_BACKEND = "sqlite"
MONGO_BACKEND = "mongo"


class DocumentStore(Protocol):
    """Operations every document store backend provides"""

    async def init_collections(self) -> None: ...

    async def create_document(self, collection: str, document: Dict[str, Any]) -> str: ...

    async def get_document(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]: ...

    async def set_document(
        self, collection: str, doc_id: str, document: Dict[str, Any], merge: bool = True
    ) -> None: ...

    async def update_document(self, collection: str, doc_id: str, patch: Dict[str, Any]) -> None: ...

    async def delete_document(self, collection: str, doc_id: str) -> None: ...

    async def query_documents(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[OrderSpec] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]: ...

    async def count_documents(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int: ...

    async def close(self) -> None: ...


def get_document_store(
    backend: str = SQLITE_BACKEND,
    sqlite_path: str = "mandala_cms.db",
    mongodb_uri: Optional[str] = None,
    mongodb_database: Optional[str] = None,
) -> DocumentStore:
    """Build the document store for the configured backend"""
    if backend == MONGO_BACKEND:
        from .mongo_adapter import MongoDocumentStore

        logger.info("Using MongoDB document store")
        return MongoDocumentStore(mongodb_uri, database=mongodb_database)
    if backend == SQLITE_BACKEND:
        from .sqlite_adapter import SQLiteDocumentStore

        logger.info(f"Using SQLite document store at {sqlite_path}")
        return SQLiteDocumentStore(sqlite_path)
    raise ValueError(f"Unknown document store backend: {backend}")
