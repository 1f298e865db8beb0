"""Exceptions raised by the document stores and record deserialization."""

from typing import Any, List, Optional


class DocumentStoreError(Exception):
    """Base class for document store failures"""


class NotFound(DocumentStoreError):
    """No document exists with the requested id"""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"No document '{doc_id}' in collection '{collection}'")


class StoreUnavailable(DocumentStoreError):
    """The backing store could not be reached or failed to execute a request"""


class MalformedRecord(DocumentStoreError):
    """A stored document does not match its entity schema"""

    def __init__(self, collection: str, doc_id: str, errors: Optional[List[Any]] = None):
        self.collection = collection
        self.doc_id = doc_id
        self.errors = errors or []
        super().__init__(
            f"Document '{doc_id}' in collection '{collection}' is malformed: {self.errors}"
        )
