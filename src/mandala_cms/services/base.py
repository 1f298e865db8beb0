"""
Generic collection services.

Each entity service binds a collection, its schemas and its fixed list
order to one of these bases. Records are always returned as schema-checked
pydantic models with the store-generated id attached.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from content_db.collections import SERVER_TIMESTAMP, OrderSpec
from content_db.errors import NotFound
from content_db.schemas import DocumentFields, parse_record
from content_db.store import DocumentStore
from mandala_cms.media import MediaCleanupOutcome, MediaStorage

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

Payload = Union[Mapping[str, Any], BaseModel]

# Never writable through create/update payloads
IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}


def _as_dict(data: Payload) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True, by_alias=True)
    return dict(data)


class AppendOnlyService(Generic[RecordT]):
    """List, read, create and delete documents of one collection"""

    collection: str
    fields_model: Type[DocumentFields]
    record_model: Type[RecordT]
    order_by: OrderSpec = []
    create_model: Optional[Type[DocumentFields]] = None

    def __init__(self, store: DocumentStore):
        self.store = store

    def _to_record(self, document: Dict[str, Any]) -> RecordT:
        return parse_record(self.record_model, self.collection, document)

    def _timestamp_fields(self) -> Dict[str, Any]:
        return {"created_at": SERVER_TIMESTAMP}

    def _creation_payload(self, data: Payload) -> Dict[str, Any]:
        """Caller fields merged over the default template"""
        fields = {k: v for k, v in _as_dict(data).items() if k not in IMMUTABLE_FIELDS}
        model = self.create_model or self.fields_model
        validated = model.model_validate(fields)
        return {**validated.model_dump(by_alias=True), **self._timestamp_fields()}

    async def list(self) -> List[RecordT]:
        """All documents in the collection's fixed order"""
        documents = await self.store.query_documents(self.collection, order_by=self.order_by)
        return [self._to_record(doc) for doc in documents]

    async def list_where(self, field: str, value: Any) -> List[RecordT]:
        """Documents whose ``field`` equals ``value``, in the collection's order"""
        documents = await self.store.query_documents(
            self.collection, filters={field: value}, order_by=self.order_by
        )
        return [self._to_record(doc) for doc in documents]

    async def get_by_id(self, doc_id: str) -> Optional[RecordT]:
        """Point lookup; None when no document has that id"""
        document = await self.store.get_document(self.collection, doc_id)
        if document is None:
            return None
        return self._to_record(document)

    async def create(self, data: Payload) -> str:
        """Create a document and return its generated id"""
        payload = self._creation_payload(data)
        doc_id = await self.store.create_document(self.collection, payload)
        logger.info(f"Created {self.collection} document: {doc_id}")
        return doc_id

    async def create_record(self, data: Payload) -> RecordT:
        """Create a document and return the materialized record"""
        doc_id = await self.create(data)
        record = await self.get_by_id(doc_id)
        if record is None:
            raise NotFound(self.collection, doc_id)
        return record

    async def delete(self, doc_id: str) -> Any:
        """Delete a document; NotFound when the id is absent"""
        await self.store.delete_document(self.collection, doc_id)
        logger.info(f"Deleted {self.collection} document: {doc_id}")

    async def count(self) -> int:
        return await self.store.count_documents(self.collection)


class ContentService(AppendOnlyService[RecordT]):
    """Full CRUD over one collection, with updated_at restamped on every write"""

    update_model: Optional[Type[DocumentFields]] = None

    def _timestamp_fields(self) -> Dict[str, Any]:
        return {"created_at": SERVER_TIMESTAMP, "updated_at": SERVER_TIMESTAMP}

    def _patch_payload(self, patch: Payload) -> Dict[str, Any]:
        """Only the supplied fields, validated, plus a fresh updated_at"""
        fields = {k: v for k, v in _as_dict(patch).items() if k not in IMMUTABLE_FIELDS}
        model = self.update_model or self.fields_model
        validated = model.model_validate(fields)
        supplied = validated.model_fields_set
        payload = validated.model_dump(include=supplied, by_alias=True) if supplied else {}
        payload["updated_at"] = SERVER_TIMESTAMP
        return payload

    async def update(self, doc_id: str, patch: Payload) -> None:
        """Partial update; fields absent from the patch are left untouched"""
        payload = self._patch_payload(patch)
        await self.store.update_document(self.collection, doc_id, payload)
        logger.info(f"Updated {self.collection} document: {doc_id} ({', '.join(sorted(payload))})")


class SubCompanyScopedService(ContentService[RecordT]):
    """Entities that belong to a sub-company"""

    async def list_by_sub_company(self, sub_company_id: str) -> List[RecordT]:
        return await self.list_where("sub_company_id", sub_company_id)


class MediaOwningService(ContentService[RecordT], ABC):
    """
    Entities whose media blobs live and die with the document.

    Deleting reads the document, releases every owned blob concurrently,
    waits for all attempts to settle, and only then removes the document.
    A crash in between leaves orphaned blobs, never a document pointing at
    deleted media. Deleting an id that is already gone is a no-op.
    """

    def __init__(self, store: DocumentStore, media: MediaStorage):
        super().__init__(store)
        self.media = media

    @abstractmethod
    def owned_media(self, document: Dict[str, Any]) -> List[str]:
        """URLs of the blobs a raw document owns"""

    async def release_media(self, urls: List[str]) -> MediaCleanupOutcome:
        outcome = MediaCleanupOutcome(attempted=list(urls))
        if not urls:
            return outcome

        results = await asyncio.gather(
            *(self.media.delete_file(url) for url in urls), return_exceptions=True
        )
        for url, result in zip(urls, results):
            if isinstance(result, BaseException):
                logger.error(f"Media cleanup raised for {url}: {result}")
                outcome.failed.append(url)
            elif result is not True:
                outcome.failed.append(url)
        return outcome

    async def delete(self, doc_id: str) -> MediaCleanupOutcome:
        """Release owned media, then delete the document"""
        # Raw read: a malformed document must still be deletable
        document = await self.store.get_document(self.collection, doc_id)
        if document is None:
            logger.warning(f"No {self.collection} document {doc_id} to delete, nothing to release")
            return MediaCleanupOutcome()

        outcome = await self.release_media(self.owned_media(document))
        if outcome.failed:
            logger.warning(
                f"{len(outcome.failed)} of {len(outcome.attempted)} media deletions failed "
                f"for {self.collection} document {doc_id}: {outcome.failed}"
            )

        try:
            await self.store.delete_document(self.collection, doc_id)
        except NotFound:
            logger.warning(f"{self.collection} document {doc_id} was removed concurrently")
            return outcome

        logger.info(f"Deleted {self.collection} document: {doc_id}")
        return outcome
