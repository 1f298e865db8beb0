"""
News service.

Articles are created as drafts. Only published articles are listed on the
public site or resolvable by slug; publishing stamps the store's clock.
"""

import logging
from typing import List, Optional

from content_db.collections import DESCENDING, NEWS, SERVER_TIMESTAMP
from content_db.schemas import NewsArticle, NewsArticleCreate, NewsArticleFields, NewsStatus

from .base import ContentService

logger = logging.getLogger(__name__)

PUBLISHED_ORDER = [("published_at", DESCENDING)]


class NewsService(ContentService[NewsArticle]):
    """Service for managing news documents"""

    collection = NEWS
    fields_model = NewsArticleFields
    create_model = NewsArticleCreate
    record_model = NewsArticle
    order_by = [("created_at", DESCENDING)]

    async def list_published(self, limit: Optional[int] = None) -> List[NewsArticle]:
        """Published articles, most recently published first"""
        documents = await self.store.query_documents(
            self.collection,
            filters={"status": NewsStatus.PUBLISHED.value},
            order_by=PUBLISHED_ORDER,
            limit=limit,
        )
        return [self._to_record(doc) for doc in documents]

    async def get_published_by_slug(self, slug: str) -> Optional[NewsArticle]:
        documents = await self.store.query_documents(
            self.collection,
            filters={"slug": slug, "status": NewsStatus.PUBLISHED.value},
            order_by=PUBLISHED_ORDER,
            limit=1,
        )
        if not documents:
            return None
        return self._to_record(documents[0])

    async def publish(self, doc_id: str) -> None:
        await self.store.update_document(
            self.collection,
            doc_id,
            {
                "status": NewsStatus.PUBLISHED.value,
                "published_at": SERVER_TIMESTAMP,
                "updated_at": SERVER_TIMESTAMP,
            },
        )
        logger.info(f"Published news article: {doc_id}")

    async def unpublish(self, doc_id: str) -> None:
        await self.store.update_document(
            self.collection,
            doc_id,
            {
                "status": NewsStatus.DRAFT.value,
                "published_at": None,
                "updated_at": SERVER_TIMESTAMP,
            },
        )
        logger.info(f"Unpublished news article: {doc_id}")
