"""
Page content service.

Each public page keeps one document, keyed by the page name, holding only
the values an editor has overridden. Reads overlay those on the page's
built-in defaults.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from content_db.collections import PAGES, SERVER_TIMESTAMP
from content_db.schemas import PageContent, parse_record
from content_db.store import DocumentStore

logger = logging.getLogger(__name__)


class PageService:
    """Reads and replaces per-page content overrides"""

    collection = PAGES

    def __init__(self, store: DocumentStore):
        self.store = store

    async def get(self, page_name: str, defaults: Optional[Mapping[str, Any]] = None) -> PageContent:
        document = await self.store.get_document(self.collection, page_name)
        if document is None:
            return PageContent(name=page_name, content=dict(defaults or {}))

        stored = parse_record(PageContent, self.collection, {**document, "name": page_name})
        return PageContent(
            name=page_name,
            content={**(defaults or {}), **stored.content},
            updated_at=stored.updated_at,
        )

    async def save(self, page_name: str, content: Dict[str, Any]) -> PageContent:
        """Replace the page's overrides with ``content``"""
        document = {"content": dict(content), "updated_at": SERVER_TIMESTAMP}
        await self.store.set_document(self.collection, page_name, document, merge=False)
        logger.info(f"Saved content for page: {page_name}")
        return await self.get(page_name)
