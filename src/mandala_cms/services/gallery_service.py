"""
Gallery service.

Gallery items own every image and video listed on them; deleting an item
releases all of that media before the document goes away.
"""

import logging
from typing import Any, Dict, List, Union

from content_db.collections import DESCENDING, GALLERIES
from content_db.schemas import GalleryItem, GalleryItemFields, GalleryType

from .base import MediaOwningService

logger = logging.getLogger(__name__)


class GalleryService(MediaOwningService[GalleryItem]):
    """Service for managing gallery documents"""

    collection = GALLERIES
    fields_model = GalleryItemFields
    record_model = GalleryItem
    order_by = [("created_at", DESCENDING)]

    async def list_by_type(self, gallery_type: Union[GalleryType, str]) -> List[GalleryItem]:
        """Gallery items of one placement, newest first"""
        return await self.list_where("type", GalleryType(gallery_type).value)

    def owned_media(self, document: Dict[str, Any]) -> List[str]:
        images = document.get("images") or []
        return [
            image["url"]
            for image in images
            if isinstance(image, dict) and isinstance(image.get("url"), str) and image["url"]
        ]
