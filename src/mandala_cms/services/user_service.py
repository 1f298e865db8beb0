"""
CMS user service.

User documents hold profile and role only. Credentials are owned by the
external identity provider and are never stored here.
"""

import logging
from typing import Any, Dict, Optional

from content_db.collections import DESCENDING, USERS
from content_db.schemas import CMSUser, CMSUserCreate, CMSUserFields, CMSUserUpdate

from .base import ContentService, Payload

logger = logging.getLogger(__name__)


class UserService(ContentService[CMSUser]):
    """Service for managing CMS user documents"""

    collection = USERS
    fields_model = CMSUserFields
    create_model = CMSUserCreate
    update_model = CMSUserUpdate
    record_model = CMSUser
    order_by = [("updated_at", DESCENDING)]

    def _patch_payload(self, patch: Payload) -> Dict[str, Any]:
        # An explicit null means "leave unchanged", not "clear"
        payload = super()._patch_payload(patch)
        return {k: v for k, v in payload.items() if v is not None}

    async def get_by_email(self, email: str) -> Optional[CMSUser]:
        documents = await self.store.query_documents(
            self.collection, filters={"email": email}, order_by=self.order_by, limit=1
        )
        if not documents:
            return None
        return self._to_record(documents[0])
