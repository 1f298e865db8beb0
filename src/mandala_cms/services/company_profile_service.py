"""Company profile service. The profile is a single document with a fixed id."""

import logging

from content_db.collections import COMPANY_PROFILES, SERVER_TIMESTAMP
from content_db.schemas import CompanyProfile, CompanyProfileFields, parse_record
from content_db.store import DocumentStore

from .base import IMMUTABLE_FIELDS, Payload, _as_dict

logger = logging.getLogger(__name__)


class CompanyProfileService:
    """Reads and merges the company profile singleton"""

    collection = COMPANY_PROFILES

    def __init__(self, store: DocumentStore, profile_id: str):
        self.store = store
        self.profile_id = profile_id

    async def get(self) -> CompanyProfile:
        """The stored profile, or an empty profile if none was saved yet"""
        document = await self.store.get_document(self.collection, self.profile_id)
        if document is None:
            return CompanyProfile()
        return parse_record(CompanyProfile, self.collection, document)

    async def update(self, profile: Payload) -> CompanyProfile:
        """Merge the supplied fields into the profile, creating it if needed"""
        fields = {k: v for k, v in _as_dict(profile).items() if k not in IMMUTABLE_FIELDS}
        validated = CompanyProfileFields.model_validate(fields)
        payload = validated.model_dump(include=validated.model_fields_set)
        payload["updated_at"] = SERVER_TIMESTAMP
        await self.store.set_document(self.collection, self.profile_id, payload, merge=True)
        logger.info(f"Updated company profile ({', '.join(sorted(payload))})")
        return await self.get()
