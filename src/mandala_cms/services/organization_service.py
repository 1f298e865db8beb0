"""Organization member service."""

from content_db.collections import ASCENDING, ORGANIZATIONS
from content_db.schemas import OrganizationMember, OrganizationMemberFields

from .base import ContentService


class OrganizationService(ContentService[OrganizationMember]):
    """Service for managing organization member documents"""

    collection = ORGANIZATIONS
    fields_model = OrganizationMemberFields
    record_model = OrganizationMember
    order_by = [("name", ASCENDING)]
