"""
Sub-company service.
Sub-companies own their logo blob, which is released when the document is deleted.
"""

import logging
from typing import Any, Dict, List

from content_db.collections import ASCENDING, SUB_COMPANIES
from content_db.schemas import SubCompany, SubCompanyFields

from .base import MediaOwningService

logger = logging.getLogger(__name__)


class SubCompanyService(MediaOwningService[SubCompany]):
    """Service for managing sub-company documents"""

    collection = SUB_COMPANIES
    fields_model = SubCompanyFields
    record_model = SubCompany
    order_by = [("name", ASCENDING)]

    def owned_media(self, document: Dict[str, Any]) -> List[str]:
        logo = document.get("logo")
        return [logo] if isinstance(logo, str) and logo else []
