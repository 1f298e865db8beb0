"""Division service. Divisions are scoped to a sub-company."""

from content_db.collections import ASCENDING, DIVISIONS
from content_db.schemas import Division, DivisionFields

from .base import SubCompanyScopedService


class DivisionService(SubCompanyScopedService[Division]):
    """Service for managing division documents"""

    collection = DIVISIONS
    fields_model = DivisionFields
    record_model = Division
    order_by = [("name", ASCENDING)]
