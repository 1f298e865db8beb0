"""Benefit service. Benefits are scoped to a sub-company."""

from content_db.collections import ASCENDING, BENEFITS
from content_db.schemas import Benefit, BenefitFields

from .base import SubCompanyScopedService


class BenefitService(SubCompanyScopedService[Benefit]):
    """Service for managing benefit documents"""

    collection = BENEFITS
    fields_model = BenefitFields
    record_model = Benefit
    order_by = [("name", ASCENDING)]
