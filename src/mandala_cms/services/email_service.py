"""
Email service.
Emails are append-only: they can be created, listed and deleted, never edited.
"""

from content_db.collections import DESCENDING, EMAILS
from content_db.schemas import EmailMessage, EmailMessageFields

from .base import AppendOnlyService


class EmailService(AppendOnlyService[EmailMessage]):
    """Service for the emails collection"""

    collection = EMAILS
    fields_model = EmailMessageFields
    record_model = EmailMessage
    order_by = [("created_at", DESCENDING)]
