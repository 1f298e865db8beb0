"""
Collection registry for the CMS document store.

Names every collection the site reads or writes, the fields each one is
indexed on, and the sentinel used to request the store's own clock.
"""

from typing import Dict, List, Tuple

SUB_COMPANIES = "sub_companies"
GALLERIES = "galleries"
NEWS = "news"
BENEFITS = "benefits"
DIVISIONS = "divisions"
ORGANIZATIONS = "organizations"
USERS = "users"
EMAILS = "emails"
PAGES = "pages"
COMPANY_PROFILES = "company_profiles"

ASCENDING = "asc"
DESCENDING = "desc"

OrderSpec = List[Tuple[str, str]]


class _ServerTimestamp:
    """Placeholder resolved to the store's clock when a document is written"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


# Field indexes per collection, mirrored on every backend.
COLLECTION_INDEXES: Dict[str, List[OrderSpec]] = {
    SUB_COMPANIES: [[("name", ASCENDING)]],
    GALLERIES: [
        [("created_at", DESCENDING)],
        [("type", ASCENDING), ("created_at", DESCENDING)],
    ],
    NEWS: [
        [("created_at", DESCENDING)],
        [("status", ASCENDING), ("published_at", DESCENDING)],
        [("slug", ASCENDING)],
    ],
    BENEFITS: [[("name", ASCENDING)], [("sub_company_id", ASCENDING), ("name", ASCENDING)]],
    DIVISIONS: [[("name", ASCENDING)], [("sub_company_id", ASCENDING), ("name", ASCENDING)]],
    ORGANIZATIONS: [[("name", ASCENDING)]],
    USERS: [[("updated_at", DESCENDING)], [("email", ASCENDING)]],
    EMAILS: [[("created_at", DESCENDING)]],
    PAGES: [],
    COMPANY_PROFILES: [],
}

ALL_COLLECTIONS = list(COLLECTION_INDEXES)


def validate_order(order_by: OrderSpec) -> None:
    """Reject order directions other than asc/desc"""
    for field, direction in order_by:
        if direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"Invalid order direction for {field}: {direction}")
