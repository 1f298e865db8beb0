"""
Content services, one per CMS collection.

Factories take the store (and media storage where an entity owns blobs) so
the API and tests can inject their own.
"""

from content_db.store import DocumentStore
from mandala_cms.config.settings import Settings
from mandala_cms.media import MediaStorage

from .benefit_service import BenefitService
from .company_profile_service import CompanyProfileService
from .division_service import DivisionService
from .email_service import EmailService
from .gallery_service import GalleryService
from .news_service import NewsService
from .organization_service import OrganizationService
from .page_service import PageService
from .sub_company_service import SubCompanyService
from .user_service import UserService


def get_sub_company_service(store: DocumentStore, media: MediaStorage) -> SubCompanyService:
    return SubCompanyService(store, media)


def get_gallery_service(store: DocumentStore, media: MediaStorage) -> GalleryService:
    return GalleryService(store, media)


def get_news_service(store: DocumentStore) -> NewsService:
    return NewsService(store)


def get_organization_service(store: DocumentStore) -> OrganizationService:
    return OrganizationService(store)


def get_division_service(store: DocumentStore) -> DivisionService:
    return DivisionService(store)


def get_benefit_service(store: DocumentStore) -> BenefitService:
    return BenefitService(store)


def get_user_service(store: DocumentStore) -> UserService:
    return UserService(store)


def get_email_service(store: DocumentStore) -> EmailService:
    return EmailService(store)


def get_company_profile_service(store: DocumentStore, settings: Settings) -> CompanyProfileService:
    return CompanyProfileService(store, settings.company_profile_id)


def get_page_service(store: DocumentStore) -> PageService:
    return PageService(store)


__all__ = [
    "BenefitService",
    "CompanyProfileService",
    "DivisionService",
    "EmailService",
    "GalleryService",
    "NewsService",
    "OrganizationService",
    "PageService",
    "SubCompanyService",
    "UserService",
    "get_benefit_service",
    "get_company_profile_service",
    "get_division_service",
    "get_email_service",
    "get_gallery_service",
    "get_news_service",
    "get_organization_service",
    "get_page_service",
    "get_sub_company_service",
    "get_user_service",
]
