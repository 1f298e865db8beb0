"""FastAPI dependencies resolving the store, media storage and services from app state."""

from fastapi import Depends, Request

from content_db.store import DocumentStore
from mandala_cms.config.settings import Settings
from mandala_cms.media import MediaStorage
from mandala_cms.services import (
    BenefitService,
    CompanyProfileService,
    DivisionService,
    EmailService,
    GalleryService,
    NewsService,
    OrganizationService,
    PageService,
    SubCompanyService,
    UserService,
    get_benefit_service,
    get_company_profile_service,
    get_division_service,
    get_email_service,
    get_gallery_service,
    get_news_service,
    get_organization_service,
    get_page_service,
    get_sub_company_service,
    get_user_service,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_media(request: Request) -> MediaStorage:
    return request.app.state.media


def sub_company_service(
    store: DocumentStore = Depends(get_store), media: MediaStorage = Depends(get_media)
) -> SubCompanyService:
    return get_sub_company_service(store, media)


def gallery_service(
    store: DocumentStore = Depends(get_store), media: MediaStorage = Depends(get_media)
) -> GalleryService:
    return get_gallery_service(store, media)


def news_service(store: DocumentStore = Depends(get_store)) -> NewsService:
    return get_news_service(store)


def organization_service(store: DocumentStore = Depends(get_store)) -> OrganizationService:
    return get_organization_service(store)


def division_service(store: DocumentStore = Depends(get_store)) -> DivisionService:
    return get_division_service(store)


def benefit_service(store: DocumentStore = Depends(get_store)) -> BenefitService:
    return get_benefit_service(store)


def user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return get_user_service(store)


def email_service(store: DocumentStore = Depends(get_store)) -> EmailService:
    return get_email_service(store)


def company_profile_service(
    store: DocumentStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> CompanyProfileService:
    return get_company_profile_service(store, settings)


def page_service(store: DocumentStore = Depends(get_store)) -> PageService:
    return get_page_service(store)
