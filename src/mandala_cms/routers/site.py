from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Path

from content_db.schemas import to_transport
from mandala_cms.dependencies import company_profile_service, email_service, page_service
from mandala_cms.routers.content import build_crud_router
from mandala_cms.services import CompanyProfileService, PageService

router = APIRouter()

router.include_router(build_crud_router("emails", email_service, updatable=False))


@router.get("/company-profile")
async def get_company_profile(service: CompanyProfileService = Depends(company_profile_service)):
    """Return the company profile; empty fields when it was never saved."""
    return to_transport(await service.get())


@router.put("/company-profile")
async def update_company_profile(
    profile: Dict[str, Any] = Body(..., description="Profile fields to change"),
    service: CompanyProfileService = Depends(company_profile_service),
):
    """Merge the supplied fields into the company profile."""
    return to_transport(await service.update(profile))


@router.get("/pages/{page_name}")
async def get_page(
    page_name: str = Path(..., description="Page name, e.g. 'home' or 'about'"),
    service: PageService = Depends(page_service),
):
    return to_transport(await service.get(page_name))


@router.put("/pages/{page_name}")
async def save_page(
    page_name: str = Path(..., description="Page name, e.g. 'home' or 'about'"),
    content: Dict[str, Any] = Body(..., description="Complete set of overrides for the page"),
    service: PageService = Depends(page_service),
):
    """Replace the page's stored overrides."""
    return to_transport(await service.save(page_name, content))
