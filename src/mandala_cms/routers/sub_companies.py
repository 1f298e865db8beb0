from fastapi import APIRouter

from mandala_cms.dependencies import (
    benefit_service,
    division_service,
    organization_service,
    sub_company_service,
)
from mandala_cms.routers.content import build_crud_router

router = APIRouter()

router.include_router(build_crud_router("sub-companies", sub_company_service))
router.include_router(build_crud_router("organizations", organization_service))
router.include_router(build_crud_router("divisions", division_service, scoped=True))
router.include_router(build_crud_router("benefits", benefit_service, scoped=True))
