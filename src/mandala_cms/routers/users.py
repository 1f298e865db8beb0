from fastapi import APIRouter

from mandala_cms.dependencies import user_service
from mandala_cms.routers.content import build_crud_router

router = APIRouter()

router.include_router(build_crud_router("users", user_service))
