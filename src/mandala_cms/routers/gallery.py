from typing import Optional

from fastapi import APIRouter, Depends, Query

from content_db.schemas import GalleryType, to_transport
from mandala_cms.dependencies import gallery_service
from mandala_cms.routers.content import build_crud_router
from mandala_cms.services import GalleryService

router = APIRouter()


@router.get("/galleries")
async def list_galleries(
    type: Optional[GalleryType] = Query(None, description="Only items shown in this placement"),
    service: GalleryService = Depends(gallery_service),
):
    """
    List gallery items, newest first.

    Args:
        type: Optional placement filter ("Home" or "gallery")

    Returns:
        list: Gallery items with their media
    """
    if type is not None:
        return to_transport(await service.list_by_type(type))
    return to_transport(await service.list())


router.include_router(build_crud_router("galleries", gallery_service, include_list=False))
