from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from content_db.errors import NotFound
from content_db.schemas import to_transport
from mandala_cms.dependencies import news_service
from mandala_cms.routers.content import build_crud_router
from mandala_cms.services import NewsService

router = APIRouter()


@router.get("/news/published")
async def list_published_news(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of articles to return"),
    service: NewsService = Depends(news_service),
):
    """List published articles, most recently published first."""
    return to_transport(await service.list_published(limit=limit))


@router.get("/news/published/{slug}")
async def get_published_news(
    slug: str = Path(..., description="Article slug"),
    service: NewsService = Depends(news_service),
):
    """Resolve a published article by its slug. Drafts are not visible here."""
    article = await service.get_published_by_slug(slug)
    if article is None:
        raise NotFound(service.collection, slug)
    return to_transport(article)


@router.post("/news/{doc_id}/publish")
async def publish_news(
    doc_id: str = Path(..., description="Article id"),
    service: NewsService = Depends(news_service),
):
    await service.publish(doc_id)
    return to_transport(await service.get_by_id(doc_id))


@router.post("/news/{doc_id}/unpublish")
async def unpublish_news(
    doc_id: str = Path(..., description="Article id"),
    service: NewsService = Depends(news_service),
):
    await service.unpublish(doc_id)
    return to_transport(await service.get_by_id(doc_id))


router.include_router(build_crud_router("news", news_service))
