from contextlib import asynccontextmanager
from textwrap import dedent
import logging

import pydantic
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from content_db.errors import DocumentStoreError
from content_db.store import get_document_store
from mandala_cms.config.logging_config import configure_logging
from mandala_cms.config.settings import Settings, get_settings
from mandala_cms.errors import (
    MediaError,
    handle_broad_exceptions,
    handle_domain_errors,
    handle_pydantic_validation_errors,
)
from mandala_cms.media import MediaStorage
from mandala_cms.routers.gallery import router as gallery_router
from mandala_cms.routers.health import router as health_router
from mandala_cms.routers.media import router as media_router
from mandala_cms.routers.news import router as news_router
from mandala_cms.routers.site import router as site_router
from mandala_cms.routers.sub_companies import router as sub_companies_router
from mandala_cms.routers.users import router as users_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = get_document_store(
            backend=settings.database_backend,
            sqlite_path=settings.sqlite_path,
            mongodb_uri=settings.mongodb_uri,
            mongodb_database=settings.mongodb_database,
        )
        logger.info("initializing document collections")
        await store.init_collections()
        app.state.store = store
        app.state.media = MediaStorage.from_settings(settings)
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title="Mandala CMS API",
        summary="Content and media for the company website and admin panel",
        version="v1",
        description=dedent(
            """\
        Content collections (sub-companies, galleries, news, organization,
        divisions, benefits, users, emails) plus the company profile, page
        overrides and media uploads.
        """
        ),
        docs_url="/",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings

    app.include_router(sub_companies_router, prefix="/v1", tags=["content"])
    app.include_router(gallery_router, prefix="/v1", tags=["galleries"])
    app.include_router(news_router, prefix="/v1", tags=["news"])
    app.include_router(users_router, prefix="/v1", tags=["users"])
    app.include_router(site_router, prefix="/v1", tags=["site"])
    app.include_router(media_router, prefix="/v1", tags=["media"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.add_exception_handler(exc_class_or_status_code=DocumentStoreError, handler=handle_domain_errors)
    app.add_exception_handler(exc_class_or_status_code=MediaError, handler=handle_domain_errors)
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
