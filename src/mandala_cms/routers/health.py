import logging

from fastapi import APIRouter, Request

from content_db.collections import SUB_COMPANIES

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API, the document store and the media bucket along
    with the deployment mode.
    """
    settings = request.app.state.settings

    health_status = {
        "status": "ok",
        "deployment_mode": settings.deployment_mode,
        "components": {
            "api": "ready",
            "database": "ready",
            "media": "ready",
        },
        "ready": False,
    }

    try:
        await request.app.state.store.count_documents(SUB_COMPANIES)
    except Exception as e:
        logger.warning(f"Document store health check failed: {e}")
        health_status["components"]["database"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    try:
        await request.app.state.media.check_bucket()
    except Exception as e:
        logger.warning(f"Media bucket health check failed: {e}")
        health_status["components"]["media"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )
    return health_status
