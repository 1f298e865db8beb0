"""Exceptions raised by the media layer and the API's exception handlers."""

import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import JSONResponse

from content_db.errors import MalformedRecord, NotFound, StoreUnavailable

logger = logging.getLogger(__name__)


class MediaError(Exception):
    """Base class for media storage failures"""


class UnsupportedMediaType(MediaError):
    """The file is neither an image nor a video"""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"File must be an image or video, got '{content_type}'.")


class MediaTooLarge(MediaError):
    """The file exceeds the size ceiling for its media kind"""

    def __init__(self, size_bytes: int, limit_bytes: int, limit_label: str):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        self.limit_label = limit_label
        super().__init__(f"File size exceeds {limit_label} limit.")


class UploadFailed(MediaError):
    """The object store rejected a validated upload"""


# ---------------------------------------------------------------------- #
# FastAPI handlers
# ---------------------------------------------------------------------- #

ERROR_STATUS_CODES = {
    NotFound: status.HTTP_404_NOT_FOUND,
    MalformedRecord: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    UnsupportedMediaType: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    MediaTooLarge: status.HTTP_413_CONTENT_TOO_LARGE,
    UploadFailed: status.HTTP_502_BAD_GATEWAY,
}


async def handle_domain_errors(request: Request, exc: Exception) -> JSONResponse:
    """Map store and media exceptions to HTTP status codes."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Return 422 for payloads rejected by the entity schemas."""
    errors = exc.errors(include_url=False, include_context=False)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": [
                {"loc": list(error["loc"]), "msg": error["msg"]}
                for error in errors
            ]
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates during request processing."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(err)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
