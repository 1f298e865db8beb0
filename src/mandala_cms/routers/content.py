"""
Route factory for collection CRUD.

Every content collection exposes the same list / get / create / update /
delete surface; the entity service behind the dependency decides ordering,
defaults and which fields are writable.
"""

from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from content_db.errors import NotFound
from content_db.schemas import to_transport
from mandala_cms.media import MediaCleanupOutcome


def deletion_response(doc_id: str, outcome: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"id": doc_id, "deleted": True}
    if isinstance(outcome, MediaCleanupOutcome):
        body["media"] = {"attempted": outcome.attempted, "failed": outcome.failed}
    return body


def build_crud_router(
    resource: str,
    get_service: Callable,
    *,
    include_list: bool = True,
    scoped: bool = False,
    updatable: bool = True,
) -> APIRouter:
    """
    Build the CRUD routes for one collection under ``/{resource}``.

    :param resource: URL segment, e.g. "sub-companies".
    :param get_service: FastAPI dependency returning the entity service.
    :param include_list: register ``GET /{resource}``; off when the caller adds its own.
    :param scoped: accept a ``sub_company_id`` filter on the list route.
    :param updatable: register ``PATCH /{resource}/{id}``.
    """
    router = APIRouter()
    slug = resource.replace("-", "_")

    if include_list and scoped:
        @router.get(f"/{resource}", name=f"list_{slug}")
        async def list_documents(
            sub_company_id: Optional[str] = Query(None, description="Only entries of this sub-company"),
            service=Depends(get_service),
        ):
            """List entries, optionally restricted to one sub-company."""
            if sub_company_id:
                return to_transport(await service.list_by_sub_company(sub_company_id))
            return to_transport(await service.list())

    elif include_list:
        @router.get(f"/{resource}", name=f"list_{slug}")
        async def list_documents(service=Depends(get_service)):
            """List all entries in the collection's display order."""
            return to_transport(await service.list())

    @router.get(f"/{resource}/{{doc_id}}", name=f"get_{slug}")
    async def get_document(
        doc_id: str = Path(..., description="Document id"),
        service=Depends(get_service),
    ):
        record = await service.get_by_id(doc_id)
        if record is None:
            raise NotFound(service.collection, doc_id)
        return to_transport(record)

    @router.post(f"/{resource}", name=f"create_{slug}", status_code=status.HTTP_201_CREATED)
    async def create_document(
        payload: Dict[str, Any] = Body(..., description="Fields of the new entry"),
        service=Depends(get_service),
    ):
        """Create an entry; unspecified fields take their defaults."""
        return to_transport(await service.create_record(payload))

    if updatable:
        @router.patch(f"/{resource}/{{doc_id}}", name=f"update_{slug}")
        async def update_document(
            doc_id: str = Path(..., description="Document id"),
            patch: Dict[str, Any] = Body(..., description="Fields to change"),
            service=Depends(get_service),
        ):
            """Change only the supplied fields."""
            await service.update(doc_id, patch)
            record = await service.get_by_id(doc_id)
            if record is None:
                raise NotFound(service.collection, doc_id)
            return to_transport(record)

    @router.delete(f"/{resource}/{{doc_id}}", name=f"delete_{slug}")
    async def delete_document(
        doc_id: str = Path(..., description="Document id"),
        service=Depends(get_service),
    ):
        """Delete an entry, releasing any media it owns first."""
        outcome = await service.delete(doc_id)
        return deletion_response(doc_id, outcome)

    return router
