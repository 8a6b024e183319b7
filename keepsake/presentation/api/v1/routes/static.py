"""Static file endpoints: bundled assets, admin interface and uploads.

This router holds a catch-all path and must be included last.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from keepsake.domain.enums import StaticBase
from keepsake.infrastructure.exceptions import StorageNotFoundError
from keepsake.infrastructure.external.storage import StaticResolverRegistry
from keepsake.presentation.api.dependencies import get_static_resolvers

router = APIRouter()

Resolvers = Annotated[StaticResolverRegistry, Depends(get_static_resolvers)]


def _serve(resolvers: StaticResolverRegistry, base: StaticBase, relative_path: str) -> StreamingResponse:
    try:
        resource = resolvers.resolve(base, relative_path)
    except StorageNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found") from None

    return StreamingResponse(
        resource.iter_bytes(),
        media_type=resource.content_type,
        headers={"Content-Length": str(resource.size)},
    )


@router.get("/admin", include_in_schema=False)
async def admin_index(resolvers: Resolvers):
    return _serve(resolvers, StaticBase.ADMIN, "index.html")


@router.get("/admin/{path:path}", include_in_schema=False)
async def admin_asset(path: str, resolvers: Resolvers):
    return _serve(resolvers, StaticBase.ADMIN, path)


@router.get("/gallery", include_in_schema=False)
@router.get("/gallery/", include_in_schema=False)
async def gallery(resolvers: Resolvers):
    return _serve(resolvers, StaticBase.PUBLIC, "gallery.html")


@router.get("/uploads/{path:path}", include_in_schema=False)
async def uploaded_file(path: str, resolvers: Resolvers):
    return _serve(resolvers, StaticBase.UPLOADS, path)


@router.get("/", include_in_schema=False)
async def index(resolvers: Resolvers):
    return _serve(resolvers, StaticBase.PUBLIC, "index.html")


@router.get("/{path:path}", include_in_schema=False)
async def public_asset(path: str, resolvers: Resolvers):
    return _serve(resolvers, StaticBase.PUBLIC, path)
