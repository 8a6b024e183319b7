"""Upload API endpoints"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from keepsake.application.use_cases.uploads.upload_operations import \
    UploadService
from keepsake.presentation.api.dependencies import get_upload_service
from keepsake.presentation.api.v1.schemas.upload import (UploadCreate,
                                                         UploadListResponse,
                                                         UploadResponse)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    data: UploadCreate,
    service: Annotated[UploadService, Depends(get_upload_service)],
):
    """
    Upload an image as a base64 data URL.

    The stored name is generated server-side; only the extension of
    `filename` is kept.
    """
    url = await service.store_upload(data.filename, data.dataUrl)
    return UploadResponse(url=url)


@router.get("/uploads", response_model=UploadListResponse)
async def list_uploads(
    service: Annotated[UploadService, Depends(get_upload_service)],
):
    """
    List uploaded files.

    Side effect: every upload no timeline item references is deleted
    before the listing is taken. `cleaned` reports how many.
    """
    listing = await service.list_uploads()
    return UploadListResponse(files=listing.files, cleaned=listing.cleaned)
