"""Timeline item API endpoints"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from keepsake.application.use_cases.timeline.timeline_operations import \
    TimelineService
from keepsake.presentation.api.dependencies import get_timeline_service
from keepsake.presentation.api.v1.schemas.timeline import (ItemCreate,
                                                           ItemResponse,
                                                           ItemUpdate,
                                                           TimelineResponse)

router = APIRouter()


@router.get("", response_model=TimelineResponse, response_model_exclude_none=True)
@router.get(
    "/", response_model=TimelineResponse, response_model_exclude_none=True, include_in_schema=False
)
async def get_timeline(
    service: Annotated[TimelineService, Depends(get_timeline_service)],
):
    """
    Get the whole timeline document.

    Never fails: an unreadable document is served as an empty timeline.
    """
    document = await service.get_document()
    return document.to_dict()


@router.post(
    "",
    response_model=ItemResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    data: ItemCreate,
    service: Annotated[TimelineService, Depends(get_timeline_service)],
):
    """
    Create a timeline item.

    title and date are required. At most 9 images are kept.
    """
    item = await service.create_item(
        title=data.title,
        date=data.date,
        images=data.images,
        views=data.views.model_dump() if data.views else None,
    )
    return item.to_dict()


@router.put("/{item_id}", response_model=ItemResponse, response_model_exclude_none=True)
async def update_item(
    item_id: str,
    data: ItemUpdate,
    service: Annotated[TimelineService, Depends(get_timeline_service)],
):
    """
    Partially update a timeline item.

    Only fields present in the body change. `images` replaces the whole
    list; `views.zhl` and `views.yxh` are merged independently.
    """
    item = await service.update_item(item_id, data.to_patch())
    return item.to_dict()


@router.delete("/{item_id}", response_model=ItemResponse, response_model_exclude_none=True)
async def delete_item(
    item_id: str,
    service: Annotated[TimelineService, Depends(get_timeline_service)],
):
    """Delete a timeline item and return it"""
    item = await service.delete_item(item_id)
    return item.to_dict()
