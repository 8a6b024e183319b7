"""Timeline start date API endpoint"""

from typing import Annotated

from fastapi import APIRouter, Depends

from keepsake.application.use_cases.timeline.timeline_operations import \
    TimelineService
from keepsake.presentation.api.dependencies import get_timeline_service
from keepsake.presentation.api.v1.schemas.timeline import (StartDateResponse,
                                                           StartDateUpdate)

router = APIRouter()


@router.put("", response_model=StartDateResponse)
async def set_start_date(
    data: StartDateUpdate,
    service: Annotated[TimelineService, Depends(get_timeline_service)],
):
    """Replace the date the timeline counts from"""
    start_date = await service.set_start_date(data.startDate)
    return StartDateResponse(startDate=start_date)
