from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ViewsPayload(BaseModel):
    """Viewpoint texts; omitted keys are left untouched on update"""

    zhl: str | None = None
    yxh: str | None = None


class ItemCreate(BaseModel):
    """Schema for creating a timeline item.

    title and date are optional here so that a missing value is reported
    by the service as a validation error rather than a schema error.
    """

    title: str | None = None
    date: str | None = None
    images: list[str] | None = None
    views: ViewsPayload | None = None


class ItemUpdate(BaseModel):
    """Schema for partially updating a timeline item"""

    title: str | None = None
    date: str | None = None
    images: list[str] | None = None
    views: ViewsPayload | None = None

    def to_patch(self) -> dict[str, Any]:
        """Only the fields the client actually sent"""
        return self.model_dump(exclude_unset=True)


class ViewsResponse(BaseModel):
    zhl: str = ""
    yxh: str = ""


class ItemResponse(BaseModel):
    """Schema for timeline item responses (legacy and unknown keys pass through)"""

    id: str
    date: str
    title: str
    images: list[str] = Field(default_factory=list)
    views: ViewsResponse = Field(default_factory=ViewsResponse)
    image: str | None = None

    model_config = ConfigDict(extra="allow")


class TimelineResponse(BaseModel):
    """Schema for the whole timeline document"""

    startDate: str
    items: list[ItemResponse]

    model_config = ConfigDict(extra="allow")


class StartDateUpdate(BaseModel):
    startDate: str | None = None


class StartDateResponse(BaseModel):
    startDate: str
