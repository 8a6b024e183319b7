from pydantic import BaseModel


class UploadCreate(BaseModel):
    """Schema for a base64 data-URL upload"""

    filename: str | None = None
    dataUrl: str | None = None


class UploadResponse(BaseModel):
    url: str


class UploadListResponse(BaseModel):
    """Uploads remaining after the cleanup pass, and how many were removed"""

    files: list[str]
    cleaned: int
