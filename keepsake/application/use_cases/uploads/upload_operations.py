"""
Upload operations use case.

Stores base64 data-URL uploads and lists the upload directory. Listing
runs a garbage-collection pass first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from keepsake.domain.exceptions import ValidationException
from keepsake.shared.utils.sanitization import (decode_data_url,
                                               sanitize_extension)

if TYPE_CHECKING:
    from keepsake.application.interfaces.storage import IUploadStorage
    from keepsake.application.services.upload_collector import \
        UploadGarbageCollector

logger = logging.getLogger(__name__)


@dataclass
class UploadListing:
    """Uploads left after a collection pass."""

    files: list[str] = field(default_factory=list)
    cleaned: int = 0


class UploadService:
    """
    Orchestrates upload storage and cleanup.

    Responsibilities:
    - Validate and decode data-URL payloads
    - Derive a safe extension from the client filename
    - Enforce the decoded size limit
    - Trigger garbage collection when the listing is read
    """

    def __init__(
        self,
        storage: IUploadStorage,
        collector: UploadGarbageCollector,
        max_upload_size: int = 10 * 1024 * 1024,
    ) -> None:
        self.storage = storage
        self.collector = collector
        self.max_upload_size = max_upload_size

    async def store_upload(self, filename: str | None, data_url: str | None) -> str:
        """
        Decode and store an uploaded image.

        Args:
            filename: Client filename; only its extension is used
            data_url: "data:<mime>;base64,<payload>"

        Returns:
            str: Public URI of the stored file

        Raises:
            ValidationException: If an input is missing, the payload is not
                a base64 data URL, or the decoded file is too large
            StorageUploadError: If the file cannot be written
        """
        if not filename or not data_url:
            raise ValidationException("filename and dataUrl are required")

        try:
            _, content = decode_data_url(data_url)
        except ValueError as e:
            raise ValidationException(str(e), field="dataUrl") from e

        if len(content) > self.max_upload_size:
            raise ValidationException(
                f"File size {len(content)} bytes exceeds maximum allowed size "
                f"of {self.max_upload_size} bytes",
                field="dataUrl",
            )

        return await self.storage.store(content, sanitize_extension(filename))

    async def list_uploads(self) -> UploadListing:
        """
        List uploads after deleting every file no item references.

        The collection pass is a deliberate side effect of this read; it
        is the only trigger for cleanup.

        Raises:
            StorageListError: If the upload directory cannot be read
        """
        cleaned = await self.collector.collect()
        files = await self.storage.list_uris()
        return UploadListing(files=files, cleaned=cleaned)
