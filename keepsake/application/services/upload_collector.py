"""Garbage collection of uploads no timeline item references."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from keepsake.domain.entities import upload_uri
from keepsake.infrastructure.exceptions import StorageException

if TYPE_CHECKING:
    from keepsake.application.interfaces.repositories import \
        ITimelineRepository
    from keepsake.application.interfaces.storage import IUploadStorage

logger = logging.getLogger(__name__)


class UploadGarbageCollector:
    """
    Mark-and-sweep of the upload directory against the live document.

    A document file that exists but cannot be parsed cancels the pass.

    Mark: every URI in any item's `images`, plus the legacy `image`.
    Sweep: every regular file whose `/uploads/<name>` URI is unmarked is
    deleted. The reference set only lives for one pass.

    The pass holds the document lock, so no item save can land between
    the mark and the sweep.
    """

    def __init__(self, repository: ITimelineRepository, storage: IUploadStorage) -> None:
        self.repository = repository
        self.storage = storage

    async def collect(self) -> int:
        """
        Run one collection pass.

        Returns:
            int: Number of files deleted. An unreadable or malformed document
            and a directory that cannot be listed both count as 0; a file that
            cannot be deleted is logged and skipped. A missing document is the
            empty timeline, so every upload is swept.
        """
        async with self.repository.lock:
            result = await self.repository.load()
            if result.error is not None:
                logger.warning(
                    f"Skipping upload cleanup, timeline document unreadable: {result.error}"
                )
                return 0
            referenced = result.document.referenced_uris()

            try:
                filenames = await self.storage.list_files()
            except StorageException as e:
                logger.error(f"Failed to clean up uploads: {e}")
                return 0

            deleted = 0
            for filename in filenames:
                if upload_uri(filename) in referenced:
                    continue
                try:
                    if await self.storage.delete(filename):
                        deleted += 1
                        logger.info(f"Removed unused upload: {filename}")
                except StorageException as e:
                    logger.error(f"Failed to remove unused upload {filename}: {e}")

        if deleted:
            logger.info(f"Cleaned up {deleted} unused upload(s)")
        return deleted
