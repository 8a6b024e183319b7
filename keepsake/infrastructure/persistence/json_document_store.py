"""
File-backed repository for the timeline document.

The whole document is read on every load and replaced on every save.
There is no in-memory cache between operations; callers load, mutate
the returned copy, then save it back while holding `lock`.

Loading never raises: a missing or unreadable file yields the default
document with status RECOVERED.
"""

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import aiofiles

from keepsake.domain.entities import TimelineDocument
from keepsake.domain.enums import LoadStatus
from keepsake.infrastructure.exceptions import DocumentSaveError
from keepsake.shared.utils.generators import (current_time_millis,
                                              generate_backfill_id)

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"


@dataclass(frozen=True)
class DocumentLoadResult:
    """
    Loaded document plus how it was obtained.

    `error` is set when a document file exists but could not be read or
    parsed; it stays None for a missing file.
    """

    document: TimelineDocument
    status: LoadStatus
    backfilled_ids: int = 0
    error: str | None = None

    @property
    def recovered(self) -> bool:
        return self.status is LoadStatus.RECOVERED


class JsonTimelineRepository:
    """
    Timeline document stored as a single JSON file.

    Persistence:
    - UTF-8 JSON, 2-space indent, leading BOM tolerated on read
    - Atomic writes via temp file + os.replace in the same directory
    - Items missing an id (or repeating an earlier id) get
      `item-<index>-<millis>` on load and the document is re-saved
    """

    def __init__(
        self,
        data_path: str | Path,
        default_start_date: str = "2022-12-25",
        clock: Callable[[], int] = current_time_millis,
    ) -> None:
        """
        Initialize repository.

        Args:
            data_path: Path of the JSON document
            default_start_date: startDate of the document served when loading fails
            clock: Millisecond clock used for backfilled ids
        """
        self.data_path = Path(data_path)
        self.default_start_date = default_start_date
        self.clock = clock

        # Guards every load-mutate-save sequence on this document
        self.lock = asyncio.Lock()

    def _recovered(self, error: str | None = None) -> DocumentLoadResult:
        return DocumentLoadResult(
            document=TimelineDocument.default(self.default_start_date),
            status=LoadStatus.RECOVERED,
            error=error,
        )

    async def load(self) -> DocumentLoadResult:
        """
        Read and parse the document.

        Returns:
            DocumentLoadResult: LOADED with the parsed document, or
            RECOVERED with the default document if the file is missing,
            unreadable or malformed
        """
        try:
            async with aiofiles.open(self.data_path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.info(f"Timeline document {self.data_path} not found, using default")
            return self._recovered()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read timeline document {self.data_path}: {e}")
            return self._recovered(str(e))

        try:
            parsed = json.loads(raw.removeprefix(BYTE_ORDER_MARK))
            if not isinstance(parsed, dict):
                raise ValueError("top-level value must be an object")
            document = TimelineDocument.from_dict(parsed, self.default_start_date)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            logger.error(f"Failed to load timeline data from {self.data_path}: {e}")
            return self._recovered(str(e) or type(e).__name__)

        backfilled = self._backfill_ids(document)
        if backfilled:
            logger.info(f"Assigned ids to {backfilled} timeline item(s)")
            try:
                await self.save(document)
            except DocumentSaveError as e:
                logger.error(f"Could not persist backfilled ids: {e}")

        return DocumentLoadResult(
            document=document,
            status=LoadStatus.LOADED,
            backfilled_ids=backfilled,
        )

    def _backfill_ids(self, document: TimelineDocument) -> int:
        """Give every item without a unique id a fresh one. Returns the count."""
        taken: set[str] = set()
        pending: list[int] = []
        for index, item in enumerate(document.items):
            if item.id and item.id not in taken:
                taken.add(item.id)
            else:
                pending.append(index)

        if not pending:
            return 0

        now_ms = self.clock()
        for index in pending:
            new_id = generate_backfill_id(index, taken, now_ms)
            document.items[index].id = new_id
            taken.add(new_id)
        return len(pending)

    async def save(self, document: TimelineDocument) -> None:
        """
        Replace the document file with `document`.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        payload = json.dumps(document.to_dict(), ensure_ascii=False, indent=2)

        try:
            self.data_path.parent.mkdir(parents=True, exist_ok=True)

            # Write to temp file first (atomic write pattern)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.data_path.parent, prefix=".tmp_", suffix=".json"
            )
            os.close(temp_fd)

            try:
                async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                    await f.write(payload)

                os.replace(temp_path, self.data_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)

        except OSError as e:
            logger.error(f"Failed to save timeline document {self.data_path}: {e}")
            raise DocumentSaveError(str(self.data_path), str(e)) from e
