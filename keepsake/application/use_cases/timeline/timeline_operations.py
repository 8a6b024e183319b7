"""
Timeline operations use case.

CRUD over the items of the timeline document plus the start date.
Every operation loads the whole document, mutates it and saves it back
while holding the repository lock, so concurrent requests in this
process never overwrite each other's changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from keepsake.domain.entities import (TimelineItem, TimelineViews,
                                      clamp_images)
from keepsake.domain.exceptions import (ResourceNotFoundException,
                                        ValidationException)
from keepsake.shared.utils.generators import (current_time_millis,
                                              generate_item_id)

if TYPE_CHECKING:
    from keepsake.application.interfaces.repositories import \
        ITimelineRepository
    from keepsake.domain.entities import TimelineDocument

logger = logging.getLogger(__name__)


def _require_text(value: Any, field: str, message: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationException(message, field=field)
    return value


def _view_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class TimelineService:
    """
    Orchestrates reads and mutations of the timeline document.

    Responsibilities:
    - Validate required fields (title, date, startDate)
    - Assign collision-free item ids
    - Enforce the MAX_IMAGES bound on every write
    - Apply partial updates field by field
    """

    def __init__(
        self,
        repository: ITimelineRepository,
        clock: Callable[[], int] = current_time_millis,
    ) -> None:
        self.repository = repository
        self.clock = clock

    async def get_document(self) -> TimelineDocument:
        """Current document; never fails, degrades to the default document"""
        async with self.repository.lock:
            result = await self.repository.load()
        return result.document

    async def create_item(
        self,
        title: str | None,
        date: str | None,
        images: list[str] | None = None,
        views: Mapping[str, Any] | None = None,
    ) -> TimelineItem:
        """
        Append a new item to the timeline.

        Args:
            title: Required, non-empty
            date: Required, non-empty
            images: Image URIs, truncated to the first MAX_IMAGES
            views: Optional `zhl`/`yxh` texts, each defaulting to ""

        Returns:
            TimelineItem: The created item

        Raises:
            ValidationException: If title or date is missing
            DocumentSaveError: If the document cannot be written
        """
        message = "title, date are required"
        _require_text(title, "title", message)
        _require_text(date, "date", message)

        views = views or {}
        async with self.repository.lock:
            document = (await self.repository.load()).document
            item = TimelineItem(
                id=generate_item_id(document.item_ids(), self.clock()),
                date=date,
                title=title,
                images=clamp_images(list(images or [])),
                views=TimelineViews(
                    zhl=_view_text(views.get("zhl")),
                    yxh=_view_text(views.get("yxh")),
                ),
            )
            document.items.append(item)
            await self.repository.save(document)

        logger.info(f"Created timeline item {item.id}")
        return item

    async def update_item(self, item_id: str, patch: Mapping[str, Any]) -> TimelineItem:
        """
        Apply a partial update to an item.

        Only keys present in `patch` (with a non-null value) are applied:
        - title/date: replaced; an empty string is rejected
        - images: truncated to MAX_IMAGES and replaces the prior list
        - views: `zhl` and `yxh` merged independently
        Fields not mentioned, including legacy `image` and unknown keys,
        keep their stored values.

        Raises:
            ResourceNotFoundException: If no item has this id
            ValidationException: If title or date is supplied empty
            DocumentSaveError: If the document cannot be written
        """
        title = patch.get("title")
        date = patch.get("date")
        if title is not None:
            _require_text(title, "title", "title must not be empty")
        if date is not None:
            _require_text(date, "date", "date must not be empty")

        async with self.repository.lock:
            document = (await self.repository.load()).document
            index = document.find_index(item_id)
            if index is None:
                raise ResourceNotFoundException("Item", item_id)

            item = document.items[index]
            if title is not None:
                item.title = title
            if date is not None:
                item.date = date
            if patch.get("images") is not None:
                item.images = clamp_images(list(patch["images"]))

            views = patch.get("views")
            if isinstance(views, Mapping):
                if "zhl" in views:
                    item.views.zhl = _view_text(views["zhl"])
                if "yxh" in views:
                    item.views.yxh = _view_text(views["yxh"])

            await self.repository.save(document)

        logger.info(f"Updated timeline item {item_id}")
        return item

    async def delete_item(self, item_id: str) -> TimelineItem:
        """
        Remove an item, preserving the order of the rest.

        Returns:
            TimelineItem: The removed item

        Raises:
            ResourceNotFoundException: If no item has this id
        """
        async with self.repository.lock:
            document = (await self.repository.load()).document
            index = document.find_index(item_id)
            if index is None:
                raise ResourceNotFoundException("Item", item_id)

            removed = document.items.pop(index)
            await self.repository.save(document)

        logger.info(f"Deleted timeline item {item_id}")
        return removed

    async def set_start_date(self, value: str | None) -> str:
        """
        Replace the timeline start date.

        Raises:
            ValidationException: If value is empty
        """
        start_date = _require_text(value, "startDate", "startDate is required")

        async with self.repository.lock:
            document = (await self.repository.load()).document
            document.start_date = start_date
            await self.repository.save(document)

        return start_date
