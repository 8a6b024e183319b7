"""
Timeline domain entities.

These represent the business concepts of the timeline document and its
items, independent of how the document is serialized to disk.
"""

from dataclasses import dataclass, field
from typing import Any

MAX_IMAGES = 9
UPLOAD_URI_PREFIX = "/uploads/"

_ITEM_KEYS = {"id", "date", "title", "images", "views", "image"}
_DOCUMENT_KEYS = {"startDate", "items"}


def clamp_images(images: list[str]) -> list[str]:
    """Keep at most the first MAX_IMAGES image references."""
    return list(images[:MAX_IMAGES])


def upload_uri(filename: str) -> str:
    """Public URI under which an uploaded file is referenced."""
    return f"{UPLOAD_URI_PREFIX}{filename}"


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class TimelineViews:
    """The two free-text viewpoints attached to an item."""

    zhl: str = ""
    yxh: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "TimelineViews":
        if not isinstance(data, dict):
            return cls()
        return cls(zhl=_as_text(data.get("zhl")), yxh=_as_text(data.get("yxh")))

    def to_dict(self) -> dict[str, str]:
        return {"zhl": self.zhl, "yxh": self.yxh}


@dataclass
class TimelineItem:
    """
    Domain entity for one dated timeline entry.

    `image` is the legacy single-image field. It is kept as stored and
    never folded into `images`. Keys this entity does not know about are
    kept in `extra` so they survive a save.
    """

    id: str
    date: str
    title: str
    images: list[str] = field(default_factory=list)
    views: TimelineViews = field(default_factory=TimelineViews)
    image: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.images = clamp_images(self.images)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimelineItem":
        raw_images = data.get("images")
        images = (
            [img for img in raw_images if isinstance(img, str)]
            if isinstance(raw_images, list)
            else []
        )
        legacy = data.get("image")
        return cls(
            id=_as_text(data.get("id")),
            date=_as_text(data.get("date")),
            title=_as_text(data.get("title")),
            images=images,
            views=TimelineViews.from_dict(data.get("views")),
            image=legacy if isinstance(legacy, str) and legacy else None,
            extra={k: v for k, v in data.items() if k not in _ITEM_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "date": self.date,
                "title": self.title,
                "images": list(self.images),
                "views": self.views.to_dict(),
            }
        )
        if self.image is not None:
            data["image"] = self.image
        return data

    def referenced_uris(self) -> list[str]:
        """Every upload URI this item points at, legacy field included."""
        uris = list(self.images)
        if self.image:
            uris.append(self.image)
        return uris


@dataclass
class TimelineDocument:
    """The single persisted object: start date plus ordered items."""

    start_date: str
    items: list[TimelineItem] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def default(cls, start_date: str) -> "TimelineDocument":
        return cls(start_date=start_date)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_start_date: str) -> "TimelineDocument":
        """
        Build a document from parsed JSON.

        Raises:
            ValueError: If `items` is not a list of objects
        """
        raw_items = data.get("items")
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise ValueError("'items' must be a list")
        if not all(isinstance(item, dict) for item in raw_items):
            raise ValueError("every entry in 'items' must be an object")

        start_date = data.get("startDate")
        return cls(
            start_date=start_date if isinstance(start_date, str) and start_date else default_start_date,
            items=[TimelineItem.from_dict(item) for item in raw_items],
            extra={k: v for k, v in data.items() if k not in _DOCUMENT_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data["startDate"] = self.start_date
        data["items"] = [item.to_dict() for item in self.items]
        return data

    def item_ids(self) -> set[str]:
        return {item.id for item in self.items if item.id}

    def find_index(self, item_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None

    def referenced_uris(self) -> set[str]:
        """Set of upload URIs referenced by any item."""
        uris: set[str] = set()
        for item in self.items:
            uris.update(item.referenced_uris())
        return uris
