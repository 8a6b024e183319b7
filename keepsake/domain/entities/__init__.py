"""Domain entities."""

from keepsake.domain.entities.timeline import (MAX_IMAGES, UPLOAD_URI_PREFIX,
                                               TimelineDocument, TimelineItem,
                                               TimelineViews, clamp_images,
                                               upload_uri)

__all__ = [
    "MAX_IMAGES",
    "UPLOAD_URI_PREFIX",
    "TimelineDocument",
    "TimelineItem",
    "TimelineViews",
    "clamp_images",
    "upload_uri",
]
