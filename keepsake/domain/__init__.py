"""
Domain layer - Enterprise Business Rules.

This is the innermost layer containing business entities, enums
and domain exceptions. It has no dependencies on other layers.
"""

from keepsake.domain.entities import (MAX_IMAGES, TimelineDocument,
                                      TimelineItem, TimelineViews)
from keepsake.domain.enums import LoadStatus, StaticBase
from keepsake.domain.exceptions import (KeepsakeException,
                                        ResourceNotFoundException,
                                        ValidationException)

__all__ = [
    # Entities
    "MAX_IMAGES",
    "TimelineDocument",
    "TimelineItem",
    "TimelineViews",
    # Enums
    "LoadStatus",
    "StaticBase",
    # Exceptions
    "KeepsakeException",
    "ValidationException",
    "ResourceNotFoundException",
]
